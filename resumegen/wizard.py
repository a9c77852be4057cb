from __future__ import annotations

import json
import shutil
from pathlib import Path
from typing import Callable

from .helpers import DEFAULT_COLORS
from .pages import PLACEHOLDER_URL

SECTIONS_ENABLED = {
    "professionalSummary": True,
    "about": False,
    "skills": True,
    "projects": True,
    "articles": False,
    "testimonials": False,
    "certifications": False,
}


def backup_path(config_path: Path) -> Path:
    return config_path.with_name(f"{config_path.stem}.backup{config_path.suffix}")


def make_config(answers: dict) -> dict:
    full_name = answers.get("fullName") or "Your Name"
    title = answers.get("title") or "Your Title"
    summary = answers.get("professional") or ""
    return {
        "personal": {
            "fullName": full_name,
            "title": title,
            "email": answers.get("email") or "your.email@example.com",
            "phone": answers.get("phone") or "(555) 123-4567",
            "location": {"primary": answers.get("location") or "Your City, State", "secondary": ""},
            "profileImage": "images/profile.svg",
            "social": {
                "linkedin": answers.get("linkedin") or "",
                "github": answers.get("github") or "",
                "twitter": answers.get("twitter") or "",
                "website": answers.get("website") or "",
            },
        },
        "summary": {
            "professional": summary or "Add your professional summary here.",
            "about": "",
        },
        "experience": [],
        "education": [],
        "skills": {"categories": [], "detailed": []},
        "certifications": [],
        "projects": [],
        "articles": [],
        "testimonials": [],
        "settings": {
            "theme": "default",
            "sectionsEnabled": dict(SECTIONS_ENABLED),
            "colors": {
                "primary": answers.get("primaryColor") or DEFAULT_COLORS["primary"],
                "secondary": DEFAULT_COLORS["secondary"],
                "accent": DEFAULT_COLORS["accent"],
            },
            "seo": {
                "title": f"{full_name} - {title}",
                "description": summary or "Professional resume and portfolio",
                "keywords": ["resume", "portfolio", "developer"],
                "canonicalUrl": answers.get("siteUrl") or PLACEHOLDER_URL,
            },
        },
    }


def save_config(config_path: Path, config: dict) -> Path | None:
    backup = None
    if config_path.exists():
        backup = backup_path(config_path)
        shutil.copy2(config_path, backup)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(config, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return backup


def run_wizard(config_path: Path, ask: Callable[[str], str] | None = None) -> dict:
    ask = ask or input

    def prompt(question: str) -> str:
        return ask(question).strip()

    print("Resume Website Builder - Setup")
    print("This wizard will help you configure your resume website.\n")
    print("Basic information:")
    answers = {
        "fullName": prompt("What is your full name? "),
        "title": prompt('What is your professional title? (e.g., "Senior Software Engineer") '),
        "email": prompt("What is your email address? "),
        "phone": prompt("What is your phone number? "),
        "location": prompt('What is your location? (e.g., "San Francisco, CA") '),
    }
    print("\nSocial media links (press Enter to skip):")
    answers["linkedin"] = prompt("LinkedIn URL: ")
    answers["github"] = prompt("GitHub URL: ")
    answers["twitter"] = prompt("Twitter URL: ")
    answers["website"] = prompt("Personal website URL: ")
    print("\nCustomization:")
    answers["primaryColor"] = prompt(f"Primary color (hex code, default: {DEFAULT_COLORS['primary']}): ")
    answers["siteUrl"] = prompt("Website URL (e.g., https://yourusername.github.io): ")
    print("\nSummary:")
    answers["professional"] = prompt("Professional summary (1-2 sentences): ")

    config = make_config(answers)
    backup = save_config(config_path, config)
    if backup is not None:
        print(f"  Backup created: {backup}")
    print(f"  Configuration saved: {config_path}")
    print("\nNext steps:")
    print(f"  1. Edit {config_path} to add your experience, education, skills and projects")
    print("  2. Add your profile photo to src/images/")
    print("  3. Run 'resumegen build' to generate your website")
    print("  4. Run 'resumegen dev' to rebuild automatically while editing")
    return config
