from __future__ import annotations

import datetime as dt
import html
import re
import shutil
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import markdown

from .errors import TemplateNotFound, TemplateSyntaxError
from .helpers import BLOCK_HELPERS, INLINE_HELPERS, custom_color_styles

TAG_RE = re.compile(
    r"\{\{!--.*?--\}\}"
    r"|\{\{!.*?\}\}"
    r"|\{\{\{\s*(?P<raw>.*?)\s*\}\}\}"
    r"|\{\{\s*(?P<tag>.*?)\s*\}\}",
    re.DOTALL,
)
ARG_RE = re.compile(r'"(?P<dq>[^"]*)"|\'(?P<sq>[^\']*)\'|(?P<word>\S+)')
NUMBER_RE = re.compile(r"^-?\d+(?:\.\d+)?$")
LITERALS = {"true": True, "false": False, "null": None, "undefined": None}


@dataclass
class Literal:
    value: Any

    def evaluate(self, scope: Scope) -> Any:
        return self.value


@dataclass
class PathExpr:
    path: str

    def evaluate(self, scope: Scope) -> Any:
        return scope.lookup(self.path)


@dataclass
class Text:
    value: str


@dataclass
class Output:
    expr: Any
    raw: bool
    helper: str = ""
    args: list = field(default_factory=list)


@dataclass
class Block:
    name: str
    expr: Any
    line: int
    body: list = field(default_factory=list)
    inverse: list = field(default_factory=list)
    in_inverse: bool = False

    def add(self, node: Any) -> None:
        (self.inverse if self.in_inverse else self.body).append(node)


class Scope:
    def __init__(self, value: Any, parent: Scope | None = None, data: dict | None = None):
        self.value = value
        self.parent = parent
        self.data = data or {}
        self.root = parent.root if parent is not None else value

    def child(self, value: Any, data: dict | None = None) -> Scope:
        return Scope(value, self, data)

    def lookup_data(self, name: str) -> Any:
        scope: Scope | None = self
        while scope is not None:
            if name in scope.data:
                return scope.data[name]
            scope = scope.parent
        return None

    def lookup(self, path: str) -> Any:
        if path.startswith("@"):
            name, _, rest = path[1:].partition(".")
            value = self.root if name == "root" else self.lookup_data(name)
            return resolve_segments(value, rest)
        scope: Scope = self
        while path.startswith("../"):
            path = path[3:]
            if scope.parent is not None:
                scope = scope.parent
        if path in {"this", "."}:
            return scope.value
        for prefix in ("this.", "this/", "./"):
            if path.startswith(prefix):
                path = path[len(prefix):]
                break
        return resolve_segments(scope.value, path)


def resolve_segments(value: Any, path: str) -> Any:
    if not path:
        return value
    for segment in re.split(r"[./]", path):
        if value is None:
            return None
        if isinstance(value, dict):
            value = value.get(segment)
        elif isinstance(value, (list, tuple, str)):
            if segment == "length":
                value = len(value)
            elif segment.isdigit() and int(segment) < len(value):
                value = value[int(segment)]
            else:
                return None
        else:
            return None
    return value


def to_text(value: Any) -> str:
    if value is None:
        return ""
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(to_text(item) for item in value)
    if isinstance(value, dict):
        return "[object Object]"
    return str(value)


def parse_arg(token: re.Match) -> Any:
    if token.group("dq") is not None:
        return Literal(token.group("dq"))
    if token.group("sq") is not None:
        return Literal(token.group("sq"))
    word = token.group("word")
    if word in LITERALS:
        return Literal(LITERALS[word])
    if NUMBER_RE.match(word):
        return Literal(float(word) if "." in word else int(word))
    return PathExpr(word)


def parse_output(body: str, raw: bool, line: int) -> Output:
    tokens = list(ARG_RE.finditer(body))
    if not tokens:
        raise TemplateSyntaxError(f"Empty expression on line {line}")
    first = tokens[0].group("word")
    if first in INLINE_HELPERS:
        return Output(None, raw, helper=first, args=[parse_arg(t) for t in tokens[1:]])
    if len(tokens) > 1:
        raise TemplateSyntaxError(f"Unknown helper '{first}' on line {line}")
    return Output(parse_arg(tokens[0]), raw)


def compile_template(source: str) -> list:
    root: list = []
    stack: list[Block] = []

    def emit(node: Any) -> None:
        if stack:
            stack[-1].add(node)
        else:
            root.append(node)

    pos = 0
    for match in TAG_RE.finditer(source):
        if match.start() > pos:
            emit(Text(source[pos:match.start()]))
        pos = match.end()
        line = source.count("\n", 0, match.start()) + 1
        if match.group("raw") is not None:
            emit(parse_output(match.group("raw"), True, line))
            continue
        tag = match.group("tag")
        if tag is None:
            continue
        if tag.startswith("#"):
            name, _, rest = tag[1:].partition(" ")
            if name not in BLOCK_HELPERS:
                raise TemplateSyntaxError(f"Unknown block helper '{name}' on line {line}")
            args = [parse_arg(t) for t in ARG_RE.finditer(rest)]
            if len(args) != 1:
                raise TemplateSyntaxError(f"'{{{{#{name}}}}}' takes exactly one argument (line {line})")
            block = Block(name, args[0], line)
            emit(block)
            stack.append(block)
        elif tag.startswith("/"):
            name = tag[1:].strip()
            if not stack or stack[-1].name != name:
                raise TemplateSyntaxError(f"Unexpected '{{{{/{name}}}}}' on line {line}")
            stack.pop()
        elif tag == "else":
            if not stack or stack[-1].in_inverse:
                raise TemplateSyntaxError(f"Unexpected '{{{{else}}}}' on line {line}")
            stack[-1].in_inverse = True
        else:
            emit(parse_output(tag, False, line))
    if pos < len(source):
        emit(Text(source[pos:]))
    if stack:
        block = stack[-1]
        raise TemplateSyntaxError(f"Unclosed '{{{{#{block.name}}}}}' opened on line {block.line}")
    return root


def render_nodes(nodes: list, scope: Scope) -> str:
    parts = []
    for node in nodes:
        if isinstance(node, Text):
            parts.append(node.value)
        elif isinstance(node, Output):
            if node.helper:
                value = INLINE_HELPERS[node.helper](*[arg.evaluate(scope) for arg in node.args])
            else:
                value = node.expr.evaluate(scope)
            text = to_text(value)
            parts.append(text if node.raw else html.escape(text))
        else:
            helper = BLOCK_HELPERS[node.name]
            parts.append(
                helper(
                    node.expr.evaluate(scope),
                    scope,
                    lambda s, n=node: render_nodes(n.body, s),
                    lambda s, n=node: render_nodes(n.inverse, s),
                )
            )
    return "".join(parts)


def render_template(template: str, context: dict) -> str:
    return render_nodes(compile_template(template), Scope(context))


def build_render_context(config: dict, now: dt.datetime | None = None) -> dict:
    now = now or dt.datetime.now()
    context = dict(config)
    settings = config.get("settings") or {}
    about = (config.get("summary") or {}).get("about")
    context["currentYear"] = now.year
    context["customColorStyles"] = custom_color_styles(settings.get("colors"))
    context["aboutHtml"] = markdown.markdown(about) if isinstance(about, str) and about.strip() else ""
    return context


def read_template(path: Path) -> str:
    if not path.is_file():
        raise TemplateNotFound(path)
    return path.read_text(encoding="utf-8")


def write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def copy_directory(src: Path, dest: Path) -> bool:
    if not src.is_dir():
        print(f"Warning: Source directory not found: {src}", file=sys.stderr)
        return False
    dest.mkdir(parents=True, exist_ok=True)
    shutil.copytree(src, dest, dirs_exist_ok=True)
    return True
