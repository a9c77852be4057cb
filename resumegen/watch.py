"""Development mode: rebuild the site whenever its inputs change.

Change events are debounced: every event restarts a single timer and the
build runs only once the timer expires. A timer that expires while a build is
running sets a pending flag instead of starting a second build, and the
pending build runs as soon as the current one finishes. At most one rebuild
is ever queued because a rebuild always reads the latest inputs.
"""

from __future__ import annotations

import datetime as dt
import enum
import fnmatch
import functools
import sys
import threading
from pathlib import Path
from typing import Callable, Optional

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

IGNORED_DIRS = {".git", ".hg", ".svn", "node_modules", "__pycache__", ".venv", "venv", ".pytest_cache"}
IGNORED_FILES = {".DS_Store", "Thumbs.db", "desktop.ini"}
IGNORED_PATTERNS = ("*.swp", "*.swo", "*.swx", "*.tmp", "*~", ".#*", "#*#")
WATCHED_EVENTS = {EVENT_TYPE_CREATED, EVENT_TYPE_DELETED, EVENT_TYPE_MODIFIED, EVENT_TYPE_MOVED}


class WatchState(enum.Enum):
    IDLE = "idle"
    DEBOUNCING = "debouncing"
    BUILDING = "building"


def should_ignore(path: str | Path, output_dir: Optional[Path] = None) -> bool:
    path = Path(path)
    if output_dir is not None:
        try:
            path.resolve().relative_to(output_dir.resolve())
            return True
        except ValueError:
            pass
    if any(part in IGNORED_DIRS for part in path.parts):
        return True
    if path.name in IGNORED_FILES:
        return True
    return any(fnmatch.fnmatch(path.name, pattern) for pattern in IGNORED_PATTERNS)


def _report_failure(exc: Exception) -> None:
    print(f"Rebuild failed: {exc}", file=sys.stderr)


def _timestamp() -> str:
    return dt.datetime.now().strftime("%H:%M:%S")


class RebuildScheduler:
    def __init__(
        self,
        build: Callable[[], object],
        delay: float = 0.5,
        output_dir: Optional[Path] = None,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
        on_error: Callable[[Exception], None] = _report_failure,
    ):
        self._build = build
        self.delay = delay
        self.output_dir = output_dir
        self._timer_factory = timer_factory
        self._on_error = on_error
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._generation = 0
        self._pending = False
        self.state = WatchState.IDLE
        self.last_path = ""

    @property
    def pending(self) -> bool:
        return self._pending

    def notify(self, path: str | Path) -> bool:
        if should_ignore(path, self.output_dir):
            return False
        with self._lock:
            self.last_path = str(path)
            if self._timer is not None:
                self._timer.cancel()
            self._generation += 1
            self._timer = self._timer_factory(self.delay, functools.partial(self._expire, self._generation))
            self._timer.daemon = True
            if self.state is not WatchState.BUILDING:
                self.state = WatchState.DEBOUNCING
            self._timer.start()
        return True

    def _expire(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self._timer = None
            if self.state is WatchState.BUILDING:
                self._pending = True
                return
            self.state = WatchState.BUILDING
        print(f"\n[{_timestamp()}] File changed: {self.last_path}")
        print("Rebuilding...")
        self._run()

    def run_now(self) -> None:
        with self._lock:
            if self.state is WatchState.BUILDING:
                self._pending = True
                return
            self.state = WatchState.BUILDING
        self._run()

    def _run(self) -> None:
        while True:
            try:
                self._build()
            except Exception as exc:
                self._on_error(exc)
            else:
                print(f"Rebuild complete at {_timestamp()}")
            with self._lock:
                if self._pending:
                    self._pending = False
                    continue
                self.state = WatchState.DEBOUNCING if self._timer is not None else WatchState.IDLE
                return

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._generation += 1
            self._pending = False
            if self.state is WatchState.DEBOUNCING:
                self.state = WatchState.IDLE


class RebuildHandler(FileSystemEventHandler):
    def __init__(self, scheduler: RebuildScheduler):
        self.scheduler = scheduler

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory or event.event_type not in WATCHED_EVENTS:
            return
        path = getattr(event, "dest_path", "") or event.src_path
        if isinstance(path, bytes):
            path = path.decode("utf-8", errors="replace")
        self.scheduler.notify(path)


def run_dev(build: Callable[[], object], watch_paths: list[Path], output_dir: Path, delay: float = 0.5) -> int:
    print("Starting development server...")
    print("Running initial build...")
    scheduler = RebuildScheduler(build, delay=delay, output_dir=output_dir)
    observer = Observer()
    started = False
    try:
        scheduler.run_now()
        handler = RebuildHandler(scheduler)
        print("Watching directories:")
        for path in watch_paths:
            if path.exists():
                observer.schedule(handler, str(path), recursive=True)
                print(f"  - {path}")
        observer.start()
        started = True
        print(f"Open {output_dir / 'index.html'} in your browser to view the site.")
        print("Press Ctrl+C to stop.")
        while observer.is_alive():
            observer.join(1)
    except KeyboardInterrupt:
        print("\nStopping dev server...")
        print("Goodbye!")
    finally:
        scheduler.cancel()
        if started:
            observer.stop()
            observer.join()
    return 0
