"""
Diagnostic logger for fsutils.

Every operation can report what it did, or why it failed, to an optional
sink. Entries are plain dataclasses serialized one JSON object per line.
Output below the configured level is dropped, and a logger without a level
produces nothing at all.
"""

import json
import sys
import threading
from dataclasses import dataclass, asdict, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional, Dict, Any, Sequence

from rich.console import Console
from rich.markup import escape


class Level(Enum):
    """Severity of a diagnostic entry, ordered by value."""
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40

    @classmethod
    def parse(cls, name: Optional[str]) -> Optional["Level"]:
        """
        Parse a level name such as "info" or "warning".

        Returns None for "off", empty, or missing values.

        Raises:
            ValueError: If the name is not a known level
        """
        if name is None:
            return None
        key = str(name).strip().upper()
        if key in ("", "OFF", "NONE"):
            return None
        if key == "WARNING":
            key = "WARN"
        try:
            return cls[key]
        except KeyError:
            raise ValueError(f"Unknown log level: {name}")


@dataclass
class DiagnosticEntry:
    """A single diagnostic line."""
    timestamp: str
    level: str
    operation: str
    paths: List[str]
    message: str
    error: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        level: Level,
        operation: str,
        message: str,
        paths: Sequence[str] = (),
        error: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> "DiagnosticEntry":
        """Factory method to create an entry with the current timestamp."""
        return cls(
            timestamp=datetime.now().isoformat(),
            level=level.name,
            operation=operation,
            paths=[str(p) for p in paths],
            message=message,
            error=error,
            metadata=metadata or {}
        )

    def to_json(self) -> str:
        """Convert entry to JSON string."""
        return json.dumps(asdict(self), ensure_ascii=False)

    @classmethod
    def from_json(cls, json_str: str) -> "DiagnosticEntry":
        """Create entry from JSON string."""
        data = json.loads(json_str)
        return cls(**data)


class NullSink:
    """Sink that discards everything."""

    def write(self, entry: DiagnosticEntry) -> None:
        pass


class ConsoleSink:
    """Writes entries to stderr through a rich console."""

    STYLES = {
        "DEBUG": "dim",
        "INFO": "cyan",
        "WARN": "yellow",
        "ERROR": "bold red",
    }

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(file=sys.stderr, highlight=False)

    def write(self, entry: DiagnosticEntry) -> None:
        style = self.STYLES.get(entry.level, "default")
        line = f"[{style}]{entry.level:<5}[/{style}] {entry.operation}: {escape(entry.message)}"
        if entry.error:
            line += f" [dim]({escape(entry.error)})[/dim]"
        self.console.print(line)


class JsonlSink:
    """
    Append-only JSONL sink.

    Each entry is written as one line; the file is opened per write so that
    no handle outlives a call.
    """

    def __init__(self, log_path: str, create_dirs: bool = True):
        """
        Initialize the sink.

        Args:
            log_path: Path to the JSONL log file
            create_dirs: Create the log directory now; off for read-only use
        """
        self.log_path = Path(log_path)
        self._lock = threading.Lock()
        if create_dirs:
            self._ensure_log_directory()

    def _ensure_log_directory(self) -> None:
        """Create the log directory if it doesn't exist."""
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

    def write(self, entry: DiagnosticEntry) -> None:
        """
        Append an entry to the log.

        Args:
            entry: The DiagnosticEntry to write
        """
        with self._lock:
            with open(self.log_path, "a", encoding="utf-8") as f:
                f.write(entry.to_json() + "\n")

    def get_recent(self, limit: int = 100) -> List[DiagnosticEntry]:
        """
        Get the most recent entries.

        Args:
            limit: Maximum number of entries to return

        Returns:
            List of DiagnosticEntry objects, most recent first
        """
        entries = []

        if limit <= 0 or not self.log_path.exists():
            return entries

        with open(self.log_path, "r", encoding="utf-8") as f:
            lines = f.readlines()

        for line in reversed(lines[-limit:]):
            line = line.strip()
            if line:
                try:
                    entries.append(DiagnosticEntry.from_json(line))
                except (json.JSONDecodeError, TypeError):
                    continue

        return entries


class DiagnosticLogger:
    """
    Level-filtered front end over a sink.

    A logger whose level is None is disabled. Sink failures never reach the
    caller.
    """

    def __init__(self, level: Optional[Level] = None, sink=None):
        self.level = level
        self.sink = sink if sink is not None else NullSink()

    @classmethod
    def disabled(cls) -> "DiagnosticLogger":
        return cls(None, NullSink())

    def enabled_for(self, level: Level) -> bool:
        return self.level is not None and level.value >= self.level.value

    def log(
        self,
        level: Level,
        operation: str,
        message: str,
        paths: Sequence[str] = (),
        error: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None
    ) -> Optional[DiagnosticEntry]:
        """
        Create and emit an entry if `level` passes the filter.

        Returns the emitted entry, or None when it was filtered out.
        """
        if not self.enabled_for(level):
            return None

        entry = DiagnosticEntry.create(
            level=level,
            operation=operation,
            message=message,
            paths=paths,
            error=error,
            metadata=metadata
        )
        try:
            self.sink.write(entry)
        except Exception:
            return None
        return entry

    def debug(self, operation: str, message: str, **kwargs) -> Optional[DiagnosticEntry]:
        return self.log(Level.DEBUG, operation, message, **kwargs)

    def info(self, operation: str, message: str, **kwargs) -> Optional[DiagnosticEntry]:
        return self.log(Level.INFO, operation, message, **kwargs)

    def warn(self, operation: str, message: str, **kwargs) -> Optional[DiagnosticEntry]:
        return self.log(Level.WARN, operation, message, **kwargs)

    def error(self, operation: str, message: str, **kwargs) -> Optional[DiagnosticEntry]:
        return self.log(Level.ERROR, operation, message, **kwargs)
