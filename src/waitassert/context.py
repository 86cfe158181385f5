"""
Browser console capture for polling assertions.

Playwright pushes console output as page events instead of keeping a log
buffer we can query, so the Context subscribes to them and keeps:
- Console logs (debug, log, info, warning, error)
- Page errors (uncaught exceptions), recorded as error-level entries
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


class LogLevel(Enum):
    DEBUG = "debug"
    LOG = "log"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]


_SEVERITY = {
    LogLevel.DEBUG: 0,
    LogLevel.LOG: 1,
    LogLevel.INFO: 1,
    LogLevel.WARNING: 2,
    LogLevel.ERROR: 3,
}

# Playwright console message types -> our levels
_CONSOLE_TYPES = {
    "debug": LogLevel.DEBUG,
    "log": LogLevel.LOG,
    "info": LogLevel.INFO,
    "warning": LogLevel.WARNING,
    "warn": LogLevel.WARNING,
    "error": LogLevel.ERROR,
    "assert": LogLevel.ERROR,
}


@dataclass
class ConsoleLog:
    """A single console message."""
    level: LogLevel
    text: str
    timestamp: datetime = field(default_factory=datetime.now)
    source: Optional[str] = None
    line: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level.value,
            "text": self.text,
            "timestamp": self.timestamp.isoformat(),
            "source": self.source,
            "line": self.line,
        }

    def __str__(self) -> str:
        where = ""
        if self.source:
            where = f" ({self.source}:{self.line})" if self.line is not None else f" ({self.source})"
        return f"[{self.timestamp.isoformat()}] {self.level.value.upper()}: {self.text}{where}"


@dataclass
class Context:
    """
    Captures the browser console during a test.

    Usage:
        context = Context()
        context.attach_to_page(page)  # Start capturing

        # ... run assertions ...

        errors = context.get_browser_logs(LogLevel.ERROR)
    """
    console_logs: List[ConsoleLog] = field(default_factory=list)
    page_errors: List[str] = field(default_factory=list)
    attached: bool = False
    _read_position: int = field(default=0, repr=False)

    def attach_to_page(self, page):
        """Attach event listeners to capture console output and page errors."""

        def on_console(msg):
            location = msg.location or {}
            self.console_logs.append(ConsoleLog(
                level=_CONSOLE_TYPES.get(msg.type, LogLevel.LOG),
                text=msg.text,
                source=location.get("url") or None,
                line=location.get("lineNumber"),
            ))

        def on_page_error(error):
            text = str(error)
            self.page_errors.append(text)
            self.console_logs.append(ConsoleLog(level=LogLevel.ERROR, text=text))

        page.on("console", on_console)
        page.on("pageerror", on_page_error)
        self.attached = True
        return self

    def get_browser_logs(self, level: LogLevel = LogLevel.ERROR) -> List[ConsoleLog]:
        """Entries at or above the given level, oldest first."""
        return [
            log for log in self.console_logs
            if log.level.severity >= level.severity
        ]

    def take_browser_logs(self, level: LogLevel = LogLevel.ERROR) -> List[ConsoleLog]:
        """
        Entries at or above the given level logged since the last take.

        Every entry read so far is consumed, whatever its level, so each
        console message is reported at most once.
        """
        new_logs = self.console_logs[self._read_position:]
        self._read_position = len(self.console_logs)
        return [log for log in new_logs if log.level.severity >= level.severity]

    @property
    def errors(self) -> List[str]:
        """Get all error messages."""
        return [log.text for log in self.get_browser_logs(LogLevel.ERROR)]

    @property
    def warnings(self) -> List[str]:
        """Get all warning messages."""
        return [
            log.text for log in self.console_logs
            if log.level == LogLevel.WARNING
        ]

    def summary(self) -> Dict[str, Any]:
        return {
            "console_logs": len(self.console_logs),
            "errors": len(self.errors),
            "warnings": len(self.warnings),
            "page_errors": len(self.page_errors),
        }

    def generate_report(self) -> str:
        """Generate a text report of the captured console."""
        s = self.summary()
        lines = [
            "=" * 60,
            "BROWSER CONSOLE REPORT",
            "=" * 60,
            "",
            f"Console Logs: {s['console_logs']}",
            f"Errors: {s['errors']}",
            f"Warnings: {s['warnings']}",
            "",
        ]

        if self.errors:
            lines.extend([
                "--- ERRORS ---",
                *[f"  - {e[:200]}" for e in self.errors[:20]],
                "",
            ])

        if self.warnings:
            lines.extend([
                "--- WARNINGS ---",
                *[f"  - {w[:200]}" for w in self.warnings[:10]],
                "",
            ])

        if self.console_logs:
            lines.append("--- FULL CONSOLE LOG ---")
            for log in self.console_logs[-50:]:  # Last 50 logs
                lines.append(f"  [{log.level.value.upper()}] {log.text[:150]}")
            lines.append("")

        return "\n".join(lines)

    def reset(self):
        """Clear all captured data."""
        self.console_logs.clear()
        self.page_errors.clear()
        self._read_position = 0
