"""Persisted session state for the Pomodoro cycle.

The JSON document (``session_states.json``) looks like::

    {
      "mode": "work",
      "current_session_started_at": "2026-10-19T09:00:00+00:00",
      "started_at": "2026-10-19T09:00:00+00:00",
      "paused": false,
      "session_count": 0
    }

A never-started (or reset) session has ``mode == ""`` and ``null``
timestamps.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class Mode(str, Enum):
    WORK = "work"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"


UNSET_MODE = ""

# Zero ``time.Time`` as written by older builds of the app.
_ZERO_TIMESTAMPS = {"0001-01-01T00:00:00Z", "0001-01-01T00:00:00+00:00"}

_FRACTION_RE = re.compile(r"\.(\d+)")


@dataclass(frozen=True)
class SessionState:
    """The single mutable timer of the installation.

    ``mode`` is kept as the raw string read from disk so that an
    unrecognised value survives loading and is only rejected when a
    duration or transition has to be computed.
    """

    mode: str = UNSET_MODE
    current_mode_started_at: datetime | None = None
    session_started_at: datetime | None = None
    paused: bool = False
    completed_work_sessions: int = 0

    @property
    def is_started(self) -> bool:
        return self.current_mode_started_at is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "mode": self.mode.value if isinstance(self.mode, Mode) else self.mode,
            "current_session_started_at": _format_ts(self.current_mode_started_at),
            "started_at": _format_ts(self.session_started_at),
            "paused": self.paused,
            "session_count": self.completed_work_sessions,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SessionState":
        """Decode a JSON object; raises ``ValueError`` on bad field types."""
        mode = data.get("mode") or UNSET_MODE
        if not isinstance(mode, str):
            raise ValueError(f"mode must be a string, got {mode!r}")

        paused = data.get("paused", False)
        if not isinstance(paused, bool):
            raise ValueError(f"paused must be a boolean, got {paused!r}")

        count = data.get("session_count", 0)
        if isinstance(count, bool) or not isinstance(count, int):
            raise ValueError(f"session_count must be an integer, got {count!r}")

        return cls(
            mode=mode,
            current_mode_started_at=_parse_ts(data.get("current_session_started_at")),
            session_started_at=_parse_ts(data.get("started_at")),
            paused=paused,
            completed_work_sessions=count,
        )


def _format_ts(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat()


def _parse_ts(value: Any) -> datetime | None:
    if value is None or value == "" or value in _ZERO_TIMESTAMPS:
        return None
    if not isinstance(value, str):
        raise ValueError(f"timestamp must be an ISO-8601 string, got {value!r}")
    text = value
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    # fromisoformat on 3.10 wants exactly 3 or 6 fraction digits
    text = _FRACTION_RE.sub(lambda m: "." + (m.group(1) + "000000")[:6], text)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
