"""User-configurable timer settings.

Persisted as ``settings.json`` in the app-data directory (see
:mod:`pomotimer.storage.json_store`)::

    {
      "work_minutes": 25,
      "short_break_minutes": 5,
      "long_break_minutes": 15,
      "long_break_interval": 4,
      "auto_start_next": true
    }
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any


DEFAULT_WORK_MINUTES = 25
DEFAULT_SHORT_BREAK_MINUTES = 5
DEFAULT_LONG_BREAK_MINUTES = 15
DEFAULT_LONG_BREAK_INTERVAL = 4

_POSITIVE_FIELDS = (
    "work_minutes",
    "short_break_minutes",
    "long_break_minutes",
    "long_break_interval",
)


@dataclass(frozen=True)
class Settings:
    """Interval durations and cadence.  Replaced wholesale on save."""

    work_minutes: int = DEFAULT_WORK_MINUTES
    short_break_minutes: int = DEFAULT_SHORT_BREAK_MINUTES
    long_break_minutes: int = DEFAULT_LONG_BREAK_MINUTES
    long_break_interval: int = DEFAULT_LONG_BREAK_INTERVAL  # every Nth work session
    auto_start_next: bool = True  # advisory; the engine does not act on it

    def __post_init__(self) -> None:
        for name in _POSITIVE_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if not isinstance(self.auto_start_next, bool):
            raise ValueError(
                f"auto_start_next must be a boolean, got {self.auto_start_next!r}"
            )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Settings":
        """Build from a decoded JSON object.

        Unknown keys are ignored and missing keys fall back to defaults.
        Raises ``ValueError`` for values of the wrong type or sign.
        """
        valid_keys = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)
