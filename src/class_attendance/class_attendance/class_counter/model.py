from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ClassSessionCounter:
    """Singleton row holding how many class sessions have been held."""

    config_key: str
    total_classes_held: int
    updated_at: datetime
