from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import ClassSessionCounter


class ClassCounterRepository(Protocol):
    def get(self, config_key: str) -> Optional[ClassSessionCounter]:
        raise NotImplementedError

    def get_or_create(self, config_key: str, *, now: datetime) -> ClassSessionCounter:
        """Return the counter, creating it at 0 when absent."""

        raise NotImplementedError

    def increment(self, config_key: str, amount: int, *, now: datetime) -> ClassSessionCounter:
        """Atomically add ``amount``; creates the counter at ``amount`` when absent."""

        raise NotImplementedError
