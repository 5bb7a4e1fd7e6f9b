from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_positive_int
from ..core.constants import DEFAULT_CLASS_COUNTER_KEY
from .repository import ClassCounterRepository

logger = logging.getLogger(__name__)


class ClassCounterService:
    def __init__(self, counters: ClassCounterRepository, *, config_key: str = DEFAULT_CLASS_COUNTER_KEY):
        self._counters = counters
        self._key = config_key

    def read(self, *, now: Optional[datetime] = None) -> int:
        return self._counters.get_or_create(self._key, now=now or now_local()).total_classes_held

    def current_total(self) -> int:
        """Read without creating the counter (0 when it does not exist yet)."""
        counter = self._counters.get(self._key)
        return counter.total_classes_held if counter else 0

    def increment_by(self, amount: int = 1, *, now: Optional[datetime] = None) -> int:
        amount = require_positive_int(amount, "increment")
        counter = self._counters.increment(self._key, amount, now=now or now_local())
        logger.info("Classes held counter increased by %s to %s", amount, counter.total_classes_held)
        return counter.total_classes_held
