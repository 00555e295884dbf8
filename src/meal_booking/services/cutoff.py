"""Daily cutoff configuration."""

import logging
from dataclasses import dataclass
from datetime import time
from typing import Protocol

from meal_booking.domain.bookings import CutoffConfig

_logger = logging.getLogger(__name__)


class CutoffConfigRepository(Protocol):
    """Persistence interface for cutoff configuration rows."""

    def get_latest(self) -> CutoffConfig | None:
        """Return the most recently inserted cutoff row."""

    def create(self, cutoff_time: time) -> CutoffConfig:
        """Insert a new cutoff row and return it."""


@dataclass
class CutoffService:
    """Reads and updates the most-recent-wins cutoff."""

    repository: CutoffConfigRepository
    fallback: time

    def latest(self) -> time | None:
        """Return the configured cutoff time, if one exists."""
        config = self.repository.get_latest()
        return config.cutoff_time if config else None

    def current_cutoff(self) -> time:
        """Return the configured cutoff or the fallback."""
        cutoff = self.latest()
        return cutoff if cutoff is not None else self.fallback

    def update_cutoff(self, cutoff_time: time) -> CutoffConfig:
        """Record a new cutoff time."""
        config = self.repository.create(cutoff_time.replace(microsecond=0))
        _logger.info("Cutoff time updated to %s", config.cutoff_time)
        return config
