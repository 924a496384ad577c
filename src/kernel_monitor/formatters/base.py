"""Base formatter interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..models import Snapshot


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def format(self, snapshot: Snapshot) -> str:
        """Format snapshot data to string."""
        ...
