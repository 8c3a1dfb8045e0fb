"""Interactive surface abstraction used for confirmations and notifications."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from toolgate.core.models import NotifyLevel


class InteractiveSurface(ABC):
    """Abstract operator-facing surface.

    Absent (``None``) in non-interactive/headless mode.
    """

    @abstractmethod
    async def select(self, message: str, choices: Sequence[str]) -> str | None:
        """Present *message* with *choices* and await the operator's selection.

        Returns the chosen text, or None if the prompt was dismissed.
        """

    @abstractmethod
    def notify(self, message: str, level: NotifyLevel = NotifyLevel.INFO) -> None:
        """Post a fire-and-forget notification."""
