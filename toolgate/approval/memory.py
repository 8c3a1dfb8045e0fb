"""In-memory surface for testing and scripted, unattended use."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from toolgate.approval.base import InteractiveSurface
from toolgate.core.models import NotifyLevel


@dataclass(frozen=True)
class Prompt:
    """A recorded :meth:`InMemorySurface.select` call."""

    message: str
    choices: tuple[str, ...]


class InMemorySurface(InteractiveSurface):
    """Answers prompts from a scripted queue and records everything shown.

    When the queue runs dry, *default* is returned.
    """

    def __init__(self, answers: Iterable[str | None] = (), default: str | None = None) -> None:
        self._answers: deque[str | None] = deque(answers)
        self._default = default
        self.prompts: list[Prompt] = []
        self.notifications: list[tuple[str, NotifyLevel]] = []

    def queue(self, *answers: str | None) -> None:
        self._answers.extend(answers)

    async def select(self, message: str, choices: Sequence[str]) -> str | None:
        self.prompts.append(Prompt(message=message, choices=tuple(choices)))
        if self._answers:
            return self._answers.popleft()
        return self._default

    def notify(self, message: str, level: NotifyLevel = NotifyLevel.INFO) -> None:
        self.notifications.append((message, level))
