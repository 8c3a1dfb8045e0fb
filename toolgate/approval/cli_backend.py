"""Terminal surface: prints prompts and reads the operator's choice from stdin."""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Sequence

from toolgate.approval.base import InteractiveSurface
from toolgate.core.models import NotifyLevel

_LEVEL_ICONS = {
    NotifyLevel.INFO: "ℹ",
    NotifyLevel.WARNING: "⚠",
    NotifyLevel.ERROR: "✗",
}


class CLISurface(InteractiveSurface):
    """CLI-based surface: numbered choices, answered by number or by text."""

    def __init__(
        self,
        input_func=None,
        output_file=None,
    ) -> None:
        """Initialize CLISurface.

        Args:
            input_func: Custom input function (for testing). Defaults to builtins.input.
            output_file: File to write output to. Defaults to sys.stderr.
        """
        self._input_func = input_func or input
        self._output = output_file or sys.stderr

    async def select(self, message: str, choices: Sequence[str]) -> str | None:
        self._output.write(f"\n🛡️ {message}\n")
        for index, choice in enumerate(choices, start=1):
            self._output.write(f"   {index}) {choice}\n")
        self._output.flush()

        try:
            answer = await asyncio.to_thread(self._input_func, "   Choice: ")
        except (EOFError, KeyboardInterrupt):
            return None

        return _resolve_choice(answer.strip(), choices)

    def notify(self, message: str, level: NotifyLevel = NotifyLevel.INFO) -> None:
        icon = _LEVEL_ICONS.get(level, "")
        self._output.write(f"{icon} {message}\n")
        self._output.flush()


def _resolve_choice(answer: str, choices: Sequence[str]) -> str | None:
    if answer.isdigit():
        index = int(answer) - 1
        if 0 <= index < len(choices):
            return choices[index]
        return None
    for choice in choices:
        if answer.lower() == choice.lower():
            return choice
    return None
