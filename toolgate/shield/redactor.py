"""Secret redactor for ToolGate — masks configured secret values in text.

Secret values come from environment variables whose *names* are listed,
comma-separated, in a single controlling variable. Every occurrence of a
value is replaced by asterisks of the same length so terminal layout is
preserved while the content is destroyed.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping, Sequence

DEFAULT_SECRETS_ENV_VAR = "PI_SENSITIVE_ENV_VARS"
MASK_CHAR = "*"


def secret_var_names(
    environ: Mapping[str, str] | None = None,
    names_var: str = DEFAULT_SECRETS_ENV_VAR,
) -> list[str]:
    """Return the configured variable names, trimmed, empties dropped, in order."""
    env = os.environ if environ is None else environ
    raw = env.get(names_var, "")
    if not raw:
        return []
    return [name.strip() for name in raw.split(",") if name.strip()]


def load_secret_values(
    environ: Mapping[str, str] | None = None,
    names_var: str = DEFAULT_SECRETS_ENV_VAR,
) -> list[str]:
    """Resolve configured variable names to their current, non-empty values.

    Always reads *environ* at call time; nothing is cached.
    """
    env = os.environ if environ is None else environ
    values: list[str] = []
    for name in secret_var_names(env, names_var):
        value = env.get(name)
        if value:
            values.append(value)
    return values


def _ordered(secrets: Iterable[str]) -> list[str]:
    """De-duplicate and drop empty values, keeping listed order."""
    seen: list[str] = []
    for value in secrets:
        if value and value not in seen:
            seen.append(value)
    return seen


def _masked_spans(text: str, secrets: Iterable[str]) -> list[tuple[int, int]]:
    """Merged ``(start, end)`` ranges covered by any occurrence of any secret.

    Occurrences are all searched in the original text, including ones that
    overlap each other, so the union hides every character of every secret.
    """
    spans: list[tuple[int, int]] = []
    for value in secrets:
        start = text.find(value)
        while start != -1:
            spans.append((start, start + len(value)))
            start = text.find(value, start + 1)
    spans.sort()

    merged: list[tuple[int, int]] = []
    for start, end in spans:
        if merged and start <= merged[-1][1]:
            if end > merged[-1][1]:
                merged[-1] = (merged[-1][0], end)
        else:
            merged.append((start, end))
    return merged


def redact(text: str, secrets: Sequence[str]) -> str:
    """Replace every occurrence of each secret in *text* with a same-length mask.

    Secrets that overlap or contain one another are masked as one region,
    so no part of any of them stays visible.
    """
    if not secrets or not text:
        return text
    spans = _masked_spans(text, _ordered(secrets))
    if not spans:
        return text
    pieces: list[str] = []
    last = 0
    for start, end in spans:
        pieces.append(text[last:start])
        pieces.append(MASK_CHAR * (end - start))
        last = end
    pieces.append(text[last:])
    return "".join(pieces)


class SecretRedactor:
    """A materialized secret value set and the operations over it.

    Build one per gate invocation (see :meth:`from_env`) so the set always
    reflects the environment at the moment of redaction.
    """

    def __init__(self, secrets: Iterable[str] = ()):
        self._secrets: tuple[str, ...] = tuple(_ordered(secrets))

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        names_var: str = DEFAULT_SECRETS_ENV_VAR,
    ) -> SecretRedactor:
        return cls(load_secret_values(environ, names_var))

    @property
    def active(self) -> bool:
        """True when at least one secret value is configured."""
        return bool(self._secrets)

    @property
    def secrets(self) -> tuple[str, ...]:
        return self._secrets

    def contains_secret(self, text: str | None) -> bool:
        if not self._secrets or not text:
            return False
        return any(value in text for value in self._secrets)

    def redact(self, text: str) -> str:
        return redact(text, self._secrets)

    def count(self, text: str) -> int:
        """Number of separate regions that :meth:`redact` would mask."""
        if not self._secrets or not text:
            return 0
        return len(_masked_spans(text, self._secrets))

    def __len__(self) -> int:
        return len(self._secrets)

    def __repr__(self) -> str:
        # Never expose values.
        return f"SecretRedactor(<{len(self._secrets)} secrets>)"
