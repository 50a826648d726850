"""
Ordered pattern chains with early exit.

Every extractor is "try pattern 1, then pattern 2, ... then default". Each
step is a PatternStrategy; first_match() walks them in order and returns the
first capture the caller's accept() function keeps. Strategies are immutable
and compiled once at import, so they can be shared across threads.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PatternStrategy:
    """A named regex whose capture group is a candidate field value."""

    name: str
    pattern: re.Pattern[str]
    group: int = 1

    @classmethod
    def compile(
        cls, name: str, regex: str, flags: int = re.IGNORECASE, group: int = 1
    ) -> PatternStrategy:
        return cls(name=name, pattern=re.compile(regex, flags), group=group)

    def capture(self, text: str) -> str | None:
        """Text of the capture group at the first match, or None."""
        if not text:
            return None
        match = self.pattern.search(text)
        if match is None:
            return None
        return match.group(self.group)


def first_match(
    strategies: Iterable[PatternStrategy],
    text: str,
    accept: Callable[[str], T | None],
) -> tuple[T, str] | None:
    """
    Evaluate strategies in order and stop at the first accepted capture.

    Args:
        strategies: Ordered pattern chain
        text: Text to search
        accept: Maps a raw capture to the final value, or None to reject it
                (a rejected capture moves on to the next strategy)

    Returns:
        (value, strategy name) for the winning strategy, or None
    """
    for strategy in strategies:
        captured = strategy.capture(text)
        if captured is None:
            continue
        value = accept(captured)
        if value is not None:
            return value, strategy.name
    return None
