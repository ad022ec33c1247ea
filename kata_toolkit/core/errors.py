from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class KataError(Exception):
    """Error raised by the kata functions and reported by the CLI.

    `file` names the input file when the bad value came from one; `path`
    points into the offending argument, e.g. "pattern[4]" for the brace at
    offset 4 or "dominoes[2]" for the third tile.
    """

    code: str
    message: str
    file: Optional[str] = None
    path: Optional[str] = None

    @property
    def location(self) -> str:
        located = [part for part in (self.file, self.path) if part]
        return ":".join(located) or "<args>"

    def __str__(self) -> str:
        return f"{self.location}: {self.code}: {self.message}"


class KataLoadError(KataError):
    """An input or settings file is missing, unreadable or unparsable."""


class InvalidArgumentError(KataError):
    pass


class MalformedPatternError(KataError):
    """Unbalanced braces in a brace-expansion pattern."""


class DepthExceededError(KataError):
    pass
