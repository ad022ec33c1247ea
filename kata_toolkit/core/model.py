from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class CompassPoint:
    abbreviation: str
    azimuth: float


@dataclass(frozen=True)
class Literal:
    text: str


@dataclass(frozen=True)
class Group:
    # Always two or more alternatives; single-alternative braces parse as literal text.
    alternatives: tuple[tuple["Node", ...], ...]


Node = Union[Literal, Group]

Domino = tuple[int, int]
