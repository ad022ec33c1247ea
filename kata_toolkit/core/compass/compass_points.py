from __future__ import annotations

import math

from kata_toolkit.core.errors import InvalidArgumentError
from kata_toolkit.core.model import CompassPoint


# Cardinal directions only; every other name is composed from these.
SIDES: list[str] = ["N", "E", "S", "W"]

POINT_COUNT = 32
STEP_DEGREES = 360 / POINT_COUNT  # 11.25


def create_compass_points() -> list[CompassPoint]:
    """Return the 32 compass points ordered by azimuth.

    See https://en.wikipedia.org/wiki/Points_of_the_compass#32_cardinal_points

      N 0.00, NbE 11.25, NNE 22.50, NEbN 33.75, NE 45.00, ... NbW 348.75
    """
    return [CompassPoint(_abbreviation(i), i * STEP_DEGREES) for i in range(POINT_COUNT)]


def compass_point_for(azimuth: float) -> CompassPoint:
    """Return the compass point nearest to an azimuth (degrees, any range).

    An azimuth exactly halfway between two points maps to the clockwise one:
    5.625 -> NbE, 354.375 -> N.
    """
    if isinstance(azimuth, bool) or not isinstance(azimuth, (int, float)):
        raise InvalidArgumentError(
            code="E_COMPASS_INVALID_AZIMUTH",
            message="azimuth must be a number",
            path="azimuth",
        )
    if not math.isfinite(azimuth):
        raise InvalidArgumentError(
            code="E_COMPASS_INVALID_AZIMUTH",
            message="azimuth must be finite",
            path="azimuth",
        )

    index = math.floor((azimuth % 360) / STEP_DEGREES + 0.5) % POINT_COUNT
    return create_compass_points()[index]


def _abbreviation(i: int) -> str:
    if i % 8 == 0:
        return SIDES[i // 8]
    if i % 8 == 4:
        return _intercardinal(i)
    if i % 4 == 2:
        # NNE, ENE, ESE, ...: nearest cardinal followed by the enclosing intercardinal.
        cardinal = SIDES[round(i / 8) % 4]
        return cardinal + _intercardinal((i // 8) * 8 + 4)

    # Odd indexes are "X by Y": one step off the nearest major point X towards Y.
    if (i - 1) % 4 == 0:
        major, clockwise = i - 1, True
    else:
        major, clockwise = (i + 1) % POINT_COUNT, False
    quadrant = major // 8
    if major % 8 == 0:
        toward = SIDES[(quadrant + 1) % 4] if clockwise else SIDES[(quadrant - 1) % 4]
    else:
        toward = SIDES[(quadrant + 1) % 4] if clockwise else SIDES[quadrant]
    return f"{_abbreviation(major)}b{toward}"


def _intercardinal(i: int) -> str:
    a = SIDES[i // 8]
    b = SIDES[(i // 8 + 1) % 4]
    # North/South always lead: NE, SE, SW, NW.
    return a + b if a in ("N", "S") else b + a
