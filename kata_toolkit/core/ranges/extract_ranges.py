from __future__ import annotations

import re
from typing import Any, Iterable

from kata_toolkit.core.errors import InvalidArgumentError


# Shortest run written with range syntax.
MIN_RANGE_RUN = 3

RANGE_RE = re.compile(r"^(-?\d+)-(-?\d+)$")
NUMBER_RE = re.compile(r"^-?\d+$")


def extract_ranges(nums: Iterable[Any]) -> str:
    """Return the range expression of a strictly increasing list of integers.

    Every run of three or more consecutive integers is written "start-end";
    shorter runs are listed individually.

      [0, 1, 2, 3, 4, 5]    => "0-5"
      [1, 4, 5]             => "1,4,5"
      [0, 1, 2, 5, 7, 8, 9] => "0-2,5,7-9"
      [1, 2, 4, 5]          => "1,2,4,5"
    """

    values = _check_increasing(nums)
    tokens: list[str] = []

    i = 0
    while i < len(values):
        j = i
        while j + 1 < len(values) and values[j + 1] == values[j] + 1:
            j += 1
        run = values[i : j + 1]
        if len(run) >= MIN_RANGE_RUN:
            tokens.append(f"{run[0]}-{run[-1]}")
        else:
            tokens.extend(str(v) for v in run)
        i = j + 1

    return ",".join(tokens)


def expand_ranges(text: str) -> list[int]:
    """Inverse of extract_ranges: "0-2,5,7-9" => [0, 1, 2, 5, 7, 8, 9].

    Output must come out strictly increasing; overlapping or descending
    tokens are rejected.
    """

    if not isinstance(text, str):
        raise InvalidArgumentError(
            code="E_RANGES_INVALID_TYPE",
            message="range expression must be a string",
            path="text",
        )
    if not text.strip():
        return []

    out: list[int] = []
    for i, raw in enumerate(text.split(",")):
        token = raw.strip()
        m = RANGE_RE.match(token)
        if m:
            start, end = int(m.group(1)), int(m.group(2))
            if start > end:
                raise InvalidArgumentError(
                    code="E_RANGES_INVALID_TOKEN",
                    message=f"range start exceeds end: {token}",
                    path=f"text[{i}]",
                )
            out.extend(range(start, end + 1))
        elif NUMBER_RE.match(token):
            out.append(int(token))
        else:
            raise InvalidArgumentError(
                code="E_RANGES_INVALID_TOKEN",
                message=f"not a number or range: {token!r}",
                path=f"text[{i}]",
            )

    _check_increasing(out)
    return out


def _check_increasing(nums: Iterable[Any]) -> list[int]:
    if isinstance(nums, (str, bytes)) or not isinstance(nums, Iterable):
        raise InvalidArgumentError(
            code="E_RANGES_INVALID_TYPE",
            message="nums must be a sequence of integers",
            path="nums",
        )

    values: list[int] = []
    for i, v in enumerate(nums):
        if isinstance(v, bool) or not isinstance(v, int):
            raise InvalidArgumentError(
                code="E_RANGES_INVALID_TYPE",
                message=f"expected an integer, got {v!r}",
                path=f"nums[{i}]",
            )
        if values and v <= values[-1]:
            raise InvalidArgumentError(
                code="E_RANGES_NOT_INCREASING",
                message=f"{v} does not follow {values[-1]} in strictly increasing order",
                path=f"nums[{i}]",
            )
        values.append(v)
    return values
