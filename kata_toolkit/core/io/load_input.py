from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import yaml

from kata_toolkit.core.errors import KataLoadError


# suffix -> (parser, error code for unparsable text, exceptions the parser raises)
PARSERS: dict[str, tuple[Callable[[str], Any], str, type[Exception]]] = {
    ".yaml": (yaml.safe_load, "E_YAML_PARSE", yaml.YAMLError),
    ".yml": (yaml.safe_load, "E_YAML_PARSE", yaml.YAMLError),
    ".json": (json.loads, "E_JSON_PARSE", json.JSONDecodeError),
}


def load_document(path: str) -> Any:
    """Read a kata input file (.yaml/.yml or .json) and return its parsed content.

    Shape checking is left to the callers.
    """

    p = Path(path)
    if not p.exists():
        raise KataLoadError(code="E_FILE_NOT_FOUND", message="file does not exist", file=str(p))

    parser = PARSERS.get(p.suffix.lower())
    if parser is None:
        raise KataLoadError(
            code="E_UNSUPPORTED_FORMAT",
            message=f"supported formats are {', '.join(PARSERS)}",
            file=str(p),
        )
    parse, parse_code, parse_error = parser

    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise KataLoadError(code="E_FILE_READ", message=str(e), file=str(p)) from e

    try:
        return parse(text)
    except parse_error as e:
        raise KataLoadError(code=parse_code, message=str(e), file=str(p)) from e


def load_dominoes(path: str) -> list[Any]:
    """Load tiles from `dominoes: [[0, 1], [1, 1]]` or a bare list of pairs."""
    return _load_list(path, "dominoes")


def load_numbers(path: str) -> list[Any]:
    """Load integers from `nums: [0, 1, 2]` or a bare list."""
    return _load_list(path, "nums")


def _load_list(path: str, key: str) -> list[Any]:
    data = load_document(path)

    if isinstance(data, dict):
        if key not in data:
            raise KataLoadError(
                code="E_MISSING_KEY",
                message=f"document must contain a '{key}' key",
                file=str(path),
                path=key,
            )
        data = data[key]

    if not isinstance(data, list):
        raise KataLoadError(
            code="E_INVALID_TOP_LEVEL",
            message=f"'{key}' must be a list",
            file=str(path),
            path=key,
        )
    return data
