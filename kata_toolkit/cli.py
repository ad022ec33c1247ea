from __future__ import annotations

import json
import logging
from dataclasses import asdict
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.table import Table

from kata_toolkit.core.braces.expand_braces import count_expansions, expand_braces
from kata_toolkit.core.compass.compass_points import create_compass_points
from kata_toolkit.core.config.settings import (
    KataSettings,
    SettingsConfigError,
    load_and_merge,
    merged_settings,
)
from kata_toolkit.core.dominoes.domino_row import arrange_dominoes, can_dominoes_make_row
from kata_toolkit.core.errors import InvalidArgumentError, KataError, KataLoadError
from kata_toolkit.core.io.load_input import load_dominoes, load_numbers
from kata_toolkit.core.observability import setup_logging
from kata_toolkit.core.ranges.extract_ranges import expand_ranges, extract_ranges
from kata_toolkit.core.zigzag.zigzag_matrix import get_zigzag_matrix

app = typer.Typer(add_completion=False, no_args_is_help=True)

logger = logging.getLogger(__name__)

FORMATS = ("text", "json")


@app.callback()
def _callback(
    ctx: typer.Context,
    config: str | None = typer.Option(
        None,
        "--config",
        envvar="KATA_CONFIG",
        help="Optional YAML settings file (max_brace_depth, log_level, log_format)",
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="DEBUG|INFO|WARNING|ERROR"),
    log_format: str | None = typer.Option(None, "--log-format", help="Log format: text|json"),
) -> None:
    """Kata toolkit CLI."""
    try:
        settings = load_and_merge(config)
        settings = merged_settings(
            {**asdict(settings), "log_level": log_level, "log_format": log_format}
        )
    except FileNotFoundError:
        _print_errors(
            [
                KataLoadError(
                    code="E_CONFIG_FILE_NOT_FOUND",
                    message=f"settings file not found: {config}",
                    file=None,
                    path="config",
                )
            ]
        )
        raise typer.Exit(code=1)
    except OSError as e:
        _print_errors(
            [
                KataLoadError(
                    code="E_CONFIG_FILE_READ",
                    message=f"cannot read settings file: {e}",
                    file=config,
                    path="config",
                )
            ]
        )
        raise typer.Exit(code=1)
    except SettingsConfigError as e:
        _print_errors(
            [
                InvalidArgumentError(
                    code="E_CONFIG_INVALID",
                    message=str(e),
                    file=config,
                    path="config",
                )
            ]
        )
        raise typer.Exit(code=2)

    setup_logging(settings.log_level, settings.log_format)
    ctx.obj = settings


@app.command("compass")
def compass(
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """Print the 32 compass points with their azimuths."""
    _check_format("compass", format)

    points = create_compass_points()
    if format == "json":
        _emit_json("compass", True, exit_code=0, errors=[], result=[asdict(p) for p in points])

    table = Table(title="Compass points")
    table.add_column("Abbreviation")
    table.add_column("Azimuth", justify="right")
    for p in points:
        table.add_row(p.abbreviation, f"{p.azimuth:.2f}")
    Console().print(table)


@app.command("expand")
def expand(
    ctx: typer.Context,
    pattern: str = typer.Argument(..., help="Pattern with {a,b} brace groups (quote it in the shell)"),
    max_depth: int | None = typer.Option(
        None, "--max-depth", help="Maximum brace nesting depth (default from settings)"
    ),
    count: bool = typer.Option(False, "--count", help="Print only the number of expansions"),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """Expand brace groups, bash style: 'a{b,c}d' -> abd, acd."""
    _check_format("expand", format)
    settings = _settings(ctx)
    depth = max_depth if max_depth is not None else settings.max_brace_depth
    logger.info("expanding pattern", extra={"command": "expand", "pattern": pattern, "depth": depth})

    try:
        if count:
            n = count_expansions(pattern, max_depth=depth)
        else:
            expansions = expand_braces(pattern, max_depth=depth)
    except KataError as e:
        _fail("expand", format, [e])

    if count:
        if format == "json":
            _emit_json("expand", True, exit_code=0, errors=[], result={"count": n})
        typer.echo(str(n))
        return

    if format == "json":
        _emit_json("expand", True, exit_code=0, errors=[], result=list(expansions))
    for s in expansions:
        typer.echo(s)


@app.command("zigzag")
def zigzag(
    n: int = typer.Argument(..., help="Matrix dimension (non-negative)"),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """Print the n x n zig-zag (JPEG scan order) matrix."""
    _check_format("zigzag", format)
    try:
        matrix = get_zigzag_matrix(n)
    except KataError as e:
        _fail("zigzag", format, [e])

    if format == "json":
        _emit_json("zigzag", True, exit_code=0, errors=[], result=matrix)

    width = len(str(max(n * n - 1, 0)))
    for row in matrix:
        typer.echo(" ".join(str(v).rjust(width) for v in row))


@app.command("dominoes")
def dominoes(
    tiles: list[str] | None = typer.Argument(None, help="Tiles written a:b, e.g. 0:1 1:1"),
    file: str | None = typer.Option(
        None, "--file", help="YAML/JSON file with a 'dominoes' list of [a, b] pairs"
    ),
    arrange: bool = typer.Option(False, "--arrange", help="Also print one valid row"),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """Check whether domino tiles can be laid out in a single row."""
    _check_format("dominoes", format)

    try:
        pairs: list[Any] = load_dominoes(file) if file else []
        pairs.extend(_parse_tile(i, t) for i, t in enumerate(tiles or []))
        if not file and not tiles:
            raise InvalidArgumentError(
                code="E_DOMINO_NO_INPUT",
                message="pass tiles as arguments (a:b) or --file",
                path="tiles",
            )
        ok = can_dominoes_make_row(pairs)
        row = arrange_dominoes(pairs) if arrange else None
    except KataError as e:
        _fail("dominoes", format, [e])

    if format == "json":
        result: dict[str, Any] = {"can_make_row": ok}
        if arrange:
            result["row"] = [list(t) for t in row] if row is not None else None
        _emit_json("dominoes", True, exit_code=0, errors=[], result=result)

    typer.echo("true" if ok else "false")
    if arrange and row is not None:
        typer.echo(" ".join(f"{a}:{b}" for a, b in row))


@app.command("ranges")
def ranges(
    nums: list[int] | None = typer.Argument(
        None, help="Strictly increasing integers (use -- before negative numbers)"
    ),
    file: str | None = typer.Option(None, "--file", help="YAML/JSON file with a 'nums' list"),
    expand: str | None = typer.Option(
        None, "--expand", help="Expand a range expression such as '0-2,5' instead"
    ),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """Compress integers into range notation: 0 1 2 5 -> 0-2,5."""
    _check_format("ranges", format)

    try:
        if expand is not None:
            values = expand_ranges(expand)
            if format == "json":
                _emit_json("ranges", True, exit_code=0, errors=[], result=values)
            typer.echo(",".join(str(v) for v in values))
            return

        if not file and not nums:
            raise InvalidArgumentError(
                code="E_RANGES_NO_INPUT",
                message="pass numbers as arguments, --file or --expand",
                path="nums",
            )
        items: list[Any] = load_numbers(file) if file else []
        items.extend(nums or [])
        text = extract_ranges(items)
    except KataError as e:
        _fail("ranges", format, [e])

    if format == "json":
        _emit_json("ranges", True, exit_code=0, errors=[], result=text)
    typer.echo(text)


def _parse_tile(i: int, token: str) -> list[int]:
    parts = token.split(":")
    try:
        if len(parts) != 2:
            raise ValueError(token)
        return [int(parts[0]), int(parts[1])]
    except ValueError as e:
        raise InvalidArgumentError(
            code="E_DOMINO_INVALID_TILE",
            message=f"tile must look like a:b, got {token!r}",
            path=f"tiles[{i}]",
        ) from e


def _settings(ctx: typer.Context) -> KataSettings:
    if isinstance(ctx.obj, KataSettings):
        return ctx.obj
    return merged_settings()


def _check_format(command: str, format: str) -> None:
    if format not in FORMATS:
        _print_errors(
            [
                InvalidArgumentError(
                    code=f"E_{command.upper()}_UNKNOWN_FORMAT",
                    message=f"unknown format: {format} (choose one of: text, json)",
                    file=None,
                    path="format",
                )
            ]
        )
        raise typer.Exit(code=2)


def _to_item(e: KataError) -> dict:
    source = "load" if isinstance(e, KataLoadError) else "input"
    return {
        "code": e.code,
        "message": e.message,
        "file": e.file,
        "path": e.path,
        "severity": "error",
        "source": source,
    }


def _emit_json(
    command: str,
    ok: bool,
    *,
    exit_code: int,
    errors: list[KataError],
    result: Any,
) -> NoReturn:
    payload = {
        "tool": "kata",
        "command": command,
        "ok": ok,
        "error_count": len(errors),
        "errors": [_to_item(e) for e in errors],
        "result": result,
    }
    typer.echo(json.dumps(payload, indent=2, sort_keys=True))
    raise typer.Exit(code=exit_code)


def _fail(command: str, format: str, errors: list[KataError]) -> NoReturn:
    # Load errors (missing/unreadable files) exit 1; bad input exits 2.
    exit_code = 1 if any(isinstance(e, KataLoadError) for e in errors) else 2
    logger.info(
        "command failed",
        extra={"command": command, "error_code": errors[0].code if errors else None},
    )
    if format == "json":
        _emit_json(command, False, exit_code=exit_code, errors=errors, result=None)
    _print_errors(errors)
    raise typer.Exit(code=exit_code)


def _print_errors(errors: list[KataError]) -> None:
    errors_sorted = sorted(errors, key=lambda e: (e.file or "", e.path or "", e.code))
    for e in errors_sorted:
        typer.echo(str(e), err=True)


def main() -> None:
    app(prog_name="kata")


cli = typer.main.get_command(app)

if __name__ == "__main__":
    main()
