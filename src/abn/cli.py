from __future__ import annotations

import sys
import json
import logging
import pathlib
from typing import Any, Dict, List, Optional

import typer
import structlog
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import load_config, AbnConfig
from .core import Reason, Result
from .detect.regex_backend import RegexBackend
from .engine.batch import BatchResult, BatchValidator

console = Console()
log = structlog.get_logger()
app = typer.Typer(add_completion=False, no_args_is_help=True, help="abn — validate and format Australian Business Numbers")


def version_callback(value: bool):
    if value:
        from . import __version__
        console.print(f"abn {__version__}")
        raise typer.Exit()


@app.callback()
def common(
    ctx: typer.Context,
    config: Optional[pathlib.Path] = typer.Option(None, "--config", help="Path to .abn.yaml"),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of text"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logs"),
    version: Optional[bool] = typer.Option(None, "--version", callback=version_callback, is_eager=True),
):
    """Global options (config, output format, verbosity)."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, stream=sys.stderr)
    structlog.configure(
        processors=[structlog.processors.add_log_level, structlog.processors.JSONRenderer()],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )
    cfg = load_config(config) if config else AbnConfig()
    if as_json:
        cfg.output.format = "json"
    ctx.obj = {"config": cfg}
    log.debug("config_loaded", path=str(config) if config else None, group=cfg.group.enabled)


# ---------------- Rendering helpers ----------------

def _as_dict(raw: str, result: Result, **extra: Any) -> Dict[str, Any]:
    data: Dict[str, Any] = {"input": raw, "valid": result.ok, "abn": result.canonical}
    if not result.ok:
        data["reason"] = result.reason.value
        data["message"] = result.message
    data.update(extra)
    return data


def _line(raw: str, result: Result, cfg: AbnConfig, prefix: str = "") -> str:
    if result.ok:
        return f"{prefix}[green]✓[/green] {escape(result.canonical)}"
    text = f"{prefix}[red]✗[/red] {escape(raw)}"
    if cfg.output.show_reason:
        text += f": {result.reason.value} ({escape(result.message)})"
    return text


def _summary(result: BatchResult) -> Table:
    table = Table(title="ABN check summary")
    table.add_column("Outcome")
    table.add_column("Count", justify="right")
    table.add_row("valid", str(result.valid))
    for reason in Reason:
        count = result.reasons.get(reason.value)
        if not count:
            continue
        table.add_row(reason.value, str(count))
    table.add_row("total", str(result.total))
    return table


def _read_source(src: pathlib.Path) -> str:
    """Return the text exactly as stored; undecodable bytes become U+FFFD."""
    if str(src) == "-":
        return sys.stdin.read()
    if not src.is_file():
        raise typer.BadParameter(f"{src} is not a file", param_hint="PATH")
    with src.open(encoding="utf-8", errors="replace", newline="") as fh:
        return fh.read()


# ---------------- Commands ----------------

@app.command()
def check(
    ctx: typer.Context,
    values: List[str] = typer.Argument(..., help="One or more ABNs to validate"),
):
    """Validate ABNs given on the command line."""
    cfg: AbnConfig = ctx.obj["config"]
    result = BatchValidator(cfg).check_values(values, source="<argv>")

    if cfg.output.format == "json":
        typer.echo(json.dumps([_as_dict(e.raw, e.result) for e in result.entries]))
    else:
        for e in result.entries:
            console.print(_line(e.raw, e.result, cfg))

    if result.invalid:
        raise typer.Exit(code=1)


@app.command()
def batch(
    ctx: typer.Context,
    src: pathlib.Path = typer.Argument(..., help="File or directory with one ABN per line ('-' for stdin)"),
    only_invalid: bool = typer.Option(False, "--only-invalid", help="List only rejected values"),
):
    """Validate one ABN per line and print a summary."""
    cfg: AbnConfig = ctx.obj["config"]
    validator = BatchValidator(cfg)
    if str(src) == "-":
        result = validator.check_lines(_read_source(src).splitlines(), source="<stdin>")
    elif src.exists():
        result = validator.check_path(src)
    else:
        raise typer.BadParameter(f"{src} does not exist", param_hint="SRC")

    entries = [e for e in result.entries if not (only_invalid and e.result.ok)]
    if cfg.output.format == "json":
        typer.echo(json.dumps({
            "total": result.total,
            "valid": result.valid,
            "invalid": result.invalid,
            "reasons": result.reasons,
            "entries": [_as_dict(e.raw, e.result, source=e.source, line=e.line) for e in entries],
        }))
    else:
        for e in entries:
            console.print(_line(e.raw, e.result, cfg, prefix=f"{escape(e.source)}:{e.line}: "))
        console.print(_summary(result))

    log.info("batch_complete", total=result.total, invalid=result.invalid)
    if result.invalid:
        raise typer.Exit(code=1)


@app.command()
def find(
    ctx: typer.Context,
    src: pathlib.Path = typer.Argument(..., help="Text file to search ('-' for stdin)"),
):
    """List valid ABNs that appear anywhere in a text."""
    cfg: AbnConfig = ctx.obj["config"]
    backend = RegexBackend(rulesets=cfg.finder.rulesets, allow_group=cfg.group.enabled)
    spans = backend.detect(_read_source(src))

    if cfg.output.format == "json":
        typer.echo(json.dumps([
            {"start": s.start, "end": s.end, "text": s.text, "type": s.type, "abn": s.canonical}
            for s in spans
        ]))
    else:
        for s in spans:
            console.print(f"{s.start}-{s.end}\t{s.canonical}")
        console.print(f"Found {len(spans)} ABN(s)")

    log.info("find_complete", found=len(spans))
