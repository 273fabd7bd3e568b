from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import typer

from jsonmapping.conditions import CONDITION_REGISTRY
from jsonmapping.errors import MappingError
from jsonmapping.load import load_schema, load_transforms
from jsonmapping.mapper import JsonMapping
from jsonmapping.schema import node_names, parse_objects
from jsonmapping.transforms import BUILTIN_TRANSFORMS

app = typer.Typer(help="jsonmapping CLI")


# -----------------------------
# Helpers
# -----------------------------

def _configure_logger(verbose: bool) -> logging.Logger:
    logger = logging.getLogger("jsonmapping")
    if not logger.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[jsonmapping] %(message)s"))
        logger.addHandler(h)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return logger


def _fail(e: Exception) -> None:
    typer.secho(f"{type(e).__name__}: {e}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _read_input(src: Optional[Path]) -> str:
    if src is None or str(src) == "-":
        return sys.stdin.read()
    src = src.expanduser().resolve()
    if not src.is_file():
        raise typer.BadParameter(f"{src} not found")
    return src.read_text(encoding="utf-8")


# -----------------------------
# Commands
# -----------------------------

@app.command("apply")
def apply_cmd(
    schema: Path = typer.Argument(..., help="YAML (or JSON) mapping schema"),
    src: Optional[Path] = typer.Argument(None, help="Input JSON file ('-' or omitted = stdin)"),
    transform: List[str] = typer.Option(None, "--transform", "-t", help="name=module:attr (repeatable)"),
    builtins: bool = typer.Option(True, "--builtins/--no-builtins", help="Register built-in transforms"),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Write mapped JSON here"),
    indent: int = typer.Option(2, "--indent", help="JSON indent (0 = compact)"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Apply SCHEMA to a JSON document and print the mapped JSON."""
    logger = _configure_logger(verbose)
    text = _read_input(src)

    try:
        transforms = dict(BUILTIN_TRANSFORMS) if builtins else {}
        transforms.update(load_transforms(transform or []))
        mapping = JsonMapping(load_schema(schema), transforms=transforms, logger=logger)
        result = mapping.apply(text)
    except (MappingError, FileNotFoundError) as e:
        _fail(e)

    rendered = json.dumps(result, indent=indent or None)
    if out:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(rendered + "\n", encoding="utf-8")
        typer.secho(f"Wrote {out}", fg=typer.colors.GREEN)
    else:
        typer.echo(rendered)


@app.command("check")
def check_cmd(schema: Path = typer.Argument(..., help="YAML (or JSON) mapping schema")):
    """Validate SCHEMA structure and condition definitions without applying it."""
    try:
        mapping = JsonMapping(load_schema(schema))
        nodes = parse_objects(mapping.object_schemas)
    except (MappingError, FileNotFoundError) as e:
        _fail(e)

    typer.secho(
        f"OK: {len(nodes)} object(s), {len(mapping.conditions)} condition(s)",
        fg=typer.colors.GREEN,
    )
    for name in node_names(nodes):
        typer.echo(f"  - {name}")


@app.command("conditions")
def conditions_cmd():
    """List the available condition classes."""
    for kind in CONDITION_REGISTRY:
        typer.echo(kind)


if __name__ == "__main__":
    app()
