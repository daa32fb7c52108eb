"""
exprcalc CLI - Entry point.

Commands:
- eval: Compile and evaluate one expression
- tree: Show the compiled tree of one expression
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from exprcalc._version import get_version
from exprcalc.core.config import CalcConfig, load_config
from exprcalc.core.errors import ExecutionError, ParseError
from exprcalc.core.expression_lang import compile_program, execute
from exprcalc.core.ir import Node, NumberValue, StringValue, Value, VariableValue

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

app = typer.Typer(
    help="exprcalc - evaluate arithmetic expressions with variables and functions",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version and exit."""
    if value:
        typer.echo(f"exprcalc {get_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version",
    ),
) -> None:
    """exprcalc CLI main callback for global options."""
    pass


def parse_binding(binding: str) -> tuple[str, Value]:
    """Parse NAME=VALUE into an environment binding.

    Numbers become NumberValue, identifiers become VariableValue (an alias
    resolved at evaluation time), anything else a StringValue.
    """
    name, sep, raw = binding.partition("=")
    name = name.strip()
    if not sep or not _IDENTIFIER.match(name):
        raise typer.BadParameter(f"Expected NAME=VALUE, got {binding!r}")
    raw = raw.strip()
    try:
        return name, NumberValue(value=float(raw))
    except ValueError:
        pass
    if _IDENTIFIER.match(raw):
        return name, VariableValue(name=raw)
    return name, StringValue(value=raw)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _load(config_path: Path | None, stdlib: bool) -> CalcConfig:
    config = load_config(config_path) if config_path else CalcConfig()
    if not stdlib:
        config = config.model_copy(update={"stdlib": False})
    return config


@app.command("eval")
def eval_command(
    expression: Annotated[str, typer.Argument(help="Expression to evaluate")],
    var: Annotated[
        list[str] | None,
        typer.Option("--var", "-D", help="Bind NAME=VALUE (repeatable)"),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to exprcalc.toml"),
    ] = None,
    stdlib: Annotated[
        bool, typer.Option("--stdlib/--no-stdlib", help="Bind built-in math functions")
    ] = True,
    verbose: Annotated[bool, typer.Option("--verbose", help="Debug logging")] = False,
) -> None:
    """
    Compile and evaluate EXPRESSION.

    Example: exprcalc eval "sin(1) * 10 * pi"
    """
    _configure_logging(verbose)
    try:
        config = _load(config_path, stdlib)
    except ValidationError as e:
        err_console.print(
            f"[red]Invalid config {escape(str(config_path))}:[/red] {escape(str(e))}",
            highlight=False,
        )
        raise typer.Exit(code=1) from e

    variables = config.environment()
    for binding in var or []:
        name, value = parse_binding(binding)
        variables[name] = value
    logger.debug("Environment has %d binding(s)", len(variables))

    try:
        program = compile_program(expression, config)
        result = execute(program, variables, config)
    except (ParseError, ExecutionError) as e:
        err_console.print(f"[red]Error ({e.kind}):[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(code=1) from e

    console.print(str(result), highlight=False)


@app.command("tree")
def tree_command(
    expression: Annotated[str, typer.Argument(help="Expression to compile")],
) -> None:
    """Show the compiled tree of EXPRESSION with source spans."""
    try:
        program = compile_program(expression)
    except ParseError as e:
        err_console.print(f"[red]Error ({e.kind}):[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(code=1) from e

    console.print(_render(program.root, Tree(_describe(program.root))))


def _describe(node: Node) -> str:
    if node.location is None:
        return escape(node.atom.label)
    return f"{escape(node.atom.label)} [dim]{node.location} {escape(repr(node.location.text))}[/dim]"


def _render(node: Node, branch: Tree) -> Tree:
    for child in node.atom.children:
        _render(child, branch.add(_describe(child)))
    return branch


def main() -> None:
    app()


if __name__ == "__main__":
    main()
