"""
splitcalc command line.

Commands:
- repl: interactive read loop
- eval: evaluate one expression
"""

from __future__ import annotations

import logging
from typing import Optional

import typer

from .config import InterpreterConfig, load_config
from .errors import ConfigError
from .repl import Interpreter, repl

app = typer.Typer(
    help="Evaluate single-line arithmetic expressions.",
    no_args_is_help=True,
)


def configure_logging(level: int) -> None:
    """Send log records to stderr at the given level."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _load(config_path: Optional[str], tokens: bool, tree: bool) -> InterpreterConfig:
    try:
        config = load_config(config_path)
    except ConfigError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=2)

    updates = {}
    if tokens:
        updates["show_tokens"] = True
    if tree:
        updates["show_tree"] = True
    if updates:
        config = config.model_copy(update=updates)

    configure_logging(config.logging_level)
    return config


@app.command("repl")
def repl_command(
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="YAML config file"),
    tokens: bool = typer.Option(False, "--tokens", help="Print the token table for each line"),
    tree: bool = typer.Option(False, "--tree", help="Print the expression tree for each line"),
) -> None:
    """Read expressions from stdin and print their values."""
    config = _load(config_path, tokens, tree)
    repl(Interpreter(config))


@app.command("eval")
def eval_command(
    expression: str = typer.Argument(..., help="Expression to evaluate (put -- before it if it starts with -)"),
    config_path: Optional[str] = typer.Option(None, "--config", "-c", help="YAML config file"),
    tokens: bool = typer.Option(False, "--tokens", help="Print the token table"),
    tree: bool = typer.Option(False, "--tree", help="Print the expression tree"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Evaluate EXPRESSION and print its value.

    Examples:
        splitcalc eval "1+2*3"            # => 7
        splitcalc eval "(1+2)*3" --tree   # tree dump, then => 9
        splitcalc eval -- "-1+2"          # use -- when EXPRESSION starts with -
    """
    config = _load(config_path, tokens, tree)
    interpreter = Interpreter(config)
    report = interpreter.run_line(expression)

    if as_json:
        typer.echo(report.to_json())
    else:
        dump = interpreter.describe(report)
        if dump:
            typer.echo(dump)
        typer.echo(report.render(config.result_prefix), err=not report.success)

    if not report.success:
        raise typer.Exit(code=1)


def main() -> None:
    app()
