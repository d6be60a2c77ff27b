#!/usr/bin/env python
"""calc: evaluate arithmetic expressions from the command line.

Usage:
    calc eval "2 + 3 * 4"        # prints 14
    calc eval -- "-5 + 3"        # use -- when the expression starts with a sign
    calc rpn "2 + 3 * 4"         # prints the postfix form: 2 3 4 * +
    calc repl                    # interactive prompt, Ctrl-D to leave

Every option also reads a CALC_* environment variable, e.g. CALC_PRECISION=6.
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.markup import escape

from expr_errors import ExpressionError
from expr_eval import evaluate
from expr_parser import format_postfix, infix_to_postfix

DEFAULTS = {
    "precision": 12,
    "log_level": "WARNING",
    "prompt": "calc> ",
}

app = typer.Typer(
    name="calc",
    help="Evaluate arithmetic expressions (+ - * / ^, parentheses, decimal . or ,)",
    no_args_is_help=True,
)
console = Console(stderr=True)

# Let "-5+3" through as an argument instead of an unknown option.
EXPRESSION_ARGS = {"ignore_unknown_options": True}


def format_value(value: float, precision: int) -> str:
    return f"{value:.{precision}g}"


def report(err: ExpressionError) -> None:
    console.print(f"[red]error:[/red] {escape(str(err))}")


@app.callback()
def main(
    log_level: str = typer.Option(
        DEFAULTS["log_level"], "--log-level", envvar="CALC_LOG_LEVEL", help="DEBUG shows the postfix form of each expression"
    ),
) -> None:
    """Configure logging for all commands."""
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise typer.BadParameter(f"unknown log level: {log_level}", param_hint="--log-level")
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


@app.command("eval", context_settings=EXPRESSION_ARGS)
def cmd_eval(
    expression: str = typer.Argument(help="Expression to evaluate, e.g. '(2 + 3) * 4'"),
    precision: int = typer.Option(
        DEFAULTS["precision"], "--precision", "-p", envvar="CALC_PRECISION", min=1, max=17, help="Significant digits"
    ),
) -> None:
    """Evaluate one expression and print its value."""
    try:
        value = evaluate(expression)
    except ExpressionError as err:
        report(err)
        raise typer.Exit(1)
    typer.echo(format_value(value, precision))


@app.command("rpn", context_settings=EXPRESSION_ARGS)
def cmd_rpn(
    expression: str = typer.Argument(help="Expression to convert, e.g. '2 ^ 3 ^ 2'"),
) -> None:
    """Print the postfix (reverse Polish) form of an expression."""
    try:
        postfix = infix_to_postfix(expression)
    except ExpressionError as err:
        report(err)
        raise typer.Exit(1)
    typer.echo(format_postfix(postfix))


@app.command("repl")
def cmd_repl(
    precision: int = typer.Option(
        DEFAULTS["precision"], "--precision", "-p", envvar="CALC_PRECISION", min=1, max=17, help="Significant digits"
    ),
    prompt: str = typer.Option(DEFAULTS["prompt"], "--prompt", envvar="CALC_PROMPT"),
) -> None:
    """Read expressions line by line until EOF; errors don't end the session."""
    try:
        while True:
            expr = input(prompt).strip()
            if not expr:
                continue
            try:
                typer.echo(format_value(evaluate(expr), precision))
            except ExpressionError as err:
                report(err)
    except EOFError:
        console.print()
    except KeyboardInterrupt:
        console.print("\ninterrupted")


if __name__ == "__main__":
    app()
