"""This module defines the 'pattern' command of the date converter CLI."""

import json

import click
from date_converter.exceptions.conversion import PatternError
from date_converter.providers.formatter import DateFormatter
from date_converter.providers.pattern import iter_fields


@click.command("pattern")
@click.argument("source", metavar="PATTERN")
@click.pass_context
def pattern(ctx: click.Context, source: str) -> None:
    """Validates a pattern and lists its compiled tokens.

    Args:
        ctx: The Click context object.
        source: The pattern to validate.
    """
    try:
        formatter = DateFormatter.of_pattern(source)
    except PatternError as e:
        click.secho(f"Invalid pattern: {e}", fg="red", err=True)
        ctx.exit(1)

    fields = iter_fields(formatter.tokens)
    unsupported = sorted({str(token.field) for token in fields if not token.field.is_date_based})

    output_format = ctx.obj.output_format if ctx.obj else "text"
    if output_format == "json":
        payload = {
            "pattern": source,
            "tokens": [str(token) for token in formatter.tokens],
            "unsupported_fields": unsupported,
        }
        click.echo(json.dumps(payload, ensure_ascii=False))
        return

    click.echo(formatter.describe())
    if unsupported:
        click.secho(f"Fields not available for dates: {', '.join(unsupported)}", fg="yellow")
