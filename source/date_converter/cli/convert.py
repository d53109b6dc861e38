"""This module defines the 'convert' command of the date converter CLI."""

import json

import click
from date_converter.exceptions.conversion import DateConversionError
from date_converter.models.enums import ResolverStyle
from date_converter.providers.config import ConfigProvider
from date_converter.providers.formatter import DateFormatter
from date_converter.providers.logging import LoggingProvider
from date_converter.services.converter import LocalDateConverter
from sqlalchemy.dialects import sqlite
from sqlalchemy.sql import select


@click.command("convert")
@click.argument("value")
@click.option("--input-pattern", "-i", default=None, help="Pattern of VALUE. Defaults to ISO uuuu-MM-dd.")
@click.option("--output-pattern", "-o", default=None, help="Pattern of the output. Defaults to DATE_OUTPUT_PATTERN.")
@click.option(
    "--resolver-style",
    type=click.Choice([style.value for style in ResolverStyle], case_sensitive=False),
    default=None,
    help="How parsed fields are resolved. Defaults to DATE_RESOLVER_STYLE.",
)
@click.option("--sql", "show_sql", is_flag=True, help="Also print the date as a SQL DATE literal.")
@click.pass_context
def convert(
    ctx: click.Context,
    value: str,
    input_pattern: str | None,
    output_pattern: str | None,
    resolver_style: str | None,
    show_sql: bool,
) -> None:
    """Parses VALUE and prints it in the output pattern.

    Args:
        ctx: The Click context object.
        value: The date text to convert.
        input_pattern: The pattern of the value, or None for ISO.
        output_pattern: The output pattern, or None for the configured default.
        resolver_style: The resolver style name, or None for the configured default.
        show_sql: If True, also prints the SQL literal of the date.
    """
    logger = LoggingProvider().get_logger()
    config = ConfigProvider.get_config()
    style = ResolverStyle(resolver_style.upper()) if resolver_style else config.DATE_RESOLVER_STYLE
    output_pattern = output_pattern or config.DATE_OUTPUT_PATTERN

    try:
        if input_pattern:
            formatter = DateFormatter.of_pattern(input_pattern, style)
        else:
            formatter = DateFormatter.ISO_LOCAL_DATE.with_resolver_style(style)
        converter = LocalDateConverter.from_formatted_string(value, formatter)
        formatted = converter.to_formatted_string(output_pattern) if output_pattern else converter.to_string()
    except DateConversionError as e:
        logger.error(f"Conversion of '{value}' failed: {e}")
        click.secho(f"Error: {e}", fg="red", err=True)
        ctx.exit(1)

    logger.info(f"Converted '{value}' to {converter.to_string()}.")

    sql_literal = None
    if show_sql:
        statement = select(converter.to_sql_date())
        sql_literal = str(statement.compile(dialect=sqlite.dialect(), compile_kwargs={"literal_binds": True}))

    output_format = ctx.obj.output_format if ctx.obj else "text"
    if output_format == "json":
        payload = {"input": value, "date": converter.to_string(), "formatted": formatted}
        if sql_literal is not None:
            payload["sql"] = sql_literal
        click.echo(json.dumps(payload, ensure_ascii=False))
        return

    click.echo(formatted)
    if sql_literal is not None:
        click.echo(sql_literal)
