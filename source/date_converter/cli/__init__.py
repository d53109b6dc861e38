"""This module initializes the CLI application."""

import uuid

import click
from date_converter.cli.convert import convert
from date_converter.cli.pattern import pattern
from date_converter.providers.logging import LoggingProvider


class Context:
    """A context object to pass global options to subcommands."""

    def __init__(self, output_format: str):
        """Initializes the context.

        Args:
            output_format: The desired output format ('text' or 'json').
        """
        self.output_format = output_format


def create_cli() -> click.Group:
    """Create and configure the main CLI group with all subcommands.

    Returns:
        The main Click command group for the application.
    """

    @click.group()
    @click.option(
        "--log-level",
        type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
        help="Override the default log level for this command.",
    )
    @click.option(
        "--output",
        type=click.Choice(["text", "json"], case_sensitive=False),
        default="text",
        help="Set the output format.",
    )
    @click.pass_context
    def cli(ctx: click.Context, log_level: str | None, output: str) -> None:
        """Convert calendar dates between strings, patterns and database values.

        Args:
            ctx: The Click context object.
            log_level: The desired logging level.
            output: The desired output format.
        """
        provider = LoggingProvider()
        provider.get_logger(level_override=log_level)
        ctx.with_resource(provider.set_invocation_id(uuid.uuid4().hex[:8]))
        ctx.obj = Context(output_format=output.lower())

    cli.add_command(convert)
    cli.add_command(pattern)

    return cli
