"""
Command-line interface for text-to-calendar.

Parses free text into a calendar event and prints what was extracted,
which rules fired, and the confidence score.

Usage:
    text-to-calendar parse "Lunch with Sam tomorrow at noon"
    text-to-calendar parse --now "2025-01-10 10:00" --json "Standup 9-9:15am"
    echo "Call mom at 6" | text-to-calendar --debug parse -
"""

import json
import os
from datetime import datetime

import click

from src.config.settings import get_settings
from src.event_parsing import EventParser, EventParsingConfig
from src.observability.logging import get_logger, setup_logging

NOW_FORMATS = ["%Y-%m-%d %H:%M", "%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M:%S"]


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging and rule tracing")
@click.pass_context
def main(ctx: click.Context, debug: bool) -> None:
    """Text to Calendar - turn free text into calendar events."""
    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"
        get_settings.cache_clear()

    setup_logging()

    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug or get_settings().debug


@main.command()
@click.argument("text")
@click.option(
    "--now",
    "now",
    default=None,
    type=click.DateTime(formats=NOW_FORMATS),
    help="Reference time (YYYY-MM-DD HH:MM), defaults to the current time",
)
@click.option("--json", "as_json", is_flag=True, help="Print the event as JSON")
@click.pass_context
def parse(ctx: click.Context, text: str, now: datetime | None, as_json: bool) -> None:
    """Parse TEXT into a calendar event. Use '-' to read from stdin."""
    logger = get_logger(__name__)

    if text == "-":
        text = click.get_text_stream("stdin").read()

    config = EventParsingConfig(trace_rules=True) if ctx.obj["debug"] else EventParsingConfig()
    event = EventParser(config=config).parse(text, now=now)
    logger.info(
        "event_parsed",
        confidence=event.confidence,
        date_rule=event.date_rule,
        time_rule=event.time_rule,
        duration_rule=event.duration_rule,
    )

    if as_json:
        click.echo(json.dumps(event.to_dict(), indent=2))
        return

    click.echo(f"\n{event.title}")
    click.echo("-" * 40)
    click.echo(f"  Start:      {event.start:%Y-%m-%d %H:%M}")
    click.echo(f"  End:        {event.end:%Y-%m-%d %H:%M}")
    click.echo(f"  Date rule:  {event.date_rule}")
    click.echo(f"  Time rule:  {event.time_rule}")
    click.echo(f"  Duration:   {event.duration_rule}")
    click.echo(f"  Text:       {event.description.strip()}")
    click.echo("-" * 40)

    color = "green" if event.confidence >= 0.7 else "yellow" if event.confidence >= 0.4 else "red"
    click.echo(click.style(f"Confidence: {event.confidence:.2f}", fg=color))


if __name__ == "__main__":
    main()
