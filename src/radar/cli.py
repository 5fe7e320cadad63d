"""Radar CLI - attention stream."""

import json
import logging
import sys
from datetime import datetime

import click
import requests

from .adapters.errors import StoreError
from .config import load_config
from .core.render import format_item_line, format_stream, item_to_dict
from .core.views import View
from .workflows import complete_item, find_item, load_stream


def _as_of(target_date: datetime | None) -> datetime:
    """Reference instant: the start of --date, or now."""
    return target_date or datetime.now()


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


date_option = click.option(
    "--date", "-d", "target_date", default=None, type=click.DateTime(formats=["%Y-%m-%d"]),
    help="Evaluate as of this date (YYYY-MM-DD), defaults to now",
)


@click.group()
@click.version_option(package_name="radar")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Radar - what needs your attention next."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command()
@click.option("--view", "-v", "view_name", default=None,
              help="all, overdue, today, week or assigned")
@click.option("--max", "max_items", type=click.IntRange(min=0), default=None, help="Maximum items to show")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--no-filters", is_flag=True, help="Hide the view selector row")
@date_option
def stream(view_name: str | None, max_items: int | None, as_json: bool, no_filters: bool, target_date: datetime | None):
    """Show the ranked attention stream."""
    config = load_config()
    as_of = _as_of(target_date)

    try:
        view = View.parse(view_name) if view_name else None
        result = load_stream(config, view=view, max_items=max_items, as_of=as_of)
    except (ValueError, StoreError, requests.RequestException) as e:
        _fail(str(e))

    if as_json:
        click.echo(
            json.dumps(
                {
                    "view": result.view.value,
                    "total": result.stats.total,
                    "items": [item_to_dict(i, as_of) for i in result.items],
                },
                indent=2,
            )
        )
        return

    show_filters = config.show_filters and not no_filters
    click.echo(format_stream(result.items, result.stats, result.view, as_of, show_filters))


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@date_option
def stats(as_json: bool, target_date: datetime | None):
    """Show stream counters."""
    config = load_config()
    try:
        result = load_stream(config, view=View.ALL, as_of=_as_of(target_date))
    except (StoreError, requests.RequestException) as e:
        _fail(str(e))

    s = result.stats
    if as_json:
        click.echo(json.dumps({"total": s.total, "overdue": s.overdue, "today": s.today, "assigned": s.assigned}, indent=2))
        return

    click.echo(f"Total:    {s.total}")
    click.echo(f"Overdue:  {s.overdue}")
    click.echo(f"Today:    {s.today}")
    click.echo(f"Assigned: {s.assigned}")


@main.command()
@click.argument("collection")
@click.argument("item_id")
def complete(collection: str, item_id: str):
    """Mark a stream item as done."""
    config = load_config()
    try:
        item = complete_item(config, collection, item_id)
    except KeyError as e:
        _fail(str(e.args[0]) if e.args else str(e))
    except (StoreError, requests.RequestException) as e:
        _fail(str(e))

    click.echo(f"✓ Completed: {item.title}")


@main.command()
@click.argument("collection")
@click.argument("item_id")
@date_option
def show(collection: str, item_id: str, target_date: datetime | None):
    """Show a single stream item by collection and id."""
    config = load_config()
    as_of = _as_of(target_date)
    try:
        result = load_stream(config, view=View.ALL, as_of=as_of)
    except (StoreError, requests.RequestException) as e:
        _fail(str(e))

    item = find_item(result.stream, collection, item_id)
    if item is None:
        _fail(f"{collection}/{item_id} is not in the stream")

    click.echo(format_item_line(item, as_of))
    for key, value in item_to_dict(item, as_of).items():
        if value not in (None, "", False):
            click.echo(f"  {key:18} {value}")


if __name__ == "__main__":
    main()
