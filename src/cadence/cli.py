"""Cadence CLI - task interpreter and planner."""

import json
import logging
import sys
from datetime import date

import click

from .config import load_config
from .core.context import Dialog, process_text
from .core.detectors import CATEGORY_COLORS
from .core.lexicon import LEXICONS, get_lexicon
from .core.planner import filter_tasks
from .core.records import Frequency, Priority, TaskRecord
from .core.schedule import visible_week
from .ports.task_store import StoreError
from .workflows import (
    InstanceMaterializationError,
    confirm_task,
    create_task_from_text,
    delete_task,
    get_store,
    load_day,
    load_week_counts,
)

DIALOGS = {
    "smart": Dialog.SMART_TASK,
    "quick": Dialog.QUICK_ADD,
}


def _parse_date(value: str | None) -> date:
    if not value:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"Expected YYYY-MM-DD, got {value!r}")


def _format_record(record: TaskRecord) -> str:
    """One planner line: time, title, location, completion mark."""
    time_str = record.start_time or "--:--"
    done = "x" if record.completed else " "
    loc = f" @ {record.location}" if record.location else ""
    return f"[{done}] {time_str:5} {record.title}{loc}  ({record.type}, {record.id})"


@click.group()
@click.version_option()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Cadence - turn sentences into planner tasks."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command()
@click.argument("text")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--dialog", type=click.Choice(sorted(DIALOGS)), default="smart",
              help="Full context (smart) or type/date/time only (quick)")
@click.option("--lang", type=click.Choice(sorted(LEXICONS)), default=None,
              help="Keyword language, defaults to LANGUAGE in config")
@click.option("--date", "-d", "ref_date", default=None,
              help="Reference date for relative phrases (YYYY-MM-DD)")
def parse(text: str, as_json: bool, dialog: str, lang: str | None, ref_date: str | None):
    """Interpret a sentence without saving it."""
    lexicon = get_lexicon(lang or load_config().language)
    context = process_text(
        text, today=_parse_date(ref_date), lexicon=lexicon, dialog=DIALOGS[dialog]
    )

    if as_json:
        click.echo(json.dumps(context.to_dict(), indent=2, ensure_ascii=False))
        return

    click.echo(f"Title:    {context.title}")
    click.echo(f"Type:     {context.type} ({context.confidence:.0%})")
    click.echo(f"When:     {context.date} {context.time or ''}".rstrip())
    if context.location:
        click.echo(f"Where:    {context.location}")
    if context.people:
        click.echo(f"With:     {', '.join(context.people)}")
    if context.category:
        click.echo(f"Category: {context.category} {context.suggested_color or ''}".rstrip())


@main.command()
@click.argument("text")
@click.option("--frequency", "-f", type=click.Choice([f.value for f in Frequency]),
              default=Frequency.ONCE.value, help="How often the task recurs")
@click.option("--priority", "-p", type=click.Choice([p.value for p in Priority]),
              default=Priority.MEDIUM.value, help="Priority (for habits, how often it shows)")
@click.option("--duration", default=None,
              help="Duration in minutes or a label like 15min, 1h, 1h30")
@click.option("--confirm", "confirmed", is_flag=True, help="Put it on the planner right away")
def add(text: str, frequency: str, priority: str, duration: str | None, confirmed: bool):
    """Interpret a sentence and save it to the inbox."""
    config = load_config()
    try:
        store = get_store(config)
        record = create_task_from_text(
            store,
            text,
            config.user_id,
            frequency=frequency,
            inbox_only=not confirmed,
            priority=priority,
            duration=duration,
            lexicon=get_lexicon(config.language),
            horizons=config.horizons,
        )
    except InstanceMaterializationError as e:
        click.echo(f"Error: {e}", err=True)
        click.echo(f"Task {e.parent_id} was saved without its instances.", err=True)
        sys.exit(1)
    except StoreError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    where = "planner" if not record.inbox_only else "inbox"
    click.echo(f"Added to {where}: {_format_record(record)} on {record.scheduled_date}")


@main.command()
@click.argument("task_id")
def confirm(task_id: str):
    """Move an inbox task onto the planner."""
    config = load_config()
    try:
        store = get_store(config)
        record = confirm_task(store, task_id, horizons=config.horizons)
    except StoreError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Confirmed: {record.title} on {record.scheduled_date}")


@main.command()
@click.option("--date", "-d", "target_date", default=None,
              help="Day to show (YYYY-MM-DD), defaults to today")
@click.option("--completed", is_flag=True, help="Only completed items")
@click.option("--area", type=click.Choice(["all", *CATEGORY_COLORS]), default="all",
              help="Only items in this category")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def day(target_date: str | None, completed: bool, area: str, as_json: bool):
    """Show the planner for one day."""
    config = load_config()
    target = _parse_date(target_date)
    try:
        view = load_day(get_store(config), config.user_id, target)
    except StoreError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    timeline = filter_tasks(view.timeline, only_completed=completed, area=area)
    if as_json:
        click.echo(json.dumps([r.to_row() for r in timeline], indent=2, ensure_ascii=False))
        return

    if not timeline:
        click.echo(f"Nothing planned for {target.strftime('%A, %b %d')}.")
        return

    click.echo(f"### {target.strftime('%A, %B %d')}")
    for record in timeline:
        click.echo(f"  {_format_record(record)}")


@main.command()
@click.option("--date", "-d", "target_date", default=None,
              help="Any day in the week (YYYY-MM-DD), defaults to today")
def week(target_date: str | None):
    """Show how many items each day of the week holds."""
    config = load_config()
    anchor = _parse_date(target_date)
    try:
        counts = load_week_counts(get_store(config), config.user_id, anchor)
    except StoreError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    for d in visible_week(anchor):
        marker = "*" if d == date.today() else " "
        click.echo(f"{marker} {d.strftime('%a %d')}  {counts.get(d, 0)}")


@main.command()
@click.argument("task_id")
def done(task_id: str):
    """Toggle a task's completion."""
    config = load_config()
    try:
        store = get_store(config)
        record = store.get(task_id)
        view = load_day(store, config.user_id, record.scheduled_date or date.today())
        toggled = view.toggle_completion(task_id)
    except StoreError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    state = "done" if toggled.completed else "not done"
    click.echo(f"Marked {state}: {toggled.title}")


@main.command()
@click.argument("task_id")
def delete(task_id: str):
    """Delete a task and its recurring instances."""
    config = load_config()
    try:
        store = get_store(config)
        record = store.get(task_id)
        delete_task(store, record)
    except StoreError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Deleted: {record.title}")
