"""Daybook CLI - Personal Journal."""

import asyncio
import json
import logging
import sys
from datetime import date
from pathlib import Path

import click

from .config import load_config
from .core.entries import EntryQuery, MoodSelection, clamp_page
from .errors import DaybookError, NotFoundError
from .workflows import (
    Services,
    open_services,
    resolve_category_id,
    resolve_mood_ids,
    resolve_mood_selection,
    resolve_tag_ids,
)

DATE = click.DateTime(formats=["%Y-%m-%d"])


def _run(ctx: click.Context, action):
    """Open services, run an async action with them, and report domain errors."""
    config = ctx.obj["config"]

    async def runner():
        services = await open_services(config)
        return await action(services)

    try:
        return asyncio.run(runner())
    except DaybookError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _as_date(value) -> date | None:
    return value.date() if value is not None else None


def _echo_json(data) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


@click.group()
@click.version_option(package_name="daybook")
@click.option("--db", "db_path", type=click.Path(path_type=Path), default=None, help="Database file")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, db_path: Path | None, debug: bool):
    """Daybook - Personal Journal CLI."""
    config = load_config()
    if db_path is not None:
        config.database_path = db_path

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else getattr(logging, config.log_level, logging.WARNING),
    )

    ctx.ensure_object(dict)
    ctx.obj["config"] = config


@main.command()
@click.pass_context
def init(ctx):
    """Create the journal database."""

    async def action(services: Services):
        return services.db.path

    path = _run(ctx, action)
    click.echo(f"Journal ready at {path}")


# ============== Entries ==============


def _entry_dict(entry, selection, tag_names: list[str], mood_names: dict[str, str], category_name: str) -> dict:
    return {
        "id": entry.id,
        "date": entry.entry_date.isoformat(),
        "title": entry.title,
        "content": entry.content,
        "category": category_name,
        "primary_mood": mood_names.get(selection.primary_mood_id, "Unknown") if selection else None,
        "secondary_moods": [mood_names.get(m, "Unknown") for m in selection.secondary_mood_ids] if selection else [],
        "tags": tag_names,
        "created_at": entry.created_at.isoformat(),
        "updated_at": entry.updated_at.isoformat(),
    }


@main.command()
@click.argument("entry_date", type=DATE, required=False)
@click.option("--title", "-t", required=True, help="Entry title")
@click.option("--content", "-m", default=None, help="Entry text (opens $EDITOR when omitted)")
@click.option("--category", "-c", default="Reflection", show_default=True, help="Category name")
@click.option("--mood", required=True, help="Primary mood name")
@click.option("--also", "secondary", multiple=True, help="Secondary mood name (up to two)")
@click.option("--tag", "tags", multiple=True, help="Tag name, created if new")
@click.pass_context
def write(ctx, entry_date, title, content, category, mood, secondary, tags):
    """Write the entry for a day (default today)."""
    target = _as_date(entry_date) or date.today()
    if content is None:
        content = click.edit("") or ""

    async def action(services: Services):
        category_id = await resolve_category_id(services, category)
        selection = await resolve_mood_selection(services, mood, list(secondary))
        tag_ids = await resolve_tag_ids(services, list(tags))
        return await services.journal.create(target, category_id, selection, tag_ids, title, content)

    entry = _run(ctx, action)
    click.echo(f"Saved entry for {entry.entry_date.strftime('%A, %b %d')}: {entry.title}")


@main.command()
@click.argument("entry_date", type=DATE)
@click.option("--title", "-t", default=None, help="New title")
@click.option("--content", "-m", default=None, help="New text")
@click.option("--category", "-c", default=None, help="New category name")
@click.option("--mood", default=None, help="New primary mood name")
@click.option("--also", "secondary", multiple=True, help="Secondary mood name (replaces existing)")
@click.option("--tag", "tags", multiple=True, help="Tag name (replaces existing)")
@click.option("--clear-tags", is_flag=True, help="Remove all tags")
@click.pass_context
def edit(ctx, entry_date, title, content, category, mood, secondary, tags, clear_tags):
    """Edit the entry for a day. Omitted fields are kept."""
    target = _as_date(entry_date)

    async def action(services: Services):
        journal = services.journal
        entry = await journal.get_by_date(target)
        if entry is None:
            raise NotFoundError(f"No entry for {target.isoformat()}.")

        category_id = await resolve_category_id(services, category) if category else entry.category_id

        selection = await journal.get_mood_selection(entry.id)
        if secondary:
            primary = mood
            if primary is None:
                primary_names = {m.id: m.name for m in await journal.moods.list_all()}
                primary = primary_names.get(selection.primary_mood_id, "") if selection else ""
            selection = await resolve_mood_selection(services, primary, list(secondary))
        elif mood:
            (primary_id,) = await resolve_mood_ids(services, [mood])
            kept = [m for m in selection.secondary_mood_ids if m != primary_id] if selection else []
            selection = MoodSelection(primary_mood_id=primary_id, secondary_mood_ids=kept)

        if clear_tags:
            tag_ids = []
        elif tags:
            tag_ids = await resolve_tag_ids(services, list(tags))
        else:
            tag_ids = await journal.get_tag_ids(entry.id)

        return await journal.update(
            entry.id,
            category_id,
            selection,
            tag_ids,
            title if title is not None else entry.title,
            content if content is not None else entry.content,
        )

    entry = _run(ctx, action)
    click.echo(f"Updated entry for {entry.entry_date.strftime('%A, %b %d')}: {entry.title}")


@main.command()
@click.argument("entry_date", type=DATE)
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete(ctx, entry_date, yes: bool):
    """Delete the entry for a day."""
    target = _as_date(entry_date)
    if not yes:
        click.confirm(f"Delete the entry for {target.isoformat()}?", abort=True)

    async def action(services: Services):
        entry = await services.journal.get_by_date(target)
        if entry is None:
            return False
        await services.journal.delete(entry.id)
        return True

    if _run(ctx, action):
        click.echo(f"Deleted entry for {target.isoformat()}.")
    else:
        click.echo(f"No entry for {target.isoformat()}.")


@main.command()
@click.argument("entry_date", type=DATE, required=False)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def show(ctx, entry_date, as_json: bool):
    """Show the entry for a day (default today)."""
    target = _as_date(entry_date) or date.today()

    async def action(services: Services):
        journal = services.journal
        entry = await journal.get_by_date(target)
        if entry is None:
            return None
        selection = await journal.get_mood_selection(entry.id)
        tag_ids = await journal.get_tag_ids(entry.id)
        tag_names = {t.id: t.name for t in await journal.tags.get_by_ids(tag_ids)}
        mood_names = {m.id: m.name for m in await journal.moods.list_all()}
        categories = await journal.categories.get_by_ids([entry.category_id])
        category_name = categories[0].name if categories else "Unknown"
        return _entry_dict(entry, selection, [tag_names.get(t, "Unknown") for t in tag_ids], mood_names, category_name)

    data = _run(ctx, action)

    if data is None:
        if as_json:
            _echo_json(None)
        else:
            click.echo(f"No entry for {target.strftime('%A, %b %d')}.")
        return

    if as_json:
        _echo_json(data)
        return

    moods = data["primary_mood"] or "Unknown"
    if data["secondary_moods"]:
        moods += f" (also {', '.join(data['secondary_moods'])})"
    click.echo(f"## {data['title']}")
    click.echo(f"{target.strftime('%A, %b %d')} · {data['category']} · {moods}")
    if data["tags"]:
        click.echo(" ".join(f"#{t}" for t in data["tags"]))
    if data["content"]:
        click.echo()
        click.echo(data["content"])


@main.command("list")
@click.option("--search", "-s", default=None, help="Text to find in title or content")
@click.option("--from", "start", type=DATE, default=None, help="First date (YYYY-MM-DD)")
@click.option("--to", "end", type=DATE, default=None, help="Last date (YYYY-MM-DD)")
@click.option("--category", "-c", default=None, help="Category name")
@click.option("--mood", "moods", multiple=True, help="Entries with every given mood")
@click.option("--tag", "tags", multiple=True, help="Entries with every given tag")
@click.option("--page", type=int, default=1, show_default=True, help="Page number")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_entries(ctx, search, start, end, category, moods, tags, page: int, as_json: bool):
    """List entries, newest first."""
    page_size = ctx.obj["config"].page_size
    offset, limit = clamp_page((max(page, 1) - 1) * page_size, page_size)
    filtered = any([search, start, end, category, moods, tags])

    async def action(services: Services):
        if not filtered:
            return await services.journal.get_list_page(offset, limit)
        query = EntryQuery(
            search_text=search,
            start_date=_as_date(start),
            end_date=_as_date(end),
            category_id=await resolve_category_id(services, category) if category else None,
            mood_ids=await resolve_mood_ids(services, list(moods)),
            tag_ids=await resolve_tag_ids(services, list(tags), create=False),
        )
        return await services.journal.search_list_page(query, offset, limit)

    items = _run(ctx, action)

    if as_json:
        _echo_json(
            [
                {
                    "id": i.id,
                    "date": i.entry_date.isoformat(),
                    "title": i.title,
                    "category": i.category_name,
                    "primary_mood": i.primary_mood_name,
                    "tags": i.tags,
                }
                for i in items
            ]
        )
        return

    if not items:
        click.echo("No entries found.")
        return

    for item in items:
        tags_str = f"  #{' #'.join(item.tags)}" if item.tags else ""
        click.echo(f"{item.entry_date.isoformat()}  {item.title}  [{item.category_name} · {item.primary_mood_name}]{tags_str}")


# ============== Dashboard ==============


@main.command()
@click.option("--from", "start", type=DATE, default=None, help="First date (default: earliest entry)")
@click.option("--to", "end", type=DATE, default=None, help="Last date (default: today)")
@click.option("--top", type=int, default=None, help="Number of top tags")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def stats(ctx, start, end, top, as_json: bool):
    """Show mood, tag, category and word-count analytics."""
    top_tags = top if top is not None else ctx.obj["config"].top_tags

    async def action(services: Services):
        return await services.analytics.get_report(_as_date(start), _as_date(end), top_tags)

    report = _run(ctx, action)
    mood = report.most_frequent_mood

    if as_json:
        _echo_json(
            {
                "range_start": report.range_start.isoformat(),
                "range_end": report.range_end.isoformat(),
                "total_entries": report.total_entries,
                "total_words": report.total_words,
                "mood_distribution": [
                    {"category": p.category.label, "count": p.count, "percentage": round(p.percentage, 2)}
                    for p in report.mood_distribution
                ],
                "most_frequent_mood": (
                    {"name": mood.name, "category": mood.category.label, "count": mood.count} if mood else None
                ),
                "top_tags": [{"name": t.name, "count": t.count} for t in report.top_tags],
                "category_breakdown": [{"name": c.name, "count": c.count} for c in report.category_breakdown],
                "word_count_trend": [
                    {"date": p.date.isoformat(), "word_count": p.word_count} for p in report.word_count_trend
                ],
            }
        )
        return

    click.echo(f"### {report.range_start.isoformat()} to {report.range_end.isoformat()}")
    click.echo(f"Entries: {report.total_entries}  Words: {report.total_words}")
    click.echo()
    click.echo("Moods:")
    for p in report.mood_distribution:
        click.echo(f"  {p.category.label:8} {p.count:4}  {p.percentage:5.1f}%")
    if mood:
        click.echo(f"  Most frequent: {mood.name} ({mood.count})")
    if report.top_tags:
        click.echo("Top tags:")
        for t in report.top_tags:
            click.echo(f"  #{t.name} ({t.count})")
    if report.category_breakdown:
        click.echo("Categories:")
        for c in report.category_breakdown:
            click.echo(f"  {c.name} ({c.count})")


@main.command()
@click.option("--from", "start", type=DATE, default=None, help="First date (default: earliest entry)")
@click.option("--to", "end", type=DATE, default=None, help="Last date (default: today)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def streak(ctx, start, end, as_json: bool):
    """Show current and longest writing streaks."""

    async def action(services: Services):
        return await services.streaks.calculate(_as_date(start), _as_date(end))

    report = _run(ctx, action)

    if as_json:
        _echo_json(
            {
                "range_start": report.range_start.isoformat(),
                "range_end": report.range_end.isoformat(),
                "current_streak": report.current_streak,
                "longest_streak": report.longest_streak,
                "missed_days": [d.isoformat() for d in report.missed_days],
            }
        )
        return

    click.echo(f"Current streak: {report.current_streak} day(s)")
    click.echo(f"Longest streak: {report.longest_streak} day(s)")
    click.echo(f"Missed days: {len(report.missed_days)}")


# ============== Vocabulary ==============


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def moods(ctx, as_json: bool):
    """List moods."""

    async def action(services: Services):
        return await services.journal.moods.list_all()

    items = _run(ctx, action)
    if as_json:
        _echo_json([{"id": m.id, "name": m.name, "category": m.category.label} for m in items])
        return
    for m in items:
        click.echo(f"{m.category.label:8} {m.name}")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def categories(ctx, as_json: bool):
    """List categories with their entry counts."""

    async def action(services: Services):
        journal = services.journal
        return await journal.categories.list_all(), await journal.count_by_category()

    items, counts = _run(ctx, action)
    if as_json:
        _echo_json([{"id": c.id, "name": c.name, "entries": counts.get(c.id, 0)} for c in items])
        return
    for c in items:
        click.echo(f"{c.name} ({counts.get(c.id, 0)})")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def tags(ctx, as_json: bool):
    """List tags."""

    async def action(services: Services):
        return await services.journal.tags.list_all()

    items = _run(ctx, action)
    if as_json:
        _echo_json([{"id": t.id, "name": t.name, "predefined": t.is_predefined} for t in items])
        return
    if not items:
        click.echo("No tags.")
        return
    for t in items:
        click.echo(f"#{t.name}")


@main.command("tag-add")
@click.argument("name")
@click.pass_context
def tag_add(ctx, name: str):
    """Add a tag (returns the existing one if the name is taken)."""

    async def action(services: Services):
        return await services.journal.tags.get_or_create(name)

    tag = _run(ctx, action)
    click.echo(f"#{tag.name} ({tag.id})")
