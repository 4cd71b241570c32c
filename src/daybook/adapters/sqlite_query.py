"""Search query builder for journal entry listings."""

from daybook.core.entries import EntryQuery, clamp_page, escape_like, unique_ids

from .sqlite_db import placeholders, to_db_date

LIKE_ESCAPE = "\\"


def build_search_sql(query: EntryQuery | None, offset: int, limit: int) -> tuple[str, list]:
    """
    Compose the summary search statement and its parameters.

    Every filter is optional and they combine with AND. Mood and tag sets
    require a link to every id: the count of distinct matching links per
    entry must equal the size of the set.
    """
    query = query or EntryQuery()
    offset, limit = clamp_page(offset, limit)

    sql = [
        "SELECT e.id, e.entry_date, e.title, e.category_id",
        "FROM journal_entries e",
        "WHERE 1=1",
    ]
    params: list = []

    if query.start_date:
        sql.append("AND e.entry_date >= ?")
        params.append(to_db_date(query.start_date))
    if query.end_date:
        sql.append("AND e.entry_date <= ?")
        params.append(to_db_date(query.end_date))

    if query.category_id:
        sql.append("AND e.category_id = ?")
        params.append(query.category_id)

    text = (query.search_text or "").strip()
    if text:
        pattern = f"%{escape_like(text.casefold(), LIKE_ESCAPE)}%"
        sql.append(
            f"AND (casefold(e.title) LIKE ? ESCAPE '{LIKE_ESCAPE}' "
            f"OR casefold(e.content) LIKE ? ESCAPE '{LIKE_ESCAPE}')"
        )
        params.extend([pattern, pattern])

    mood_ids = unique_ids(query.mood_ids)
    if mood_ids:
        sql.append(
            "AND (SELECT COUNT(DISTINCT m.mood_id) FROM journal_entry_moods m "
            f"WHERE m.entry_id = e.id AND m.mood_id IN ({placeholders(len(mood_ids))})) = ?"
        )
        params.extend(mood_ids)
        params.append(len(mood_ids))

    tag_ids = unique_ids(query.tag_ids)
    if tag_ids:
        sql.append(
            "AND (SELECT COUNT(DISTINCT t.tag_id) FROM journal_entry_tags t "
            f"WHERE t.entry_id = e.id AND t.tag_id IN ({placeholders(len(tag_ids))})) = ?"
        )
        params.extend(tag_ids)
        params.append(len(tag_ids))

    sql.append("ORDER BY e.entry_date DESC")
    sql.append("LIMIT ? OFFSET ?")
    params.extend([limit, offset])

    return "\n".join(sql), params
