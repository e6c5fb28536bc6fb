"""
Client name autocomplete index.
Ranks previously used names by usage count, then recency.
"""

from database import get_db


def update_client_name(name: str) -> None:
    """
    Record one use of a client name (insert or bump usage_count).

    Args:
        name: Client name as stored on the reservation
    """
    name = (name or '').strip()
    if not name:
        return

    db = get_db()
    cursor = db.cursor()

    try:
        cursor.execute('''
            INSERT INTO client_names (name, usage_count, last_used)
            VALUES (?, 1, CURRENT_TIMESTAMP)
            ON CONFLICT(name) DO UPDATE SET
                usage_count = usage_count + 1,
                last_used = CURRENT_TIMESTAMP
        ''', (name,))
        db.commit()
    except Exception:
        db.rollback()
        raise


def get_client_name_suggestions(query: str, limit: int = 5) -> list:
    """
    Get names containing the query, most used first.

    Args:
        query: Substring typed so far
        limit: Maximum suggestions

    Returns:
        list: Name strings
    """
    query = (query or '').strip()
    if not query:
        return []

    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        SELECT name FROM client_names
        WHERE name LIKE ?
        ORDER BY usage_count DESC, last_used DESC
        LIMIT ?
    ''', (f'%{query}%', limit))
    return [row['name'] for row in cursor.fetchall()]


def get_all_client_names() -> list:
    """Get every indexed name with its counters (used by backups)."""
    db = get_db()
    cursor = db.cursor()
    cursor.execute('''
        SELECT name, usage_count, last_used FROM client_names
        ORDER BY usage_count DESC, last_used DESC
    ''')
    return [dict(row) for row in cursor.fetchall()]
