from __future__ import annotations

import sqlite3
from typing import Any, Dict, List, Sequence

from utils.users import mem_key


def list_surahs(conn: sqlite3.Connection) -> List[Dict[str, Any]]:
    cursor = conn.cursor()
    cursor.execute("SELECT id, name, revelation_type FROM surahs ORDER BY id")
    return [dict(row) for row in cursor.fetchall()]


def surah_progress_summary(
    conn: sqlite3.Connection, surah_id: int, users: Sequence[str]
) -> Dict[str, Any]:
    """Verse count for a surah plus memorized counts for each recognized user.

    Runs as two separate queries; a write landing between them is visible
    in the second count only.
    """
    summary: Dict[str, Any] = {
        "total_verses": 0,
        "progress": {user: 0 for user in users},
    }
    cursor = conn.cursor()
    cursor.execute("SELECT COUNT(*) AS total FROM ayahs WHERE surah_id = ?", (surah_id,))
    summary["total_verses"] = int(cursor.fetchone()["total"])

    cursor.execute(
        """
        SELECT p.user_name, COUNT(p.ayah_id) AS memorized_count
        FROM progress p
        JOIN ayahs a ON a.id = p.ayah_id
        WHERE a.surah_id = ? AND p.is_memorized = 1
        GROUP BY p.user_name
        """,
        (surah_id,),
    )
    for row in cursor.fetchall():
        # names outside the configured set are not reported
        if row["user_name"] in summary["progress"]:
            summary["progress"][row["user_name"]] = int(row["memorized_count"])
    return summary


def surah_verses_with_progress(
    conn: sqlite3.Connection, surah_id: int, users: Sequence[str]
) -> List[Dict[str, Any]]:
    """Every verse of a surah in order, with one 0/1 flag column per user."""
    columns = []
    params: list[object] = []
    for user in users:
        columns.append(
            f'MAX(CASE WHEN p.user_name = ? THEN p.is_memorized ELSE 0 END) AS "{mem_key(user)}"'
        )
        params.append(user)
    flag_sql = "".join(f",\n            {column}" for column in columns)
    params.append(surah_id)
    cursor = conn.cursor()
    cursor.execute(
        f"""
        SELECT
            a.id, a.verse_number, a.text{flag_sql}
        FROM ayahs a
        LEFT JOIN progress p ON a.id = p.ayah_id
        WHERE a.surah_id = ?
        GROUP BY a.id
        ORDER BY a.verse_number, a.id
        """,
        params,
    )
    verses = []
    for row in cursor.fetchall():
        verse = dict(row)
        for user in users:
            key = mem_key(user)
            verse[key] = int(verse[key] or 0)
        verses.append(verse)
    return verses


def set_memorization(
    conn: sqlite3.Connection, *, ayah_id: int, user_name: str, is_memorized: bool
) -> None:
    """Insert or overwrite the (ayah, user) flag, stamping today's date."""
    cursor = conn.cursor()
    cursor.execute(
        """
        INSERT INTO progress (ayah_id, user_name, is_memorized, memorized_at)
        VALUES (?, ?, ?, CURRENT_DATE)
        ON CONFLICT(ayah_id, user_name) DO UPDATE SET
            is_memorized = excluded.is_memorized,
            memorized_at = CURRENT_DATE
        """,
        (ayah_id, user_name, 1 if is_memorized else 0),
    )
    conn.commit()


def add_note(conn: sqlite3.Connection, *, ayah_id: int, user_name: str, note_text: str) -> int:
    cursor = conn.cursor()
    cursor.execute(
        "INSERT INTO notes (ayah_id, user_name, note_text) VALUES (?, ?, ?)",
        (ayah_id, user_name, note_text),
    )
    conn.commit()
    return int(cursor.lastrowid)


def list_notes(conn: sqlite3.Connection, ayah_id: int) -> List[Dict[str, Any]]:
    cursor = conn.cursor()
    cursor.execute(
        """
        SELECT user_name, note_text, created_at
        FROM notes
        WHERE ayah_id = ?
        ORDER BY created_at DESC, id DESC
        """,
        (ayah_id,),
    )
    return [dict(row) for row in cursor.fetchall()]
