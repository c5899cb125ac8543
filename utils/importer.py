"""Load the Warsh Quran corpus into the surahs/ayahs tables.

The source document is a JSON list of chapter objects::

    {"surah_number": 1, "surah_name": "...", "revelation_place": "...",
     "verses": [{"verse_number": 1, "verse_text": "..."}, ...]}

Rows are written one at a time in source order. A failure stops the run
where it happened; chapters committed before it stay in the store.
"""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import requests

from config import load_config
from db.database import count_surahs, get_conn, init_db

logger = logging.getLogger(__name__)

SURAH_INSERT_SQL = "INSERT INTO surahs (id, name, revelation_type) VALUES (?, ?, ?)"
AYAH_INSERT_SQL = "INSERT INTO ayahs (surah_id, verse_number, text) VALUES (?, ?, ?)"

IMPORT_ERRORS = (requests.RequestException, ValueError, sqlite3.Error)


def fetch_quran_data(url: str, timeout: Optional[float] = None) -> List[Dict[str, Any]]:
    """Download the corpus and return the decoded chapter list."""
    logger.info("Downloading Quran corpus from %s", url)
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    payload = response.json()
    if not isinstance(payload, list):
        raise ValueError("Quran corpus must be a JSON list of chapters")
    return payload


def _is_valid_chapter(chapter: Any) -> bool:
    if not isinstance(chapter, dict) or not chapter.get("surah_name"):
        return False
    verses = chapter.get("verses") or []
    return isinstance(verses, list) and all(isinstance(verse, dict) for verse in verses)


def populate_data(conn: sqlite3.Connection, chapters: Iterable[Dict[str, Any]]) -> Dict[str, int]:
    counts = {"surahs": 0, "ayahs": 0, "skipped": 0}
    cursor = conn.cursor()
    for chapter in chapters:
        if not _is_valid_chapter(chapter):
            logger.warning("Skipping malformed chapter entry: %.80r", chapter)
            counts["skipped"] += 1
            continue
        surah_id = chapter.get("surah_number")
        cursor.execute(
            SURAH_INSERT_SQL,
            (surah_id, chapter["surah_name"], chapter.get("revelation_place")),
        )
        for verse in chapter.get("verses") or []:
            cursor.execute(
                AYAH_INSERT_SQL,
                (surah_id, verse.get("verse_number"), verse.get("verse_text")),
            )
            counts["ayahs"] += 1
        conn.commit()
        counts["surahs"] += 1
        logger.info("Surah %s (%s) loaded", surah_id, chapter["surah_name"])
    return counts


def run_import(
    db_path: Optional[Union[str, Path]] = None,
    url: Optional[str] = None,
    skip_if_populated: bool = False,
) -> Dict[str, Any]:
    """Fetch the corpus and insert it. Raises on network, decode or store errors."""
    import_cfg = load_config()["import"]
    url = url or import_cfg["source_url"]
    with get_conn(db_path) as conn:
        if skip_if_populated and count_surahs(conn):
            logger.info("Database already populated, skipping import")
            return {"surahs": 0, "ayahs": 0, "skipped": 0, "already_populated": True}
        chapters = fetch_quran_data(url, timeout=import_cfg["timeout"])
        counts = populate_data(conn, chapters)
    logger.info(
        "Import finished: %d surahs, %d ayahs, %d malformed chapters skipped",
        counts["surahs"],
        counts["ayahs"],
        counts["skipped"],
    )
    return {**counts, "already_populated": False}


def setup_database(db_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """Standalone setup: create the schema, then import only into an empty store."""
    init_db(db_path)
    try:
        return run_import(db_path, skip_if_populated=True)
    except IMPORT_ERRORS:
        logger.exception("Import failed")
        raise
