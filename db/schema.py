# SQL schema for the Hub Coran database

SCHEMA_VERSION = 1

SCHEMA_SQL = """
-- Chapters, numbered by the source document
CREATE TABLE IF NOT EXISTS surahs (
    id INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    revelation_type TEXT
);

-- Verses
CREATE TABLE IF NOT EXISTS ayahs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    surah_id INTEGER NOT NULL,
    verse_number INTEGER NOT NULL,
    text TEXT NOT NULL,
    FOREIGN KEY (surah_id) REFERENCES surahs (id)
);

-- One memorization flag per user per verse
CREATE TABLE IF NOT EXISTS progress (
    ayah_id INTEGER NOT NULL,
    user_name TEXT NOT NULL,
    is_memorized INTEGER DEFAULT 0,
    memorized_at DATE,
    PRIMARY KEY (ayah_id, user_name),
    FOREIGN KEY (ayah_id) REFERENCES ayahs (id)
);

-- Append-only notes
CREATE TABLE IF NOT EXISTS notes (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    ayah_id INTEGER NOT NULL,
    user_name TEXT NOT NULL,
    note_text TEXT NOT NULL,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    FOREIGN KEY (ayah_id) REFERENCES ayahs (id)
);
"""

INDEXES_SQL = """
CREATE INDEX IF NOT EXISTS idx_ayahs_surah_verse ON ayahs (surah_id, verse_number);
CREATE INDEX IF NOT EXISTS idx_progress_user ON progress (user_name);
CREATE INDEX IF NOT EXISTS idx_notes_ayah_created ON notes (ayah_id, created_at);
"""
