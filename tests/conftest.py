from pathlib import Path

import pytest
from fastapi.testclient import TestClient

import config
from db import database
from main import app
from utils.importer import populate_data
from utils.jobs import ImportJob


def _write_test_config(config_path: Path) -> None:
    config_path.write_text(
        "\n".join(
            [
                "[users]",
                'names = ["Soukaina", "Siham", "Chaimaa"]',
                "",
                "[import]",
                'source_url = "https://example.test/quran.json"',
                "timeout = 5",
            ]
        ),
        encoding="utf-8",
    )


@pytest.fixture
def sample_corpus():
    return [
        {
            "surah_number": 1,
            "surah_name": "الفاتحة",
            "revelation_place": "Meccan",
            "verses": [
                {"verse_number": n, "verse_text": f"al-fatiha {n}"} for n in range(1, 8)
            ],
        },
        {
            "surah_number": 2,
            "surah_name": "البقرة",
            "revelation_place": "Medinan",
            "verses": [
                {"verse_number": 3, "verse_text": "al-baqara 3"},
                {"verse_number": 1, "verse_text": "al-baqara 1"},
                {"verse_number": 2, "verse_text": "al-baqara 2"},
            ],
        },
        {"surah_number": 3, "surah_name": "", "verses": []},
        None,
    ]


@pytest.fixture
def empty_store(tmp_path, monkeypatch):
    """Config and database under tmp_path, schema created, no rows."""
    config_dir = tmp_path / ".hubcoran"
    config_dir.mkdir()
    config_path = config_dir / "config.toml"
    _write_test_config(config_path)
    for name in ("HUBCORAN_DB_PATH", "HUBCORAN_USERS", "HUBCORAN_SOURCE_URL", "HUBCORAN_IMPORT_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)

    monkeypatch.setattr(config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config, "CONFIG_PATH", config_path)
    db_path = config_dir / "hub_coran.db"
    monkeypatch.setattr(database, "DB_PATH", db_path)

    database.init_db()
    return db_path


@pytest.fixture
def store(empty_store, sample_corpus):
    """Store seeded with surah 1 (ayah ids 1-7) and surah 2 (ayah ids 8-10)."""
    with database.get_conn() as conn:
        populate_data(conn, sample_corpus)
    return empty_store


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(app.state, "import_job", ImportJob())
    return TestClient(app)
