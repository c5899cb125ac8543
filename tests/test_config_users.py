from pathlib import Path

import config
from utils.users import mem_key


def _use_config(tmp_path: Path, monkeypatch, text: str) -> None:
    config_dir = tmp_path / ".hubcoran"
    config_dir.mkdir()
    config_path = config_dir / "config.toml"
    config_path.write_text(text, encoding="utf-8")
    monkeypatch.setattr(config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config, "CONFIG_PATH", config_path)
    for name in ("HUBCORAN_DB_PATH", "HUBCORAN_USERS", "HUBCORAN_SOURCE_URL", "HUBCORAN_IMPORT_TIMEOUT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_users_from_config_file_trimmed_and_deduplicated(tmp_path, monkeypatch):
    _use_config(tmp_path, monkeypatch, '[users]\nnames = ["Amina", " Yusuf ", "Amina", ""]\n')

    assert config.get_recognized_users() == ["Amina", "Yusuf"]


def test_users_env_override(tmp_path, monkeypatch):
    _use_config(tmp_path, monkeypatch, '[users]\nnames = ["Amina"]\n')
    monkeypatch.setenv("HUBCORAN_USERS", "Soukaina, Siham")

    assert config.get_recognized_users() == ["Soukaina", "Siham"]


def test_defaults_when_sections_missing(tmp_path, monkeypatch):
    _use_config(tmp_path, monkeypatch, "")

    cfg = config.load_config()

    assert cfg["users"]["names"] == config.DEFAULT_USERS
    assert cfg["import"]["source_url"] == config.DEFAULT_SOURCE_URL
    assert cfg["import"]["timeout"] == 60.0
    assert cfg["database"]["path"] == str(tmp_path / ".hubcoran" / "hub_coran.db")
    assert cfg["logging"]["level"] == "INFO"


def test_example_config_copied_on_first_load(tmp_path, monkeypatch):
    config_dir = tmp_path / ".hubcoran"
    monkeypatch.setattr(config, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config, "CONFIG_PATH", config_dir / "config.toml")
    monkeypatch.delenv("HUBCORAN_USERS", raising=False)

    users = config.get_recognized_users()

    assert (config_dir / "config.toml").exists()
    assert users == ["Soukaina", "Siham", "Chaimaa"]


def test_mem_key_normalizes_names():
    assert mem_key("Siham") == "siham_mem"
    assert mem_key("Umm Kulthum") == "umm_kulthum_mem"


def test_users_differing_only_in_case_collapse(tmp_path, monkeypatch):
    _use_config(tmp_path, monkeypatch, '[users]\nnames = ["Siham", "siham", "SIHAM ", "Chaimaa"]\n')

    users = config.get_recognized_users()

    assert users == ["Siham", "Chaimaa"]
    assert len({mem_key(name) for name in users}) == len(users)
