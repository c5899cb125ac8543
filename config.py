import tomllib
import re
import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional
from dotenv import load_dotenv
import os

CONFIG_DIR = Path.home() / ".hubcoran"
CONFIG_PATH = CONFIG_DIR / "config.toml"
PROJECT_CONFIG_EXAMPLE = Path(__file__).parent / "config.toml"

DEFAULT_USERS = ["Soukaina", "Siham", "Chaimaa"]
DEFAULT_SOURCE_URL = (
    "https://raw.githubusercontent.com/thetruetruth/quran-data-kfgqpc/main/warsh/data/warshData_v10.json"
)


def user_key(name: str) -> str:
    """Case-insensitive identifier for a user name, e.g. 'Umm Kulthum' -> 'umm_kulthum'."""
    return re.sub(r"\W", "_", name.strip().lower())


def _clean_names(names) -> List[str]:
    cleaned: List[str] = []
    seen = set()
    for name in names:
        name = str(name).strip()
        # names that differ only in case or punctuation share one key
        if name and user_key(name) not in seen:
            seen.add(user_key(name))
            cleaned.append(name)
    return cleaned


def load_config() -> Dict[str, Any]:
    """Load config from ~/.hubcoran/config.toml, copy example if missing, load .env overrides."""
    load_dotenv()
    if not CONFIG_PATH.exists():
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        shutil.copy(PROJECT_CONFIG_EXAMPLE, CONFIG_PATH)
    with open(CONFIG_PATH, "rb") as f:
        config = tomllib.load(f)

    db_cfg = config.get("database", {})
    config["database"] = {
        "path": os.getenv("HUBCORAN_DB_PATH", db_cfg.get("path", str(CONFIG_DIR / "hub_coran.db"))),
    }
    users_cfg = config.get("users", {})
    env_users = os.getenv("HUBCORAN_USERS")
    if env_users is not None:
        names = env_users.split(",")
    else:
        names = users_cfg.get("names", DEFAULT_USERS)
    config["users"] = {"names": _clean_names(names)}
    import_cfg = config.get("import", {})
    config["import"] = {
        "source_url": os.getenv("HUBCORAN_SOURCE_URL", import_cfg.get("source_url", DEFAULT_SOURCE_URL)),
        "timeout": float(os.getenv("HUBCORAN_IMPORT_TIMEOUT", import_cfg.get("timeout", 60))),
    }
    logging_cfg = config.get("logging", {})
    config["logging"] = {
        "level": os.getenv("LOG_LEVEL", logging_cfg.get("level", "INFO")).upper(),
    }
    return config


def get_config_value(section: str, key: str, default: Optional[Any] = None) -> Any:
    """Get nested config value, e.g., get_config_value('import', 'source_url')."""
    config = load_config()
    value = config.get(section, {}).get(key, default)
    return value


def get_recognized_users() -> List[str]:
    """Ordered list of user names whose progress is tracked and reported."""
    return list(get_config_value("users", "names", DEFAULT_USERS))
