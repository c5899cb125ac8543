from typing import List

from config import get_recognized_users, user_key


def mem_key(user_name: str) -> str:
    """Per-user flag key used in verse listings, e.g. 'Siham' -> 'siham_mem'."""
    return user_key(user_name) + "_mem"


def validate_user_name(user_name: str) -> str:
    name = (user_name or "").strip()
    users: List[str] = get_recognized_users()
    if name not in users:
        raise ValueError(f"Unknown user '{name}'. Expected one of: {', '.join(users)}")
    return name
