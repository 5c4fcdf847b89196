"""Password strength rules applied at registration."""

import re

MIN_PASSWORD_LENGTH = 6

_REQUIRED_CHARACTER_CLASSES: tuple[re.Pattern[str], ...] = (
    re.compile(r"[a-z]"),
    re.compile(r"[A-Z]"),
    re.compile(r"[0-9]"),
    re.compile(r"[^A-Za-z0-9]"),
)


def is_password_allowed(password: str) -> bool:
    """Return True when the password is long enough and mixes every character class."""
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        return False
    return all(pattern.search(password) for pattern in _REQUIRED_CHARACTER_CLASSES)
