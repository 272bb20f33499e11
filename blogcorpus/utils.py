import math
import re
import unicodedata

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9\s_-]")
_SEPARATORS = re.compile(r"[\s_-]+")


def calculate_reading_time(text: str, words_per_minute: int = 200) -> str:
    words = text.split()
    minutes = math.ceil(len(words) / words_per_minute) or 1
    return f"{minutes} min"


def slugify(title: str) -> str:
    """Lowercase ASCII slug for a title, e.g. 'Welcome to my Blog' -> 'welcome-to-my-blog'."""
    ascii_title = (
        unicodedata.normalize("NFKD", title).encode("ascii", "ignore").decode("ascii")
    )
    cleaned = _NON_SLUG_CHARS.sub("", ascii_title.lower())
    return _SEPARATORS.sub("-", cleaned).strip("-")
