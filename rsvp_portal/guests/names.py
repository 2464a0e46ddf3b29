"""Name normalization shared by lookup and submission."""

LIKE_ESCAPE_CHAR = "\\"


def normalize_name(value: str | None) -> str:
    """Trim and lowercase a name for case-insensitive matching."""
    return (value or "").strip().lower()


def clean_name(value: str | None) -> str | None:
    """Trim a submitted name, returning None when nothing is left."""
    trimmed = (value or "").strip()
    return trimmed or None


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input is matched literally."""
    return (
        value.replace(LIKE_ESCAPE_CHAR, LIKE_ESCAPE_CHAR * 2)
        .replace("%", f"{LIKE_ESCAPE_CHAR}%")
        .replace("_", f"{LIKE_ESCAPE_CHAR}_")
    )
