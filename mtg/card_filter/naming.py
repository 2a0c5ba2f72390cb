"""
Name normalization helpers.

Provides the comparison keys used by the index and matcher, and the
filesystem-safe slug used by the Markdown export.
"""
import re

DEFAULT_KEY_SEPARATOR = "|"


def normalize_name(text: str) -> str:
    """
    Normalize a card name or set code for comparison.

    Transforms: "  Lightning Bolt " -> "lightning bolt"
    """
    if not text:
        return ""
    return text.strip().lower()


def index_key(name: str, set_code: str, separator: str = DEFAULT_KEY_SEPARATOR) -> str:
    """Build the exact (name, set) lookup key."""
    return f"{normalize_name(name)}{separator}{normalize_name(set_code)}"


def sanitize_filename(name: str) -> str:
    """
    Convert a card name to a filesystem-safe slug.

    Transforms: "Jace, the Mind Sculptor" -> "jace-the-mind-sculptor"

    Args:
        name: Card name as printed

    Returns:
        Lowercase slug with only a-z, 0-9 and hyphens
    """
    if not name:
        return ""
    t = name.lower()
    t = re.sub(r"[^a-z0-9\s-]", "", t)
    t = re.sub(r"\s+", "-", t)
    t = re.sub(r"-+", "-", t)
    return t.strip("-")
