"""
String normalization helpers.

Small, stateless transforms for display text and identifiers: capitalizing,
collapsing whitespace, removing accents, building URL slugs, truncating,
and converting between camelCase and snake_case.
"""

import re
import unicodedata

from utilkit.utils.errors import InvalidArgument

_WHITESPACE = re.compile(r"\s+")
_NON_SLUG = re.compile(r"[^a-z0-9]+")
_WORD_BOUNDARY = re.compile(r"[^0-9a-zA-Z]+")
# Split "parseHTTPResponse" -> "parse", "HTTP", "Response"
_CAMEL_PARTS = re.compile(r"[A-Z]+(?=[A-Z][a-z]|[0-9]|\b|_)|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")


def capitalize(text: str) -> str:
    """Uppercase the first character and leave the rest untouched ("hELLO" -> "HELLO")."""
    return text[:1].upper() + text[1:]


def normalize_whitespace(text: str) -> str:
    """Collapse runs of whitespace to single spaces and trim both ends."""
    return _WHITESPACE.sub(" ", text).strip()


def strip_accents(text: str) -> str:
    """Remove combining marks: "Crème brûlée" -> "Creme brulee"."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def slugify(text: str, separator: str = "-") -> str:
    """
    Lowercase ASCII slug for URLs and file names.

    Accents are stripped, every run of other characters becomes one separator,
    and separators are trimmed from both ends.

    Example:
        >>> slugify("  Héllo, World! 2024 ")
        'hello-world-2024'
    """
    ascii_text = strip_accents(text).encode("ascii", "ignore").decode("ascii").lower()
    return _NON_SLUG.sub(separator, ascii_text).strip(separator)


def truncate(text: str, length: int, suffix: str = "...") -> str:
    """
    Shorten text to at most `length` characters including the suffix.

    Text that already fits is returned unchanged. When `length` is shorter
    than the suffix itself, the suffix is cut to fit.
    """
    if length < 0:
        raise InvalidArgument(f"length must be non-negative, got: {length}")
    if len(text) <= length:
        return text
    if length <= len(suffix):
        return suffix[:length]
    return text[: length - len(suffix)] + suffix


def _words(text: str):
    words = []
    for part in _WORD_BOUNDARY.split(text):
        words.extend(_CAMEL_PARTS.findall(part))
    return words


def camel_case(text: str) -> str:
    """Join words in lowerCamelCase: "hello_world" and "Hello World" both become "helloWorld"."""
    words = [w.lower() for w in _words(text)]
    if not words:
        return ""
    return words[0] + "".join(w.capitalize() for w in words[1:])


def snake_case(text: str) -> str:
    """Join words with underscores: "parseHTTPResponse" becomes "parse_http_response"."""
    return "_".join(w.lower() for w in _words(text))
