"""
Tests for utilkit/text/strings.py
"""

import pytest

from utilkit.text.strings import (
    camel_case,
    capitalize,
    normalize_whitespace,
    slugify,
    snake_case,
    strip_accents,
    truncate,
)
from utilkit.utils.errors import InvalidArgument


def test_capitalize_only_touches_first_character():
    assert capitalize("hello world") == "Hello world"
    assert capitalize("hELLO") == "HELLO"
    assert capitalize("") == ""


def test_normalize_whitespace():
    assert normalize_whitespace("  a \t b\n\nc  ") == "a b c"


def test_strip_accents():
    assert strip_accents("Crème brûlée") == "Creme brulee"


def test_slugify():
    assert slugify("  Héllo, World! 2024 ") == "hello-world-2024"
    assert slugify("already-a-slug") == "already-a-slug"
    assert slugify("Snake Case", separator="_") == "snake_case"
    assert slugify("!!!") == ""


def test_truncate():
    assert truncate("short", 10) == "short"
    assert truncate("Hello, world", 8) == "Hello..."
    assert truncate("Hello", 2) == ".."
    assert truncate("Hello, world", 6, suffix="…") == "Hello…"

    with pytest.raises(InvalidArgument):
        truncate("text", -1)


def test_camel_case():
    assert camel_case("hello_world") == "helloWorld"
    assert camel_case("Hello World") == "helloWorld"
    assert camel_case("hello-world-again") == "helloWorldAgain"
    assert camel_case("") == ""


def test_snake_case():
    assert snake_case("helloWorld") == "hello_world"
    assert snake_case("parseHTTPResponse") == "parse_http_response"
    assert snake_case("Hello World") == "hello_world"
    assert snake_case("version2Update") == "version_2_update"
