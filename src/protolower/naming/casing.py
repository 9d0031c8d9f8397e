"""Identifier case conversion and comment formatting."""

from __future__ import annotations

import re
import textwrap

# Common initialisms, upper-cased by camel_case when use_acronyms is set.
ACRONYMS = frozenset(
    {
        "ACL",
        "API",
        "ASCII",
        "CPU",
        "CSS",
        "DNS",
        "EOF",
        "GUID",
        "HTML",
        "HTTP",
        "HTTPS",
        "ID",
        "IP",
        "JSON",
        "JWT",
        "OK",
        "RPC",
        "SQL",
        "SSH",
        "TCP",
        "TLS",
        "TTL",
        "UDP",
        "UI",
        "UID",
        "UUID",
        "URI",
        "URL",
        "UTF8",
        "XML",
    }
)

_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")


def _words(name: str) -> list[str]:
    return _WORD_RE.findall(name)


def camel_case(name: str, first_upper: bool, use_acronyms: bool = True) -> str:
    """Return the CamelCase form of ``name``.

    Characters other than ASCII letters and digits are dropped and act as
    word separators. Lower-case words after the first get an upper-case
    first letter; existing capitals are kept.

    Args:
        name: Arbitrary string
        first_upper: Whether the first character is upper case
        use_acronyms: Upper-case known initialisms (``"api"`` -> ``"API"``)

    Returns:
        The identifier, or ``""`` if no letter or digit survives

    Example:
        >>> camel_case("user-api_key", True, use_acronyms=False)
        'UserApiKey'
        >>> camel_case("user-api_key", True)
        'UserAPIKey'
    """
    words = _words(name)
    if not words:
        return ""

    parts = []
    for i, word in enumerate(words):
        if use_acronyms and word.upper() in ACRONYMS:
            word = word.upper()
        elif i > 0:
            word = word[0].upper() + word[1:]
        parts.append(word)

    first = parts[0]
    if first_upper:
        parts[0] = first[0].upper() + first[1:]
    elif first.isupper():
        # Leading initialism: lower it as a unit ("ID" -> "id").
        parts[0] = first.lower()
    else:
        parts[0] = first[0].lower() + first[1:]
    return "".join(parts)


def snake_case(name: str) -> str:
    """Return the lower_snake_case form of ``name``.

    Word breaks are inserted at lower-to-upper transitions and at the end of
    an upper-case run followed by a capitalized word. Runs of characters that
    are neither letters, digits nor underscores become a single underscore.

    Example:
        >>> snake_case("userID")
        'user_id'
        >>> snake_case("HTTPServer")
        'http_server'
    """
    s = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name.strip())
    s = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", s)
    s = re.sub(r"[^A-Za-z0-9_]+", "_", s)
    s = re.sub(r"_+", "_", s)
    return s.lower()


def comment(text: str, width: int = 80) -> str:
    """Format ``text`` as ``//`` comment lines wrapped at ``width`` columns."""
    lines: list[str] = []
    for paragraph in text.strip().splitlines():
        lines.extend(textwrap.wrap(paragraph, width=max(width - 3, 1)) or [""])
    return "\n".join(f"// {line}".rstrip() for line in lines)
