"""Tag slugs and tag colours.

Both the export command and the search page derive a tag's path and colour
from its name with these functions, so a tag looks the same on every page
without storing a colour anywhere.
"""

import re

_NON_WORD = re.compile(r"[^A-Za-z0-9_\s-]")
_SEPARATORS = re.compile(r"[\s_-]+")

SATURATION = 40
LIGHTNESS = 60
ALPHA = 0.6


def slugify(value: str) -> str:
    """Convert a tag or title into a URL-safe slug.

    Examples:
        >>> slugify("Hello World")
        'hello-world'
        >>> slugify("  react_native!  ")
        'react-native'
    """
    slug = _NON_WORD.sub("", value.lower())
    slug = _SEPARATORS.sub("-", slug)
    return slug.strip("-")


def hash_code(value: str) -> int:
    """Hash a string to a non-negative integer.

    Accumulates ``hash * 31 + unit`` over the UTF-16 code units of ``value``
    with signed 32-bit wraparound, then takes the absolute value.
    """
    encoded = value.encode("utf-16-le")
    result = 0
    for i in range(0, len(encoded), 2):
        unit = int.from_bytes(encoded[i : i + 2], "little")
        result = (result * 31 + unit) & 0xFFFFFFFF
    if result >= 0x80000000:
        result -= 0x100000000
    return abs(result)


def colour_from_string(value: str) -> str:
    """Return the HSLA colour for a string (normally a tag slug).

    Examples:
        >>> colour_from_string("go")
        'hsla(64,40%,60%,0.6)'
    """
    hue = hash_code(value) % 360
    return f"hsla({hue},{SATURATION}%,{LIGHTNESS}%,{ALPHA})"
