"""Markdown anchor slugs.

Functions:
    slugify(text)                  -> str   anchor without leading '#'
    create_link(identifier, title) -> str   '#'-prefixed link target
"""

import re

# Removed in this order; multi-character sequences come before their parts.
_DROPPED = (
    "\"", "'", "`", ".", "/",
    "!", ",", "~", "&",
    "%", "^", "*", "#",
    "@", "|",
    "(", ")",
    "{", "}",
    "[", "]", "<", ">", "++", "==", "+", "=",
)

_ID_DOUBLE_DASH_RE = re.compile(r"[a-z]-[0-9][0-9]--")
_ID_RE = re.compile(r"[a-z]-[0-9][0-9]")


def slugify(text: str) -> str:
    """Return the heading anchor GitHub generates for *text*.

    "[L-01] Title" headings lose their brackets, which leaves the identifier
    followed by two hyphens; those collapse back to one.
    """
    slug = text.lower()
    for chars in _DROPPED:
        slug = slug.replace(chars, "")
    slug = slug.replace(" ", "-")

    found = _ID_RE.search(slug)
    identifier = found.group(0) if found else ""
    return _ID_DOUBLE_DASH_RE.sub(lambda _: identifier + "-", slug)


def create_link(identifier: str, title: str) -> str:
    return "#" + slugify(f"#{identifier} -{title}")
