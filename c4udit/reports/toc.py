"""Table-of-contents post-processor for rendered markdown reports.

Functions:
    convert_toc(text)       -> str   renumber issue tags and insert TOC blocks
    convert_toc_file(path)  -> str   same, reading the report from *path*

This works on the rendered text only (substring replacement), never on the
Report model, so it can be swapped for a document-tree rewrite without
touching the renderer.
"""

import re

from c4udit.reports.slug import slugify
from c4udit.scanner import read_source

QA_HEADING = "## QA Issues found"
GAS_HEADING = "## Gas Findings"

_LOW_TAG_RE = re.compile(r"\[L-[0-9][0-9]\].*")
_NC_TAG_RE = re.compile(r"\[N-[0-9][0-9]\].*")
_GAS_TAG_RE = re.compile(r"\[G-[0-9][0-9]\].*")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def convert_toc(text: str) -> str:
    """Rewrite a rendered report with numbered issues and TOC blocks.

    Low tags are replaced everywhere they occur; Non-Critical and Gas tags
    only at their first occurrence per match.
    """
    low_entries, text = _renumber(_LOW_TAG_RE, text, replace_all=True)
    nc_entries, text = _renumber(_NC_TAG_RE, text, replace_all=False)

    qa_toc = (
        "# Table of Contents\n"
        "Low\n"
        + "".join(low_entries)
        + "\nNon-Critical\n"
        + "".join(nc_entries)
    )
    text = text.replace(QA_HEADING, qa_toc)

    gas_entries, text = _renumber(_GAS_TAG_RE, text, replace_all=False)
    gas_toc = (
        "\n# Table of Contents\n"
        "Gas\n"
        + "".join(gas_entries)
        + "\n" + GAS_HEADING + "\n"
    )
    return text.replace(GAS_HEADING, gas_toc)


def convert_toc_file(path: str) -> str:
    """Read the markdown report at *path* and return the converted text.

    Raises:
        ReadError: if the report cannot be read.
    """
    return convert_toc(read_source(path))


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _renumber(pattern: re.Pattern, text: str, replace_all: bool) -> tuple[list[str], str]:
    """Replace each tagged match with ``"<n>.<rest>"``; return TOC lines and text.

    Matches are collected once, before any replacement, in document order.
    """
    entries: list[str] = []
    for number, tagged in enumerate(pattern.findall(text), start=1):
        numbered = f"{number}.{tagged.split(']')[1]}"
        entries.append(f"- [{numbered}](#{slugify(numbered)})\n")
        text = text.replace(tagged, numbered, -1 if replace_all else 1)
    return entries, text
