"""Tests for c4udit/reports/slug.py"""

import pytest

from c4udit.catalog import load_catalog
from c4udit.reports.slug import create_link, slugify


@pytest.mark.parametrize("text, expected", [
    ("Hello World",    "hello-world"),
    ("1. Foo",         "1-foo"),
    ("2. Bar (baz)",   "2-bar-baz"),
    ("a/b.c!d,e",      "abcde"),
    ("x ++ y == z",    "x--y--z"),
])
def test_slugify(text, expected):
    assert slugify(text) == expected


def test_create_link_collapses_identifier_double_dash():
    assert create_link("L-01", "Unsafe ERC20 Operation(s)") == "#l-01-unsafe-erc20-operations"


def test_create_link_strips_code_and_operators():
    link = create_link("G-06", "`++i` costs less gas compared to `i++` or `i += 1`")
    assert link == "#g-06-i-costs-less-gas-compared-to-i-or-i--1"


def test_create_link_matches_renumbered_heading():
    assert "#" + slugify("3. Open TODOs") == "#3-open-todos"


def test_slug_is_stable():
    assert create_link("N-02", "Declare `uint` as `uint256`") == create_link(
        "N-02", "Declare `uint` as `uint256`"
    )


def test_builtin_catalog_links_are_unique():
    links = [create_link(i.identifier, i.title) for i in load_catalog()]
    assert len(links) == len(set(links))
