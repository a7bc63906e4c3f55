"""Issue catalog loading and validation.

Usage:
    issues = load_catalog()                     # built-in catalog
    issues = load_catalog("my-issues.yaml")     # raises CatalogError on bad catalog
    patterns = compile_patterns(issues)         # {"G-01": re.Pattern, ...}
    export_catalog("my-issues.yaml")            # writes the built-in catalog to disk
"""

import re
from pathlib import Path

import yaml

from c4udit import C4uditError
from c4udit.models import Issue, Severity

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "issues.yaml"

_REQUIRED_KEYS = ("id", "severity", "title", "pattern")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class CatalogError(C4uditError):
    """Raised when the issue catalog is missing or invalid."""


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

def load_catalog(catalog_path: str | Path | None = None) -> tuple[Issue, ...]:
    """Load and validate an issue catalog from a YAML file.

    With no path, the catalog shipped with the package is loaded. The file
    holds either a list of issue mappings or a mapping with an ``issues`` list.

    Raises:
        CatalogError: if the file is missing, malformed, has invalid entries
                      or a pattern that does not compile.
    """
    path = Path(catalog_path) if catalog_path is not None else DEFAULT_CATALOG_PATH

    if not path.exists():
        raise CatalogError(f"Catalog file not found: '{path}'")

    try:
        with path.open(encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise CatalogError(f"Failed to parse '{path}': {exc}") from exc

    if isinstance(raw, dict):
        raw = raw.get("issues")
    if not isinstance(raw, list):
        raise CatalogError(
            f"'{path}' must hold a list of issues (or an 'issues:' list) at the top level."
        )

    return _parse_entries(raw)


def _parse_entries(entries: list) -> tuple[Issue, ...]:
    """Build Issue records, raising CatalogError listing every bad entry."""
    errors: list[str] = []
    issues: list[Issue] = []
    seen: set[str] = set()

    for index, entry in enumerate(entries, start=1):
        if not isinstance(entry, dict):
            errors.append(f"  - entry #{index} is not a mapping")
            continue

        missing = [k for k in _REQUIRED_KEYS if not entry.get(k)]
        if missing:
            errors.append(f"  - entry #{index} is missing: {', '.join(missing)}")
            continue

        identifier = str(entry["id"]).strip()
        if identifier in seen:
            errors.append(f"  - duplicate issue id '{identifier}'")
            continue
        seen.add(identifier)

        try:
            severity = Severity.from_key(entry["severity"])
        except ValueError:
            errors.append(
                f"  - issue '{identifier}' has unknown severity '{entry['severity']}'"
                " (expected gas, low or non-critical)"
            )
            continue

        try:
            re.compile(str(entry["pattern"]))
        except re.error as exc:
            errors.append(f"  - pattern of issue '{identifier}' does not compile: {exc}")
            continue

        issues.append(Issue(
            identifier=identifier,
            severity=severity,
            title=str(entry["title"]),
            impact=str(entry.get("impact") or ""),
            pattern=str(entry["pattern"]),
            recommendation=str(entry.get("recommendation") or ""),
        ))

    if errors:
        raise CatalogError("Invalid catalog:\n" + "\n".join(errors))
    return tuple(issues)


def compile_patterns(issues) -> dict[str, re.Pattern]:
    """Compile every issue pattern, keyed by issue identifier.

    Raises:
        CatalogError: naming the first issue whose pattern does not compile.
    """
    compiled: dict[str, re.Pattern] = {}
    for issue in issues:
        try:
            compiled[issue.identifier] = re.compile(issue.pattern)
        except re.error as exc:
            raise CatalogError(
                f"Pattern of issue '{issue.identifier}' does not compile: {exc}"
            ) from exc
    return compiled


# ---------------------------------------------------------------------------
# Export (used by `--export-catalog`)
# ---------------------------------------------------------------------------

def dump_catalog(issues) -> str:
    """Serialize *issues* to catalog YAML."""
    entries = [
        {
            "id":             issue.identifier,
            "severity":       issue.severity.value,
            "title":          issue.title,
            "impact":         issue.impact,
            "pattern":        issue.pattern,
            "recommendation": issue.recommendation,
        }
        for issue in issues
    ]
    return yaml.safe_dump(
        {"issues": entries}, sort_keys=False, allow_unicode=True, width=1000,
    )


def export_catalog(output_path: str | Path, issues=None) -> None:
    """Write *issues* (default: the built-in catalog) to *output_path*.

    Raises:
        CatalogError: if the file already exists.
    """
    path = Path(output_path)
    if path.exists():
        raise CatalogError(
            f"'{output_path}' already exists. Remove it first or choose a different path."
        )
    if issues is None:
        issues = load_catalog()
    path.write_text(dump_catalog(issues), encoding="utf-8")
