"""Pattern scanner.

Usage:
    report = run(load_catalog(), ["contracts/Token.sol", "contracts/lib"])
"""

import os
import warnings
from pathlib import Path

from c4udit import C4uditError
from c4udit.catalog import compile_patterns
from c4udit.models import Finding, Issue, Report

SOURCE_SUFFIX = ".sol"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class ReadError(C4uditError):
    """Raised when an input file cannot be opened or read."""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def run(issues, paths) -> Report:
    """Scan *paths* for every issue in *issues* and return the Report.

    Directories are walked recursively for ``.sol`` files. Findings keep
    file order across the run and match order within a file.

    Raises:
        CatalogError: a pattern does not compile (before any file is read).
        ReadError:    any input cannot be read; no partial report is returned.
    """
    issues = list(issues)
    patterns = compile_patterns(issues)
    report = Report(issues=issues)

    for file in collect_files(paths):
        text = read_source(file)
        report.files_analyzed.append(file)
        for issue in issues:
            for finding in _match(issue, patterns[issue.identifier], file, text):
                report.add_finding(finding)

    return report


def collect_files(paths) -> list[str]:
    """Expand *paths* into the ordered list of files to scan."""
    files: list[str] = []
    for raw in paths:
        path = Path(raw)
        if not path.is_dir():
            files.append(str(raw))
            continue

        found = _walk_sources(path)
        if not found:
            warnings.warn(
                f"No {SOURCE_SUFFIX} files found under '{raw}'.",
                UserWarning,
                stacklevel=2,
            )
        files.extend(str(p) for p in found)
    return files


def read_source(file: str) -> str:
    """Return the full text of *file*.

    Raises:
        ReadError: if the file is missing or cannot be read.
    """
    try:
        with open(file, encoding="utf-8", errors="replace") as f:
            return f.read()
    except OSError as exc:
        raise ReadError(f"Unable to read '{file}': {exc.strerror or exc}") from exc


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _walk_sources(root: Path) -> list[Path]:
    """Every ``.sol`` entry under *root* that is not a directory, sorted.

    Entries that cannot be read (broken links, no permission) are kept so
    that ``read_source`` reports them; unlistable directories raise ReadError.
    """

    def _unlistable(exc: OSError) -> None:
        raise ReadError(
            f"Unable to read '{exc.filename or root}': {exc.strerror or exc}"
        ) from exc

    found: list[Path] = []
    for dirpath, _dirnames, filenames in os.walk(root, onerror=_unlistable):
        found += [
            Path(dirpath, name) for name in filenames
            if name.endswith(SOURCE_SUFFIX)
        ]
    return sorted(found)


def _match(issue: Issue, pattern, file: str, text: str) -> list[Finding]:
    findings: list[Finding] = []
    # Matches come in offset order, so line breaks are counted incrementally.
    line_number, counted_to = 1, 0
    for match in pattern.finditer(text):
        start = match.start()
        line_number += text.count("\n", counted_to, start)
        counted_to = start
        findings.append(Finding(
            issue_identifier=issue.identifier,
            file=file,
            line_number=line_number,
            line_content=_line_at(text, start),
        ))
    return findings


def _line_at(text: str, offset: int) -> str:
    """Return the stripped line of *text* containing *offset*."""
    begin = text.rfind("\n", 0, offset) + 1
    end = text.find("\n", offset)
    if end == -1:
        end = len(text)
    return text[begin:end].strip()
