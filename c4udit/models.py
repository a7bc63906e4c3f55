"""Data models for c4udit reports.

Contains the types shared by the scanner and the renderers:
    - Severity   closed set of issue classifications
    - Issue      one catalog entry (pattern + texts)
    - Finding    one pattern match in one analyzed file
    - Report     files analyzed + findings per issue
"""

from dataclasses import dataclass, field
from enum import Enum


# ---------------------------------------------------------------------------
# Severity
# ---------------------------------------------------------------------------

class Severity(Enum):
    GAS = "gas"
    NON_CRITICAL = "non-critical"
    LOW = "low"

    @property
    def label(self) -> str:
        return _SEVERITY_LABELS[self]

    @classmethod
    def from_key(cls, key: str) -> "Severity":
        """Return the severity for a catalog key such as ``"low"``.

        Raises:
            ValueError: if *key* names no severity.
        """
        normalized = str(key).strip().lower().replace("_", "-")
        return cls(_SEVERITY_ALIASES.get(normalized, normalized))


_SEVERITY_LABELS = {
    Severity.GAS:          "Gas Optimization",
    Severity.NON_CRITICAL: "Non-Critical",
    Severity.LOW:          "Low Risk",
}

_SEVERITY_ALIASES = {
    "gas-optimization": "gas",
    "gasop":            "gas",
    "nc":               "non-critical",
    "low-risk":         "low",
}


# ---------------------------------------------------------------------------
# Catalog entries and matches
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Issue:
    identifier: str
    severity: Severity
    title: str
    impact: str
    pattern: str
    recommendation: str


@dataclass(frozen=True)
class Finding:
    issue_identifier: str
    file: str
    line_number: int
    line_content: str

    def __str__(self) -> str:
        return f"{self.file}::{self.line_number} => {self.line_content}\n"

    def to_dict(self) -> dict:
        return {
            "issue":   self.issue_identifier,
            "file":    self.file,
            "line":    self.line_number,
            "content": self.line_content,
        }


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------

@dataclass
class Report:
    """End result of an analysis.

    ``findings_per_issue`` is keyed by issue identifier; every key must name
    an issue in ``issues``. Issues without findings stay in ``issues`` but
    are skipped by the renderers.
    """

    issues: list[Issue]
    files_analyzed: list[str] = field(default_factory=list)
    findings_per_issue: dict[str, list[Finding]] = field(default_factory=dict)

    def add_finding(self, finding: Finding) -> None:
        """Append *finding* to its issue's list, keeping discovery order.

        Raises:
            KeyError: if the finding references an issue not in the report.
        """
        if finding.issue_identifier not in self._identifiers():
            raise KeyError(
                f"Finding references unknown issue '{finding.issue_identifier}'"
            )
        self.findings_per_issue.setdefault(finding.issue_identifier, []).append(finding)

    def findings_for(self, issue: Issue) -> list[Finding]:
        return self.findings_per_issue.get(issue.identifier, [])

    def issues_with_findings(self, severity: Severity | None = None) -> list[Issue]:
        """Issues (in catalog order) that have at least one finding."""
        return [
            issue for issue in self.issues
            if self.findings_for(issue)
            and (severity is None or issue.severity is severity)
        ]

    def summary(self) -> dict:
        by_severity = {s.value: 0 for s in Severity}
        for issue in self.issues:
            by_severity[issue.severity.value] += len(self.findings_for(issue))

        return {
            "files_analyzed": len(self.files_analyzed),
            "total":          sum(by_severity.values()),
            "by_severity":    by_severity,
        }

    def to_dict(self) -> dict:
        return {
            "files_analyzed": list(self.files_analyzed),
            "summary": self.summary(),
            "issues": [
                {
                    "id":       issue.identifier,
                    "severity": issue.severity.value,
                    "title":    issue.title,
                    "findings": [f.to_dict() for f in self.findings_for(issue)],
                }
                for issue in self.issues_with_findings()
            ],
        }

    def _identifiers(self) -> set[str]:
        return {issue.identifier for issue in self.issues}
