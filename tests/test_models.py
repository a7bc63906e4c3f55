"""Tests for c4udit/models.py"""

import pytest

from c4udit.models import Finding, Issue, Report, Severity


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _issue(identifier: str, severity: Severity = Severity.LOW) -> Issue:
    return Issue(identifier, severity, f"Title {identifier}", "", "x", "")


def _report() -> Report:
    return Report(issues=[
        _issue("G-01", Severity.GAS),
        _issue("L-01", Severity.LOW),
        _issue("L-02", Severity.LOW),
        _issue("N-01", Severity.NON_CRITICAL),
    ])


# ---------------------------------------------------------------------------
# Severity
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("key, expected", [
    ("gas",              Severity.GAS),
    ("Gas-Optimization", Severity.GAS),
    ("low",              Severity.LOW),
    ("LOW_RISK",         Severity.LOW),
    ("non-critical",     Severity.NON_CRITICAL),
    ("NC",               Severity.NON_CRITICAL),
])
def test_severity_from_key(key, expected):
    assert Severity.from_key(key) is expected


def test_severity_from_unknown_key_raises():
    with pytest.raises(ValueError):
        Severity.from_key("critical")


def test_severity_labels():
    assert Severity.GAS.label == "Gas Optimization"
    assert Severity.NON_CRITICAL.label == "Non-Critical"
    assert Severity.LOW.label == "Low Risk"


# ---------------------------------------------------------------------------
# Finding
# ---------------------------------------------------------------------------

def test_finding_str():
    finding = Finding("L-04", "src/Token.sol", 12, "// TODO")
    assert str(finding) == "src/Token.sol::12 => // TODO\n"


def test_issue_is_immutable():
    issue = _issue("L-01")
    with pytest.raises(AttributeError):
        issue.title = "changed"


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------

def test_add_finding_keeps_order():
    report = _report()
    report.add_finding(Finding("L-01", "a.sol", 3, "a"))
    report.add_finding(Finding("L-01", "a.sol", 1, "b"))
    assert [f.line_number for f in report.findings_per_issue["L-01"]] == [3, 1]


def test_add_finding_unknown_issue_raises():
    report = _report()
    with pytest.raises(KeyError, match="X-99"):
        report.add_finding(Finding("X-99", "a.sol", 1, ""))
    assert report.findings_per_issue == {}


def test_findings_for_issue_without_findings_is_empty():
    report = _report()
    assert report.findings_for(report.issues[0]) == []


def test_issues_with_findings_follows_catalog_order():
    report = _report()
    report.add_finding(Finding("N-01", "a.sol", 1, ""))
    report.add_finding(Finding("L-02", "a.sol", 2, ""))
    report.add_finding(Finding("G-01", "a.sol", 3, ""))

    assert [i.identifier for i in report.issues_with_findings()] == ["G-01", "L-02", "N-01"]
    assert [i.identifier for i in report.issues_with_findings(Severity.LOW)] == ["L-02"]


def test_summary_counts_by_severity():
    report = _report()
    report.files_analyzed = ["a.sol", "b.sol"]
    report.add_finding(Finding("L-01", "a.sol", 1, ""))
    report.add_finding(Finding("L-02", "b.sol", 1, ""))
    report.add_finding(Finding("G-01", "b.sol", 2, ""))

    s = report.summary()
    assert s["files_analyzed"] == 2
    assert s["total"] == 3
    assert s["by_severity"] == {"gas": 1, "non-critical": 0, "low": 2}


def test_to_dict_omits_issues_without_findings():
    report = _report()
    report.add_finding(Finding("L-01", "a.sol", 7, "foo();"))

    data = report.to_dict()
    assert [i["id"] for i in data["issues"]] == ["L-01"]
    assert data["issues"][0]["findings"] == [
        {"issue": "L-01", "file": "a.sol", "line": 7, "content": "foo();"}
    ]
