"""Report renderers.

Functions:
    render_markdown(report, toc=False) -> str   Code4rena-style markdown report
    render_text(report)                -> str   plain-text summary for stdout

Section layout of the markdown report:

    # c4udit Report
    ## Files analyzed
    [# Table of Contents       Low + Non-Critical links]
    ## QA Issues found
    ## Low Findings
    ## Non-Critical Findings
    [# Table of Contents       Gas links]
    ## Gas Findings
    #### Tools used

``## QA Issues found`` and ``## Gas Findings`` are the anchors the TOC
post-processor (``c4udit.reports.toc``) rewrites.
"""

from c4udit.models import Issue, Report, Severity
from c4udit.reports.slug import create_link

TITLE = "# c4udit Report"
TOC_HEADING = "# Table of Contents "
QA_HEADING = "## QA Issues found"
TOOLS_USED = "manual, c4udit, slither"

_SECTION_HEADINGS = {
    Severity.LOW:          "## Low Findings",
    Severity.NON_CRITICAL: "## Non-Critical Findings",
    Severity.GAS:          "## Gas Findings",
}

_TOC_GROUPS = {
    Severity.LOW:          "Low",
    Severity.NON_CRITICAL: "Non-Critical",
    Severity.GAS:          "Gas",
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def render_markdown(report: Report, toc: bool = False) -> str:
    """Serialize *report* to markdown, optionally with table-of-contents blocks.

    Issues without findings are skipped everywhere. The gas TOC is written
    right before the gas section rather than at the top of the document.
    """
    lines: list[str] = [TITLE, "", "## Files analyzed"]
    lines += [f"- {f}" for f in report.files_analyzed]

    if toc:
        lines.append(TOC_HEADING)
        lines += _toc_group(report, Severity.LOW)
        if report.issues_with_findings(Severity.NON_CRITICAL):
            lines.append("")
        lines += _toc_group(report, Severity.NON_CRITICAL)
        lines.append("")

    lines += [QA_HEADING, ""]
    lines += _section(report, Severity.LOW)
    lines += _section(report, Severity.NON_CRITICAL)

    if toc:
        lines.append(TOC_HEADING)
        lines += _toc_group(report, Severity.GAS)
        lines.append("")

    lines += _section(report, Severity.GAS)
    lines += ["#### Tools used", TOOLS_USED, ""]

    return "\n".join(lines) + "\n"


def render_text(report: Report) -> str:
    """Plain-text listing of findings per issue, as printed on stdout."""
    parts = ["Files analyzed:\n"]
    parts += [f"- {f}\n" for f in report.files_analyzed]
    parts.append("\n")

    parts.append("Issues found:\n")
    last = len(report.issues) - 1
    for index, issue in enumerate(report.issues):
        findings = report.findings_for(issue)
        if not findings:
            continue

        parts.append(f" {issue.identifier}:\n")
        parts += [f"  {finding}" for finding in findings]
        if index != last:
            parts.append("\n")

    return "".join(parts)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _toc_group(report: Report, severity: Severity) -> list[str]:
    issues = report.issues_with_findings(severity)
    if not issues:
        return []
    return [_TOC_GROUPS[severity]] + [
        f"- [[{issue.identifier}] {issue.title}]({create_link(issue.identifier, issue.title)})"
        for issue in issues
    ]


def _section(report: Report, severity: Severity) -> list[str]:
    lines = [_SECTION_HEADINGS[severity], ""]
    for issue in report.issues_with_findings(severity):
        lines += _issue_block(report, issue)
    return lines


def _issue_block(report: Report, issue: Issue) -> list[str]:
    lines = [f"### [{issue.identifier}] {issue.title}"]

    if issue.impact:
        lines += ["#### Impact", issue.impact]

    lines += ["#### Findings:", "```solidity"]
    lines += [
        f"{f.file}::{f.line_number} => {f.line_content}"
        for f in report.findings_for(issue)
    ]
    lines.append("```")

    lines += ["#### Recommendation", issue.recommendation, ""]
    return lines
