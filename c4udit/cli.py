"""CLI entry point — a single Click command.

Modes:
    c4udit FILES...        Print findings to stdout (text, or JSON with --json)
    c4udit -s FILES...     Save the markdown report to c4udit-report.md
    c4udit -t [FILES...]   Renumber c4udit-report.md into c4udit-report-toc.md
    c4udit --export-catalog PATH
                           Write the active issue catalog as YAML
"""

import functools
import json
import sys

import click

from c4udit import C4uditError, __version__
from c4udit.models import Severity

REPORT_PATH = "c4udit-report.md"
TOC_REPORT_PATH = "c4udit-report-toc.md"


class WriteError(C4uditError):
    """Raised when an output file cannot be written."""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _verbose(enabled: bool, message: str) -> None:
    if enabled:
        click.echo(f"[verbose] {message}", err=True)


def _scan(issues, files, verbose: bool):
    from c4udit.scanner import run

    _verbose(verbose, f"Scanning {len(files)} path(s) against {len(issues)} issue(s)")
    report = run(issues, files)
    _verbose(verbose, f"{report.summary()['total']} finding(s) in "
                      f"{len(report.files_analyzed)} file(s)")
    if verbose:
        by_severity = report.summary()["by_severity"]
        for severity in Severity:
            _verbose(verbose, f"  {severity.label}: {by_severity[severity.value]}")
    return report


def _write(path: str, text: str) -> None:
    """Write *text* to *path* and report it on stderr."""
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as exc:
        raise WriteError(f"Unable to write '{path}': {exc.strerror or exc}") from exc
    click.echo(f"Report written to '{path}'", err=True)


def _handle_errors(func):
    """Decorator that turns fatal c4udit errors into a message and exit code 1."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        from c4udit.catalog import CatalogError
        from c4udit.scanner import ReadError

        try:
            return func(*args, **kwargs)
        except CatalogError as exc:
            click.echo(f"Catalog error: {exc}", err=True)
            sys.exit(1)
        except ReadError as exc:
            click.echo(f"Read error: {exc}", err=True)
            sys.exit(1)
        except WriteError as exc:
            click.echo(f"Write error: {exc}", err=True)
            sys.exit(1)

    return wrapper


# ---------------------------------------------------------------------------
# Command
# ---------------------------------------------------------------------------

@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("files", nargs=-1, type=click.Path())
@click.option("-s", "--save", is_flag=True, default=False,
              help=f"Save report as file ({REPORT_PATH}).")
@click.option("-t", "--toc", is_flag=True, default=False,
              help=f"Save report as file with ToC ({TOC_REPORT_PATH}).")
@click.option("--inline-toc", is_flag=True, default=False,
              help="With -s, include table-of-contents blocks in the saved report.")
@click.option("--catalog", "catalog_path", default=None, type=click.Path(dir_okay=False),
              help="YAML issue catalog to use instead of the built-in one.")
@click.option("--export-catalog", "export_path", default=None, type=click.Path(dir_okay=False),
              help="Write the active issue catalog to this path and exit.")
@click.option("--json", "as_json", is_flag=True, default=False,
              help="Print findings as JSON instead of text.")
@click.option("--pretty", is_flag=True, default=False,
              help="Pretty-print the JSON output.")
@click.option("--verbose", is_flag=True, default=False,
              help="Enable verbose logging.")
@click.version_option(__version__, prog_name="c4udit")
@click.pass_context
@_handle_errors
def cli(ctx: click.Context, files: tuple[str, ...], save: bool, toc: bool,
        inline_toc: bool, catalog_path: str | None, export_path: str | None,
        as_json: bool, pretty: bool, verbose: bool) -> None:
    """c4udit is a static analyzer for solidity contracts based on regexs.

    It is capable of finding low risk issues and gas optimizations documented
    in the c4-common-issues repository.

    Note that c4udit has a high rate of false positives. Check the results
    carefully!
    """
    from c4udit.catalog import export_catalog, load_catalog

    if save and toc:
        raise click.UsageError("-s/--save and -t/--toc cannot be combined.")
    if export_path and (files or save or toc or as_json or inline_toc):
        raise click.UsageError("--export-catalog takes no files and no report options.")
    if inline_toc and not save:
        raise click.UsageError("--inline-toc only applies with -s/--save.")
    if as_json and (save or toc):
        raise click.UsageError("--json only applies when printing to stdout.")
    if pretty and not as_json:
        raise click.UsageError("--pretty only applies with --json.")

    if not files and not toc and not export_path:
        click.echo(ctx.get_help())
        ctx.exit(0)

    _verbose(verbose, f"Loading catalog {catalog_path or '(built-in)'}")
    issues = load_catalog(catalog_path)

    if export_path:
        export_catalog(export_path, issues)
        click.echo(f"Catalog written to '{export_path}'", err=True)
        return

    if toc:
        from c4udit.reports.markdown import render_markdown
        from c4udit.reports.toc import convert_toc_file

        if files:
            _write(REPORT_PATH, render_markdown(_scan(issues, files, verbose)))
        _verbose(verbose, f"Building table of contents from {REPORT_PATH}")
        _write(TOC_REPORT_PATH, convert_toc_file(REPORT_PATH))
        return

    report = _scan(issues, files, verbose)

    if save:
        from c4udit.reports.markdown import render_markdown

        _write(REPORT_PATH, render_markdown(report, toc=inline_toc))
    elif as_json:
        indent = 2 if pretty else None
        click.echo(json.dumps(report.to_dict(), indent=indent, ensure_ascii=False))
    else:
        from c4udit.reports.markdown import render_text

        click.echo(render_text(report))
