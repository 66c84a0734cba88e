"""
Text and JSON rendering of check results.
"""

import json
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

from ocp_doc_checker.common import console as default_console
from ocp_doc_checker.models import BatchReport, CheckReport, FixResult, VersionProbeResult


STATUS_STYLES = {
    "Found": "green",
    "Found (page + anchor)": "green",
    "Page found, anchor missing": "yellow",
    "Not found": "red",
}


def report_to_json(report: CheckReport) -> str:
    """Render a single report as JSON."""
    return json.dumps(report.to_dict(), indent=2)


def batch_to_json(batch: BatchReport) -> str:
    """Render a batch of reports as JSON."""
    return json.dumps(batch.to_dict(), indent=2)


def _status_line(result: VersionProbeResult, show_url: bool = True) -> str:
    label = result.status_label
    style = STATUS_STYLES.get(label, "white")
    line = f"  [{style}]{label}[/{style}] Version {result.version}"
    if show_url:
        line += f": {escape(result.url)}"
    if result.error:
        line += f" [dim]({escape(result.error)})[/dim]"
    return line


def print_report(
    report: CheckReport,
    verbose: bool = False,
    all_available: bool = False,
    console: Optional[Console] = None,
) -> None:
    """Print a human-readable report for one URL."""
    console = console or default_console

    console.print(f"Checking: {escape(report.original_url)}")
    console.print(f"Current Version: {report.original_version}")
    console.print(Rule())

    if report.is_outdated:
        console.print("[bold yellow]This documentation is OUTDATED![/bold yellow]")
        console.print(f"Latest Version: {report.latest_version}\n")

        if all_available:
            console.print("Available newer versions:")
            for v in report.newer_versions:
                console.print(f"  [green]✓[/green] Version {v.version}: {escape(v.url)}")
        else:
            latest = report.latest
            console.print("Latest available version:")
            console.print(f"  [green]✓[/green] Version {latest.version}: {escape(latest.url)}")
            if len(report.newer_versions) > 1:
                console.print(
                    f"\n(Use --all-available to see all {len(report.newer_versions)} newer versions)"
                )

        if verbose:
            console.print("\nAll checked versions:")
            for v in report.all_results:
                console.print(_status_line(v))
    else:
        console.print(
            f"[green]✓ This documentation is UP TO DATE (version {report.latest_version})[/green]"
        )

        missing = report.missing_anchors
        if missing:
            console.print("\n[yellow]Note: Newer versions exist but the anchor is missing:[/yellow]")
            for v in missing:
                console.print(f"  - Version {v.version}: page exists but anchor not found")

        if verbose:
            console.print("\nChecked versions:")
            for v in report.all_results:
                console.print(_status_line(v, show_url=False))

    if report.cancelled:
        console.print("\n[yellow]Check was cancelled; results are partial[/yellow]")


def print_batch(
    batch: BatchReport,
    verbose: bool = False,
    all_available: bool = False,
    console: Optional[Console] = None,
) -> None:
    """Print a human-readable summary for a batch of URLs."""
    console = console or default_console

    console.print(Rule("OCP Documentation URL Check Results"))
    console.print()

    for i, report in enumerate(batch.results, start=1):
        if report.is_outdated:
            console.print(f"[{i}] [bold yellow]OUTDATED[/bold yellow]", highlight=False)
        else:
            console.print(f"[{i}] [green]UP TO DATE[/green]", highlight=False)

        console.print(f"    URL: {escape(report.original_url)}")
        console.print(f"    Current Version: {report.original_version}")
        console.print(f"    Latest Version: {report.latest_version}")

        if report.is_outdated:
            if all_available:
                console.print("    Available newer versions:")
                for v in report.newer_versions:
                    console.print(f"      - Version {v.version}: {escape(v.url)}")
            else:
                latest = report.latest
                console.print(f"    Latest available: {latest.version} ({escape(latest.url)})")
                if len(report.newer_versions) > 1:
                    console.print(
                        f"    ({len(report.newer_versions)} newer versions available, "
                        "use --all-available to see all)"
                    )

        if verbose:
            for v in report.all_results:
                console.print("  " + _status_line(v, show_url=False))

        console.print()

    console.print(Rule())
    console.print(
        f"Summary: {batch.total_count} total, {batch.uptodate_count} up-to-date, "
        f"{batch.outdated_count} outdated"
    )
    if batch.errors:
        console.print(f"[red]{len(batch.errors)} URL(s) could not be checked[/red]")
    console.print(Rule())

    outdated = [r for r in batch.results if r.is_outdated]
    if outdated:
        console.print("\n[bold]Recommended Updates:[/bold]\n")
        for report in outdated:
            latest = report.latest
            console.print(f"- Update from {report.original_version} to {latest.version}:")
            console.print(f"  Old: {escape(report.original_url)}")
            console.print(f"  New: {escape(latest.url)}\n")


def print_fixes(fixes: List[FixResult], console: Optional[Console] = None) -> None:
    """Print the outcome of rewriting URLs in files."""
    console = console or default_console

    console.print(Rule("Applying Fixes"))

    table = Table(show_header=True, header_style="bold")
    table.add_column("File")
    table.add_column("Change")
    table.add_column("Count", justify="right")
    table.add_column("Status")

    for fix in fixes:
        if fix.error:
            status = f"[red]{escape(fix.error)}[/red]"
        elif fix.replacements:
            status = "[green]updated[/green]"
        else:
            status = "[dim]unchanged[/dim]"
        table.add_row(
            escape(fix.path),
            f"{fix.old_version} → {fix.new_version}",
            str(fix.replacements),
            status,
        )

    console.print(table)

    fixed = [f for f in fixes if f.success]
    console.print(
        f"Summary: Fixed {sum(f.replacements for f in fixed)} URL(s) "
        f"in {len({f.path for f in fixed})} file(s)"
    )
