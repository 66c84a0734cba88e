"""
Command-line interface for the OCP documentation checker.
"""

import logging
import sys
import time
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel

from ocp_doc_checker import __version__
from ocp_doc_checker.checker import Checker
from ocp_doc_checker.common import err_console, format_duration, setup_logging
from ocp_doc_checker.config import CheckerConfig, split_versions
from ocp_doc_checker.fixer import apply_fixes
from ocp_doc_checker.parser import DocURLError
from ocp_doc_checker.report import (
    batch_to_json,
    print_batch,
    print_fixes,
    print_report,
    report_to_json,
)
from ocp_doc_checker.scanner import scan_path

console = Console()


def print_banner():
    """Print application banner."""
    console.print(Panel.fit(
        f"[bold blue]OCP Documentation Checker[/bold blue] v{__version__}\n"
        "[dim]Find outdated OpenShift documentation links[/dim]",
        border_style="blue",
    ))


def build_config(versions: Optional[str]) -> CheckerConfig:
    """Load configuration from the environment, applying a --versions override."""
    config = CheckerConfig.from_env()
    if versions:
        config = config.with_versions(split_versions(versions))
    return config


@click.group()
@click.version_option(version=__version__, prog_name="ocp-doc-checker")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress the banner")
@click.option("--log-file", type=click.Path(dir_okay=False), help="Also write logs to this file")
@click.pass_context
def main(ctx, verbose: bool, quiet: bool, log_file: Optional[str]):
    """
    OpenShift Container Platform documentation checker.

    Checks whether docs.redhat.com OCP links point at the newest release
    that still has the same page and anchor.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    setup_logging(
        level=logging.DEBUG if verbose else logging.WARNING,
        log_file=Path(log_file) if log_file else None,
    )


@main.command()
@click.option("--url", "-u", help="OCP documentation URL to check")
@click.option("--dir", "-d", "path", type=click.Path(),
              help="Directory or file to scan for OCP documentation URLs")
@click.option("--fix", is_flag=True, help="Rewrite outdated URLs in files (only with --dir)")
@click.option("--json", "as_json", is_flag=True, help="Output results in JSON format")
@click.option("--all-available", is_flag=True,
              help="Show all available newer versions (default: latest only)")
@click.option("--versions", help="Comma-separated versions to check, e.g. 4.18,4.19,4.20")
@click.pass_context
def check(
    ctx,
    url: Optional[str],
    path: Optional[str],
    fix: bool,
    as_json: bool,
    all_available: bool,
    versions: Optional[str],
):
    """
    Check documentation URLs for newer versions.

    Exits with 1 when outdated URLs were found and not fixed.

    Examples:

        # Check one URL
        ocp-doc-checker check --url https://docs.redhat.com/en/documentation/openshift_container_platform/4.17/html-single/disconnected_environments/index

        # Scan a directory and rewrite outdated links
        ocp-doc-checker check --dir docs/ --fix
    """
    if not url and not path:
        raise click.UsageError("either --url or --dir is required")
    if url and path:
        raise click.UsageError("--url and --dir are mutually exclusive")
    if fix and not path:
        raise click.UsageError("--fix can only be used with --dir")
    if fix and as_json:
        raise click.UsageError("--fix cannot be used with --json")

    verbose = ctx.obj.get("verbose", False)
    if not ctx.obj.get("quiet") and not as_json:
        print_banner()

    try:
        config = build_config(versions)
    except ValueError as e:
        raise click.UsageError(str(e))

    checker = Checker(config)

    if url:
        _check_single(checker, url, as_json, verbose, all_available)
    else:
        _check_path(checker, path, fix, as_json, verbose, all_available)


def _check_single(checker: Checker, url: str, as_json: bool, verbose: bool, all_available: bool):
    try:
        report = checker.check(url)
    except DocURLError as e:
        err_console.print(f"[red]Error checking URL: {e}[/red]")
        sys.exit(1)

    if as_json:
        click.echo(report_to_json(report))
    else:
        print_report(report, verbose=verbose, all_available=all_available, console=console)

    sys.exit(1 if report.is_outdated else 0)


def _check_path(
    checker: Checker,
    path: str,
    fix: bool,
    as_json: bool,
    verbose: bool,
    all_available: bool,
):
    try:
        locations = scan_path(path)
    except OSError as e:
        err_console.print(f"[red]Error accessing path: {e}[/red]")
        sys.exit(1)

    if not locations:
        if not as_json:
            console.print("[green]No OCP documentation URLs found[/green]")
        sys.exit(0)

    if not as_json:
        console.print(f"Found {len(locations)} unique OCP documentation URL(s)\n")

    def progress(index: int, total: int, current: str):
        if verbose and not as_json:
            console.print(f"[{index}/{total}] Checking: {current}", highlight=False)

    started = time.monotonic()
    batch = checker.check_many([loc.url for loc in locations], progress=progress)

    for failed_url, message in batch.errors.items():
        err_console.print(f"[red]Error checking URL {failed_url}: {message}[/red]")

    if fix and batch.has_outdated:
        print_fixes(apply_fixes(batch.results, locations), console=console)

    if as_json:
        click.echo(batch_to_json(batch))
    else:
        print_batch(batch, verbose=verbose, all_available=all_available, console=console)
        if verbose:
            console.print(f"Checked {len(locations)} URL(s) in {format_duration(time.monotonic() - started)}")

    sys.exit(1 if batch.has_outdated and not fix else 0)


@main.command(name="versions")
@click.option("--versions", help="Comma-separated override, as for 'check'")
def list_versions(versions: Optional[str]):
    """Show the versions that will be probed."""
    try:
        config = build_config(versions)
    except ValueError as e:
        raise click.UsageError(str(e))
    for version in config.known_versions:
        click.echo(version)


if __name__ == "__main__":
    main()
