"""CLI entry point: bundlesync.

Subcommands:
    bundlesync analyze-pr spryker suite 1234 --token ghp_...
    bundlesync update-dependency Customer,Sales spryker/transfer ^3.27.0 "Transfer objects"
"""

from __future__ import annotations

import sys

import click

from bundlesync.app import App
from bundlesync.config import Settings
from bundlesync.core.logging import setup_logging
from bundlesync.services.models import (
    AnalyzePRRequest,
    ErrorDetail,
    UpdateDependencyRequest,
)


def _success(message: str) -> None:
    click.secho(f"[OK] {message}", fg="green", bold=True)


def _error(message: str) -> None:
    click.secho(f"[ERROR] {message}", fg="red", bold=True, err=True)


def _display_errors(errors: list[ErrorDetail]) -> None:
    if not errors:
        _error("Unknown error")
        return
    for error in errors:
        _error(error.message)


def _listing(title: str, items: list[str]) -> None:
    click.echo()
    click.secho(title, bold=True)
    click.echo("-" * len(title))
    for item in items:
        click.echo(f" * {item}")


def _parse_pr_number(raw: str) -> int:
    """Lenient integer parse; anything unparsable becomes 0 and is rejected later."""
    try:
        return int(raw.strip())
    except ValueError:
        return 0


def _split_modules(raw: str) -> list[str]:
    return [name.strip() for name in raw.split(",") if name.strip()]


@click.group()
@click.option(
    "--root",
    type=click.Path(file_okay=False),
    default=None,
    help="Project root containing the Bundles directory (default: $BUNDLESYNC_ROOT or cwd)",
)
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
@click.pass_context
def main(ctx: click.Context, root: str | None, verbose: bool) -> None:
    """bundlesync: transfer-change analysis and dependency updates for bundles."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["root"] = root


@main.command("analyze-pr")
@click.argument("owner")
@click.argument("repo")
@click.argument("pr_number", metavar="PR_NUMBER")
@click.option("-t", "--token", default=None, help="GitHub personal access token (default: $GITHUB_TOKEN)")
@click.pass_context
def analyze_pr(ctx: click.Context, owner: str, repo: str, pr_number: str, token: str | None) -> None:
    """Analyze a GitHub PR diff to identify modules with transfer.xml changes."""
    number = _parse_pr_number(pr_number)
    if number <= 0:
        _error("Pull request number must be a positive integer")
        sys.exit(1)

    settings = Settings.from_env(root_path=ctx.obj.get("root"), github_token=token)
    request = AnalyzePRRequest(owner, repo, number, settings.github_token)
    result = App(settings).analyze_pr(request)

    if not result.success:
        _display_errors(result.errors)
        sys.exit(1)

    if not result.message:
        _error("No analysis message was generated")
        sys.exit(1)

    _success(result.message)
    if result.changed_modules:
        _listing("Changed Modules:", result.changed_modules)


@main.command("update-dependency")
@click.argument("modules")
@click.argument("package_name", metavar="PACKAGE_NAME")
@click.argument("version")
@click.argument("description", required=False, default=None)
@click.pass_context
def update_dependency(
    ctx: click.Context,
    modules: str,
    package_name: str,
    version: str,
    description: str | None,
) -> None:
    """Update PACKAGE_NAME to VERSION in each module's composer.json.

    MODULES is a comma-separated list of module names.
    """
    module_names = _split_modules(modules)
    if not module_names:
        _error("At least one module name must be provided")
        sys.exit(1)

    settings = Settings.from_env(root_path=ctx.obj.get("root"))
    request = UpdateDependencyRequest(module_names, package_name, version, description)
    result = App(settings).update_dependency(request)

    if not result.success:
        _display_errors(result.errors)
        sys.exit(1)

    if not result.message:
        _error("No update message was generated")
        sys.exit(1)

    _success(result.message)
    if result.updated_modules:
        _listing("Updated Modules:", result.updated_modules)
    if result.skipped_modules:
        _listing("Skipped Modules:", result.skipped_modules)
