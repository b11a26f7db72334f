"""
authsetup — CLI entrypoint.

Usage:
    authsetup --help
    authsetup init
    authsetup init --project ./web --method credentials --method oauth
    authsetup detect --json
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path

import click

from authsetup import __version__
from authsetup.core.models.auth import PROMPT_ORDER, AuthMethod, AuthSelection
from authsetup.core.observability.logging_config import resolve_level, setup_logging

logger = logging.getLogger(__name__)


def _parse_methods(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> list[AuthMethod]:
    """click callback: accept method ids or prompt labels."""
    try:
        return [AuthMethod.parse(v) for v in values]
    except ValueError as e:
        choices = ", ".join(m.value for m in AuthMethod)
        raise click.BadParameter(f"{e} (choose from: {choices})") from e


def _resolve_project(project: str) -> Path:
    path = Path(project).expanduser()
    return path if path.is_absolute() else Path.cwd() / path


def _prompt_methods() -> list[AuthMethod]:
    """Ask a yes/no question per method; any combination is allowed."""
    click.secho("Choose authentication types:", bold=True)
    return [m for m in PROMPT_ORDER if click.confirm(f"  {m.label}", default=False)]


@click.group()
@click.version_option(version=__version__, prog_name="authsetup")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, debug: bool) -> None:
    """authsetup — add NextAuth.js authentication to a Next.js project."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug

    setup_logging(
        level=resolve_level(
            debug=debug,
            verbose=verbose,
            quiet=quiet,
            env_level=os.environ.get("AUTHSETUP_LOG_LEVEL"),
        ),
        log_file=os.environ.get("AUTHSETUP_LOG_FILE"),
        log_file_level=os.environ.get("AUTHSETUP_LOG_FILE_LEVEL"),
    )


@cli.command()
@click.option("--project", "-p", default=None, help="Next.js project directory (default: prompt, '.').")
@click.option(
    "--method",
    "-m",
    "methods",
    multiple=True,
    callback=_parse_methods,
    help="Authentication method: oauth, credentials, magic-link (repeatable).",
)
@click.option("--no-input", is_flag=True, help="Never prompt; use flags and defaults only.")
@click.option("--skip-install", is_flag=True, help="Don't run the package manager.")
@click.option("--dry-run", is_flag=True, help="Show what would be written; change nothing.")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to authsetup.yml (default: <project>/authsetup.yml).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON (implies --no-input).")
@click.pass_context
def init(
    ctx: click.Context,
    project: str | None,
    methods: list[AuthMethod],
    no_input: bool,
    skip_install: bool,
    dry_run: bool,
    config_path: str | None,
    as_json: bool,
) -> None:
    """Configure NextAuth in a Next.js project.

    Examples:

        authsetup init

        authsetup init -p ./web -m credentials -m oauth

        authsetup init --no-input --dry-run
    """
    try:
        _init(ctx, project, methods, no_input, skip_install, dry_run, config_path, as_json)
    except (click.ClickException, click.Abort, click.exceptions.Exit):
        raise
    except Exception as e:
        logger.exception("Setup failed")
        click.secho(f"❌ Error: {e}", fg="red", err=True)
        sys.exit(1)


def _init(
    ctx: click.Context,
    project: str | None,
    methods: list[AuthMethod],
    no_input: bool,
    skip_install: bool,
    dry_run: bool,
    config_path: str | None,
    as_json: bool,
) -> None:
    from authsetup.core.use_cases.setup import run_setup

    quiet = ctx.obj.get("quiet", False) or as_json
    # Prompts would corrupt machine-readable output.
    no_input = no_input or as_json

    if not quiet:
        click.secho("🚀 Setting up authentication for your Next.js project...", fg="cyan", bold=True)

    if project is None:
        project = "." if no_input else click.prompt(
            "Next.js project directory (leave '.' for the current project)",
            default=".",
        )

    if not methods and not no_input:
        methods = _prompt_methods()

    selection = AuthSelection.of(methods)

    def _on_detect(detection) -> None:
        if not quiet:
            click.secho(f"✅ {detection.convention.display_name} detected.", fg="green")

    def _on_install(method: AuthMethod, package: str) -> None:
        if not quiet:
            click.secho(f"📦 Installing {package} ({method.label})...", fg="cyan")

    result = run_setup(
        _resolve_project(project),
        selection,
        config_path=Path(config_path) if config_path else None,
        skip_install=skip_install,
        dry_run=dry_run,
        on_detect=_on_detect,
        on_install=_on_install,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if not result.ok:
            sys.exit(result.exit_code)
        return

    if not result.ok:
        click.secho(f"❌ {result.error}", fg="red")
        for path in result.written:
            click.echo(f"   Left in place: {path}")
        sys.exit(result.exit_code)

    if dry_run:
        click.secho("\n[dry-run] Files that would be written:", fg="yellow", bold=True)
        for gen in result.files:
            click.secho(f"\n── {gen.path} ──", fg="white", bold=True)
            click.echo(gen.content)
        return

    if not quiet:
        click.echo("Created configuration files:")
        for path in result.written:
            click.echo(f"   • {path}")
        click.secho("✅ Configuration complete!", fg="green", bold=True)
        click.echo(
            f"\n👉 You can start your project with:\n\n   {result.package_manager or 'npm'} run dev\n"
        )


@cli.command()
@click.option("--project", "-p", default=".", help="Next.js project directory.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def detect(project: str, as_json: bool) -> None:
    """Detect the project's routing convention (App Router or Pages Router)."""
    from authsetup.core.services.router_detect import detect_router

    root = _resolve_project(project)
    if not root.is_dir():
        if as_json:
            click.echo(json.dumps({"error": f"Project directory not found: {root}"}, indent=2))
        else:
            click.secho(f"❌ Project directory not found: {root}", fg="red")
        sys.exit(1)

    detection = detect_router(root)

    if as_json:
        if detection is None:
            click.echo(json.dumps({"error": "No router detected"}, indent=2))
            sys.exit(1)
        click.echo(json.dumps(detection.to_dict(), indent=2))
        return

    if detection is None:
        click.secho("❌ No router detected. Make sure this is a valid Next.js project.", fg="red")
        sys.exit(1)

    click.secho(f"✅ {detection.convention.display_name}", fg="green", bold=True)
    click.echo(f"   Marker:   {detection.marker_dir}")
    click.echo(f"   Base dir: {detection.base_dir}")


# ── Register sub-command groups from authsetup/ui/cli/ ─────────────

from authsetup.ui.cli.templates import templates  # noqa: E402

cli.add_command(templates)


if __name__ == "__main__":
    cli()
