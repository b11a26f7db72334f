"""
CLI commands for previewing generated files.

Thin wrappers over ``authsetup.core.services.generators``.  Nothing
here reads or writes a project.
"""

from __future__ import annotations

from pathlib import PurePosixPath

import click

from authsetup.core.models.auth import AuthMethod, AuthSelection
from authsetup.core.models.router import RouterConvention


@click.group()
def templates() -> None:
    """Templates — preview the files init would write."""


@templates.command("show")
@click.option(
    "--router",
    "-r",
    type=click.Choice(["app", "pages"]),
    default="app",
    show_default=True,
    help="Routing convention.",
)
@click.option(
    "--method",
    "-m",
    "methods",
    multiple=True,
    type=click.Choice([m.value for m in AuthMethod]),
    help="Authentication method (repeatable).",
)
@click.option(
    "--file",
    "which",
    type=click.Choice(["all", "config", "route"]),
    default="all",
    show_default=True,
    help="Which file to print.",
)
@click.option("--src", "use_src", is_flag=True, help="Render paths for a src/ layout.")
def show(router: str, methods: tuple[str, ...], which: str, use_src: bool) -> None:
    """Print the rendered auth.ts and route handler."""
    from authsetup.core.services.generators.auth_config import generate_auth_config
    from authsetup.core.services.generators.route_handler import generate_route_handler

    base = PurePosixPath("src" if use_src else ".")
    selection = AuthSelection.of(methods)
    convention = RouterConvention.parse(router)

    files = []
    if which in ("all", "config"):
        files.append(generate_auth_config(base, selection))
    if which in ("all", "route"):
        files.append(generate_route_handler(base, convention))

    for i, gen in enumerate(files):
        if len(files) > 1:
            if i:
                click.echo()
            click.secho(f"── {gen.path} ──", fg="cyan", bold=True)
        click.echo(gen.content, nl=False)


@templates.command("methods")
def list_methods() -> None:
    """List selectable authentication methods and their packages."""
    from authsetup.core.services.generators.auth_config import FRAGMENTS, Fragment
    from authsetup.core.services.package_install import DEFAULT_PACKAGES

    click.secho("🔐 Authentication methods:", fg="cyan", bold=True)
    for method in AuthMethod:
        note = "" if FRAGMENTS[method] != Fragment() else "  (package only, no template)"
        click.echo(f"   {method.value:<12} {method.label:<34} {DEFAULT_PACKAGES[method]}{note}")
