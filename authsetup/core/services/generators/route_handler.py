"""
Route handler generator — the file the Next.js router loads for /api/auth.

One fixed variant per routing convention; the auth selection plays no
part here.
"""

from __future__ import annotations

from pathlib import PurePosixPath

from authsetup.core.models.router import RouterConvention
from authsetup.core.models.template import GeneratedFile


_ROUTE_PATHS: dict[RouterConvention, PurePosixPath] = {
    RouterConvention.APP_ROUTER: PurePosixPath("app/api/auth/[...nextauth]/route.ts"),
    RouterConvention.PAGES_ROUTER: PurePosixPath("pages/api/auth/[...nextauth].ts"),
}

_ROUTE_CONTENT: dict[RouterConvention, str] = {
    RouterConvention.APP_ROUTER: """\
import { handlers } from "@/auth";

export const { GET, POST } = handlers;
""",
    RouterConvention.PAGES_ROUTER: """\
import NextAuth from "next-auth";
import { auth } from "@/auth";

export default NextAuth(auth);
""",
}


def route_path(convention: RouterConvention) -> PurePosixPath:
    """Entry-point path relative to the directory holding the marker."""
    return _ROUTE_PATHS[convention]


def generate_route_handler(
    base_dir: PurePosixPath,
    convention: RouterConvention,
) -> GeneratedFile:
    """Build the catch-all auth route for *convention* under *base_dir*."""
    return GeneratedFile(
        path=str(base_dir / route_path(convention)),
        content=_ROUTE_CONTENT[convention],
        reason=f"NextAuth catch-all route ({convention.display_name})",
    )
