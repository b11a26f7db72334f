"""
auth.ts generator — the central NextAuth configuration file.

The file is a fixed skeleton with three placeholders.  Each selectable
method owns an optional fragment for each placeholder; rendering
substitutes the concatenated fragments of the selected methods, in
``AuthMethod`` declaration order.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import PurePosixPath

from authsetup.core.models.auth import AuthMethod, AuthSelection
from authsetup.core.models.template import GeneratedFile


CONFIG_FILENAME = "auth.ts"

OAUTH_CLIENT_ID_ENV = "GOOGLE_CLIENT_ID"
OAUTH_CLIENT_SECRET_ENV = "GOOGLE_CLIENT_SECRET"


_SKELETON = """\
import NextAuth, { NextAuthConfig } from "next-auth";
__IMPORTS__

__DECLARATIONS__

export const { auth, handlers, signIn, signOut } = NextAuth({
  providers: [
__PROVIDERS__
  ],
  session: { strategy: "jwt" },
  callbacks: {
    async session({ session, token }) {
      if (session.user) {
        session.user.id = token.sub ?? "";
        session.user.name = token.name ?? "";
        session.user.email = token.email ?? "";
      }
      return session;
    },
    async jwt({ token, account, profile }) {
      if (account && profile) {
        token.sub = profile.id ?? "";
        token.username = profile.name || profile.email;
        token.email = profile.email;
      }
      return token;
    },
  },
} satisfies NextAuthConfig);
"""


@dataclass(frozen=True)
class Fragment:
    """Text a method contributes to each placeholder of the skeleton."""

    imports: str = ""
    declarations: str = ""
    provider: str = ""


_OAUTH = Fragment(
    imports='import Google from "next-auth/providers/google";',
    provider=f"""\
    Google({{
      clientId: process.env.{OAUTH_CLIENT_ID_ENV},
      clientSecret: process.env.{OAUTH_CLIENT_SECRET_ENV},
    }}),""",
)

_CREDENTIALS = Fragment(
    imports="""\
import Credentials from "next-auth/providers/credentials";
import bcrypt from "bcryptjs";
import { z } from "zod";""",
    declarations="""\
const YourSchemaHere = z.object({
  email: z.string().email(),
  password: z.string(),
});

const getUserByEmail = async (email: string) => {
  // Implement your own way to get the user by email
  const user = {
    username: "john.doe",
    email: "john.doe@example.com",
    password: "$2a$10$7Ks1f6R0lJW9qYb5J6RZ1uVZ1K2b2gW",
  };

  if (!user) return null;

  return user;
};""",
    provider="""\
    Credentials({
      async authorize(credentials) {
        // Implement your own schema here
        const validatedFields = YourSchemaHere.safeParse(credentials);
        if (validatedFields.success) {
          const { email, password } = validatedFields.data;
          // Use your own logic to get the user by email here
          const user = await getUserByEmail(email);
          if (!user || !user.password) return null;
          const passwordsMatch = await bcrypt.compare(password, user.password);
          if (passwordsMatch) return user;
        }
        return null;
      },
    }),""",
)

# Magic Link installs its package but has no fragment of its own.
FRAGMENTS: dict[AuthMethod, Fragment] = {
    AuthMethod.OAUTH_PROVIDERS: _OAUTH,
    AuthMethod.MAGIC_LINK: Fragment(),
    AuthMethod.CREDENTIALS: _CREDENTIALS,
}

# Providers are listed credentials-first, matching the published template.
_PROVIDER_ORDER: tuple[AuthMethod, ...] = (
    AuthMethod.CREDENTIALS,
    AuthMethod.OAUTH_PROVIDERS,
    AuthMethod.MAGIC_LINK,
)


def methods_without_fragment(selection: AuthSelection) -> list[AuthMethod]:
    """Selected methods that add nothing to auth.ts."""
    return [m for m in selection if FRAGMENTS[m] == Fragment()]


def _join(parts: list[str]) -> str:
    return "\n".join(p for p in parts if p)


def render_auth_config(selection: AuthSelection) -> str:
    """Render auth.ts for *selection*.  Deterministic for a given selection."""
    fragments = [FRAGMENTS[m] for m in selection]
    providers = [FRAGMENTS[m].provider for m in _PROVIDER_ORDER if m in selection]

    placeholders = {
        "__IMPORTS__": _join([f.imports for f in fragments]),
        "__DECLARATIONS__": _join([f.declarations for f in fragments]),
        "__PROVIDERS__": _join(providers),
    }

    content = _SKELETON
    for key, value in placeholders.items():
        content = content.replace(key, value)

    # Drop lines left blank by empty placeholders
    content = re.sub(r"\n{3,}", "\n\n", content)
    content = re.sub(r"providers: \[\n\n  \]", "providers: []", content)
    return content


def generate_auth_config(base_dir: PurePosixPath, selection: AuthSelection) -> GeneratedFile:
    """Build the auth.ts file for a project whose router lives in *base_dir*.

    Args:
        base_dir: Directory holding the router marker, relative to the
            project root (``.`` or ``src``).
        selection: Operator-selected methods.
    """
    labels = ", ".join(selection.labels()) or "no providers"
    return GeneratedFile(
        path=str(base_dir / CONFIG_FILENAME),
        content=render_auth_config(selection),
        reason=f"NextAuth configuration ({labels})",
    )
