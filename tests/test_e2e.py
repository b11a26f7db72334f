"""
End-to-end scenarios — full init runs against fake Next.js projects.

The package manager is faked; everything else (prompts, detection,
rendering, writing) runs for real.
"""

from pathlib import Path

from click.testing import CliRunner

from authsetup.main import cli


def _project_files(root: Path) -> set[str]:
    return {
        p.relative_to(root).as_posix()
        for p in root.rglob("*")
        if p.is_file() and "node_modules" not in p.parts
    }


class TestAppRouterCredentials:
    """./app at the root, operator selects Credentials only."""

    def test_full_run(self, make_project, fake_pm):
        root = make_project("app")
        runner = CliRunner()
        result = runner.invoke(cli, ["init"], input=f"{root}\nn\ny\nn\n")

        assert result.exit_code == 0, result.output
        assert fake_pm.packages == ["bcryptjs"]

        config = (root / "auth.ts").read_text()
        assert "Credentials({" in config
        assert "bcrypt.compare" in config
        assert "Google(" not in config

        route = root / "app" / "api" / "auth" / "[...nextauth]" / "route.ts"
        assert "export const { GET, POST } = handlers;" in route.read_text()

    def test_rerun_is_byte_identical(self, make_project, fake_pm):
        root = make_project("app")
        runner = CliRunner()
        args = ["init", "-p", str(root), "-m", "credentials", "--no-input"]
        runner.invoke(cli, args)
        first = (root / "auth.ts").read_bytes()
        result = runner.invoke(cli, args)
        assert result.exit_code == 0
        assert (root / "auth.ts").read_bytes() == first


class TestNoRouter:
    """Neither app/ nor pages/ anywhere in the project."""

    def test_nothing_installed_nothing_written(self, make_project, fake_pm):
        root = make_project("components", "src/lib", "public")
        before = _project_files(root)
        runner = CliRunner()
        result = runner.invoke(cli, ["init"], input=f"{root}\ny\ny\ny\n")

        assert result.exit_code == 1
        assert "No router detected" in result.output
        assert fake_pm.calls == []
        assert _project_files(root) == before


class TestSrcPagesRouterAllMethods:
    def test_full_run(self, make_project, fake_pm):
        root = make_project("src/pages", lock_file="yarn.lock")
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["init", "-p", str(root), "-m", "oauth", "-m", "credentials", "-m", "magic-link", "--no-input"],
        )
        assert result.exit_code == 0, result.output
        assert [c["args"] for c in fake_pm.calls] == [
            ["yarn", "add", "next-auth@5.0.0-beta.18"],
            ["yarn", "add", "next-auth-email"],
            ["yarn", "add", "bcryptjs"],
        ]
        config = (root / "src" / "auth.ts").read_text()
        assert "Google({" in config and "Credentials({" in config
        assert (root / "src" / "pages" / "api" / "auth" / "[...nextauth].ts").is_file()
        assert "Magic Link" in result.output
