"""
Tests for router detection — app/ vs pages/, src/ layouts, nested trees.
"""

from pathlib import Path

from authsetup.core.models.router import RouterConvention
from authsetup.core.services.router_detect import (
    conventional_marker,
    detect_router,
    walk_for_marker,
)


class TestDetectRouter:
    def test_app_router_at_root(self, tmp_path: Path):
        (tmp_path / "app").mkdir()
        result = detect_router(tmp_path)
        assert result is not None
        assert result.convention == RouterConvention.APP_ROUTER
        assert result.marker_dir == (tmp_path / "app").resolve()
        assert result.base_dir == tmp_path.resolve()

    def test_pages_router_at_root(self, tmp_path: Path):
        (tmp_path / "pages").mkdir()
        result = detect_router(tmp_path)
        assert result is not None
        assert result.convention == RouterConvention.PAGES_ROUTER
        assert result.marker_dir == (tmp_path / "pages").resolve()

    def test_app_wins_over_pages(self, tmp_path: Path):
        (tmp_path / "app").mkdir()
        (tmp_path / "pages").mkdir()
        result = detect_router(tmp_path)
        assert result.convention == RouterConvention.APP_ROUTER

    def test_nested_app_wins_over_top_level_pages(self, tmp_path: Path):
        (tmp_path / "pages").mkdir()
        (tmp_path / "src" / "app").mkdir(parents=True)
        result = detect_router(tmp_path)
        assert result.convention == RouterConvention.APP_ROUTER
        assert result.base_dir == (tmp_path / "src").resolve()

    def test_src_layout(self, tmp_path: Path):
        (tmp_path / "src" / "pages").mkdir(parents=True)
        result = detect_router(tmp_path)
        assert result.convention == RouterConvention.PAGES_ROUTER
        assert result.base_dir == (tmp_path / "src").resolve()

    def test_deeply_nested_marker(self, tmp_path: Path):
        (tmp_path / "apps" / "web" / "app").mkdir(parents=True)
        result = detect_router(tmp_path)
        assert result is not None
        assert result.marker_dir == (tmp_path / "apps" / "web" / "app").resolve()

    def test_nothing_found(self, tmp_path: Path):
        (tmp_path / "components").mkdir()
        (tmp_path / "src" / "lib").mkdir(parents=True)
        assert detect_router(tmp_path) is None

    def test_empty_project(self, tmp_path: Path):
        assert detect_router(tmp_path) is None

    def test_marker_file_is_not_a_directory(self, tmp_path: Path):
        (tmp_path / "app").write_text("not a dir")
        assert detect_router(tmp_path) is None

    def test_deterministic(self, tmp_path: Path):
        (tmp_path / "b" / "app").mkdir(parents=True)
        (tmp_path / "a" / "app").mkdir(parents=True)
        first = detect_router(tmp_path)
        second = detect_router(tmp_path)
        assert first == second
        assert first.marker_dir == (tmp_path / "a" / "app").resolve()


class TestSkippedDirectories:
    def test_node_modules_ignored(self, tmp_path: Path):
        (tmp_path / "node_modules" / "some-lib" / "app").mkdir(parents=True)
        assert detect_router(tmp_path) is None

    def test_build_output_ignored(self, tmp_path: Path):
        (tmp_path / ".next" / "server" / "app").mkdir(parents=True)
        (tmp_path / "dist" / "pages").mkdir(parents=True)
        assert detect_router(tmp_path) is None

    def test_hidden_dirs_ignored(self, tmp_path: Path):
        (tmp_path / ".storybook" / "pages").mkdir(parents=True)
        assert detect_router(tmp_path) is None

    def test_skip_does_not_hide_real_marker(self, tmp_path: Path):
        (tmp_path / "node_modules" / "x" / "app").mkdir(parents=True)
        (tmp_path / "pages").mkdir()
        result = detect_router(tmp_path)
        assert result.convention == RouterConvention.PAGES_ROUTER


class TestConventionalSpots:
    def test_top_level_pages_beats_nested_app(self, tmp_path: Path):
        (tmp_path / "pages").mkdir()
        (tmp_path / "components" / "app").mkdir(parents=True)
        result = detect_router(tmp_path)
        assert result.convention == RouterConvention.PAGES_ROUTER
        assert result.marker_dir == (tmp_path / "pages").resolve()
        assert result.base_dir == tmp_path.resolve()

    def test_app_inside_pages_is_not_a_router(self, tmp_path: Path):
        (tmp_path / "pages" / "app").mkdir(parents=True)
        result = detect_router(tmp_path)
        assert result.convention == RouterConvention.PAGES_ROUTER
        assert result.marker_dir == (tmp_path / "pages").resolve()

    def test_src_pages_beats_nested_app(self, tmp_path: Path):
        (tmp_path / "src" / "pages").mkdir(parents=True)
        (tmp_path / "lib" / "app").mkdir(parents=True)
        result = detect_router(tmp_path)
        assert result.convention == RouterConvention.PAGES_ROUTER
        assert result.base_dir == (tmp_path / "src").resolve()

    def test_root_before_src(self, tmp_path: Path):
        (tmp_path / "app").mkdir()
        (tmp_path / "src" / "app").mkdir(parents=True)
        assert conventional_marker(tmp_path, "app") == tmp_path / "app"

    def test_src_only(self, tmp_path: Path):
        (tmp_path / "src" / "app").mkdir(parents=True)
        assert conventional_marker(tmp_path, "app") == tmp_path / "src" / "app"

    def test_deeper_dirs_not_conventional(self, tmp_path: Path):
        (tmp_path / "lib" / "app").mkdir(parents=True)
        assert conventional_marker(tmp_path, "app") is None


class TestWalkForMarker:
    def test_shallowest_on_branch(self, tmp_path: Path):
        (tmp_path / "apps" / "web" / "app" / "app").mkdir(parents=True)
        found = walk_for_marker(tmp_path, "app")
        assert found == tmp_path / "apps" / "web" / "app"

    def test_does_not_enter_other_marker(self, tmp_path: Path):
        (tmp_path / "web" / "pages" / "app").mkdir(parents=True)
        assert walk_for_marker(tmp_path, "app") is None

    def test_nested_pages_with_app_inside(self, tmp_path: Path):
        (tmp_path / "web" / "pages" / "app").mkdir(parents=True)
        result = detect_router(tmp_path)
        assert result.convention == RouterConvention.PAGES_ROUTER
        assert result.marker_dir == (tmp_path / "web" / "pages").resolve()
