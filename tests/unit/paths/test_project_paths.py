"""Unit tests for ProjectPaths."""

from pathlib import Path

import pytest

from sanity.paths import ProjectPaths


@pytest.fixture
def project(tmp_path: Path) -> ProjectPaths:
    (tmp_path / "www").mkdir()
    return ProjectPaths.from_root(tmp_path)


class TestFromRoot:
    """Tests for ProjectPaths.from_root()."""

    def test_defaults(self, tmp_path: Path):
        paths = ProjectPaths.from_root(tmp_path)
        assert paths.source == tmp_path.resolve() / "www"
        assert paths.output == tmp_path.resolve() / "dist"

    def test_custom_directories(self, tmp_path: Path):
        paths = ProjectPaths.from_root(tmp_path, source="site", output="public")
        assert paths.source.name == "site"
        assert paths.output.name == "public"


class TestDestFor:
    """Tests for destination mapping."""

    def test_asset_mirrors_path(self, project: ProjectPaths):
        source = project.source / "img" / "logo.png"
        assert project.dest_for(source) == project.output / "img" / "logo.png"

    def test_stylesheet_becomes_css(self, project: ProjectPaths):
        source = project.source / "css" / "main.scss"
        assert project.dest_for(source) == project.output / "css" / "main.css"

    def test_template_loses_marker(self, project: ProjectPaths):
        source = project.source / "blog" / "post.html.j2"
        assert project.dest_for(source) == project.output / "blog" / "post.html"

    def test_outside_source_raises(self, project: ProjectPaths, tmp_path: Path):
        with pytest.raises(ValueError):
            project.dest_for(tmp_path / "elsewhere.txt")


class TestTemplateName:
    """Tests for logical template names."""

    @pytest.mark.parametrize(
        "relative,name",
        [
            ("index.html.j2", "index.html"),
            ("about.j2", "about"),
            ("blog/post.html.j2", "blog/post.html"),
            ("a/b/c/_layout.html.j2", "a/b/c/_layout.html"),
        ],
    )
    def test_names(self, project: ProjectPaths, relative, name):
        assert project.template_name(project.source / relative) == name


class TestContainment:
    """Tests for script-supplied path resolution."""

    def test_source_file(self, project: ProjectPaths):
        assert project.source_file("data/posts.json") == project.source / "data" / "posts.json"

    def test_leading_slash_is_relative(self, project: ProjectPaths):
        assert project.output_file("/about/team.html") == project.output / "about" / "team.html"

    @pytest.mark.parametrize("escape", ["../secret.txt", "a/../../x", "../dist/index.html"])
    def test_escape_rejected(self, project: ProjectPaths, escape):
        with pytest.raises(ValueError):
            project.source_file(escape)

    def test_output_escape_rejected(self, project: ProjectPaths):
        with pytest.raises(ValueError):
            project.output_file("../www/index.html.j2")
