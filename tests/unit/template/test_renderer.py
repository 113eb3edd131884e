"""Unit tests for the render phase."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from sanity.errors import SanityError
from sanity.template import (
    PROD_KEY,
    Renderer,
    RenderJob,
    RenderOptions,
    TemplateRegistry,
    merge_contexts,
    plan_jobs,
    to_context,
)


def _registry(**templates: str) -> TemplateRegistry:
    registry = TemplateRegistry()
    for name, source in templates.items():
        registry.register(name.replace("__", "/").replace("_", "."), source)
    registry.seal()
    return registry


class TestContext:
    """Tests for context helpers."""

    def test_merge_right_biased(self):
        assert merge_contexts({"a": 1, "b": 2}, {"b": 3, "c": 4}) == {"a": 1, "b": 3, "c": 4}

    def test_merge_shallow(self):
        merged = merge_contexts({"site": {"title": "A", "lang": "en"}}, {"site": {"title": "B"}})
        assert merged == {"site": {"title": "B"}}

    def test_merge_skips_none(self):
        assert merge_contexts(None, {"a": 1}, None) == {"a": 1}

    def test_to_context_none(self):
        assert to_context(None) == {}

    def test_to_context_rejects_non_mapping(self):
        with pytest.raises(TypeError):
            to_context(["a"])

    def test_to_context_rejects_objects(self):
        with pytest.raises(ValidationError):
            to_context({"when": object()})

    def test_to_context_nested(self):
        value = {"team": [{"name": "Ada", "age": 36}], "ok": True, "none": None}
        assert to_context(value) == value


class TestRenderer:
    """Tests for Renderer."""

    def test_context_layers(self, tmp_path: Path):
        """Test base < injected < job precedence."""
        registry = _registry(page="{{ __prod }} {{ a }} {{ b }}")
        renderer = Renderer(registry, RenderOptions(prod=True), injected={"a": "g", "b": "g"})
        job = RenderJob("page", tmp_path / "page", {"b": "j"})
        assert renderer.context_for(job) == {PROD_KEY: True, "a": "g", "b": "j"}

        renderer.render(job)
        assert (tmp_path / "page").read_text() == "True g j"

    def test_creates_parent(self, tmp_path: Path):
        registry = _registry(page="x")
        Renderer(registry, RenderOptions()).render(RenderJob("page", tmp_path / "a" / "b" / "c"))
        assert (tmp_path / "a" / "b" / "c").read_text() == "x"

    def test_dev_does_not_minify(self, tmp_path: Path):
        source = "<html>\n  <body>\n    <p>x</p>\n  </body>\n</html>\n"
        registry = _registry(index_html=source)
        target = tmp_path / "index.html"
        Renderer(registry, RenderOptions(prod=False)).render(RenderJob("index.html", target))
        assert target.read_text() == source

    def test_prod_minifies_pages_only(self, tmp_path: Path):
        source = "<html>\n  <body>\n    <p>x</p>\n  </body>\n</html>\n"
        registry = _registry(index_html=source, feed_xml=source)
        renderer = Renderer(registry, RenderOptions(prod=True))
        renderer.render(RenderJob("index.html", tmp_path / "index.html"))
        renderer.render(RenderJob("feed.xml", tmp_path / "feed.xml"))
        assert len((tmp_path / "index.html").read_text()) < len(source)
        assert (tmp_path / "feed.xml").read_text() == source

    def test_poison_applied(self, tmp_path: Path):
        registry = _registry(index_html="<html><head></head><body><p>x</p></body></html>")
        target = tmp_path / "index.html"
        Renderer(registry, RenderOptions(poison=True)).render(RenderJob("index.html", target))
        assert 'class="poison"' in target.read_text()

    def test_failure_keeps_previous_output(self, tmp_path: Path):
        registry = _registry(page="{{ missing | required }}")
        target = tmp_path / "page"
        target.write_text("previous")
        with pytest.raises(SanityError):
            Renderer(registry, RenderOptions()).render(RenderJob("page", target))
        assert target.read_text() == "previous"

    def test_render_all_isolates_failures(self, tmp_path: Path):
        registry = _registry(a="A", b="{{ x | required }}", c="C")
        jobs = [RenderJob(name, tmp_path / name) for name in ("a", "b", "c")]
        summary = Renderer(registry, RenderOptions()).render_all(jobs)

        assert not summary.ok
        assert [job.template for job in summary.rendered] == ["a", "c"]
        assert [failure.job.template for failure in summary.failures] == ["b"]
        assert summary.failures[0].error.template == "b"
        assert (tmp_path / "a").exists() and (tmp_path / "c").exists()
        assert not (tmp_path / "b").exists()


class TestPlanJobs:
    """Tests for plan_jobs()."""

    def test_sweep_excludes_claimed(self, tmp_path: Path):
        registry = _registry(about="", index_html="", blog__post_html="")
        queued = [RenderJob("about", tmp_path / "about" / "team.html", {"x": 1}, explicit=True)]
        jobs = plan_jobs(registry, queued, lambda name: tmp_path / name)

        assert [(j.template, j.explicit) for j in jobs] == [
            ("blog/post.html", False),
            ("index.html", False),
            ("about", True),
        ]
        assert jobs[0].target == tmp_path / "blog" / "post.html"

    def test_queued_order_kept(self, tmp_path: Path):
        registry = _registry(post="")
        queued = [
            RenderJob("post", tmp_path / "2.html", explicit=True),
            RenderJob("post", tmp_path / "1.html", explicit=True),
        ]
        jobs = plan_jobs(registry, queued, lambda name: tmp_path / name)
        assert [j.target.name for j in jobs] == ["2.html", "1.html"]
