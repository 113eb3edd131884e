"""Unit tests for the dev server."""

import io
import threading
import time
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from sanity.coordinator import BuildCoordinator
from sanity.errors import SanityError
from sanity.logging import LogConfig, SanityLogger
from sanity.server import content_type_for, create_dev_app, resolve_output


@pytest.fixture
def output_root(tmp_path: Path) -> Path:
    root = tmp_path / "dist"
    (root / "blog").mkdir(parents=True)
    (root / "index.html").write_text("<h1>home</h1>")
    (root / "blog" / "index.html").write_text("<h1>blog</h1>")
    (root / "style.css").write_text("body{}")
    (root / "app.js").write_text("f()")
    (root / "logo.png").write_bytes(b"\x89PNG")
    (root / "empty").mkdir()
    return root


@pytest.fixture
def coordinator() -> BuildCoordinator:
    return BuildCoordinator()


@pytest.fixture
def client(output_root: Path, coordinator: BuildCoordinator) -> TestClient:
    return TestClient(create_dev_app(output_root, coordinator))


class TestLookup:
    """Tests for resolve_output()."""

    def test_file(self, output_root: Path):
        assert resolve_output(output_root, "style.css") == output_root.resolve() / "style.css"

    def test_directory_index(self, output_root: Path):
        assert resolve_output(output_root, "blog/") == output_root.resolve() / "blog" / "index.html"
        assert resolve_output(output_root, "") == output_root.resolve() / "index.html"

    def test_missing(self, output_root: Path):
        with pytest.raises(SanityError) as exc_info:
            resolve_output(output_root, "nope.html")
        assert exc_info.value.code == "OUTPUT_NOT_FOUND"

    def test_directory_without_index(self, output_root: Path):
        with pytest.raises(SanityError):
            resolve_output(output_root, "empty")

    def test_traversal(self, output_root: Path):
        (output_root.parent / "secret.txt").write_text("s")
        with pytest.raises(SanityError):
            resolve_output(output_root, "../secret.txt")

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("a.html", "text/html"),
            ("a.css", "text/css"),
            ("a.js", "text/javascript"),
            ("a.png", None),
            ("a.json", None),
        ],
    )
    def test_content_types(self, name, expected):
        assert content_type_for(Path(name)) == expected


class TestDevServer:
    """Tests for the HTTP surface."""

    def test_root_serves_index(self, client: TestClient):
        response = client.get("/")
        assert response.status_code == 200
        assert response.text == "<h1>home</h1>"
        assert response.headers["content-type"].startswith("text/html")

    def test_directory_index(self, client: TestClient):
        assert client.get("/blog/").text == "<h1>blog</h1>"
        assert client.get("/blog").text == "<h1>blog</h1>"

    def test_css_and_js(self, client: TestClient):
        assert client.get("/style.css").headers["content-type"].startswith("text/css")
        assert client.get("/app.js").headers["content-type"].startswith("text/javascript")

    def test_other_types_untyped(self, client: TestClient):
        response = client.get("/logo.png")
        assert response.status_code == 200
        assert response.content == b"\x89PNG"
        assert "content-type" not in response.headers

    def test_missing_diagnostic_page(self, client: TestClient):
        response = client.get("/missing/page.html")
        assert response.status_code == 404
        assert "/missing/page.html" in response.text
        assert "does not exist" in response.text
        assert response.headers["content-type"].startswith("text/html")

    def test_diagnostic_escapes(self, client: TestClient):
        response = client.get("/<script>.html")
        assert response.status_code == 404
        assert "<script>" not in response.text

    def test_missing_logged_as_404(self, output_root: Path, coordinator: BuildCoordinator):
        stream = io.StringIO()
        app = create_dev_app(output_root, coordinator, SanityLogger(LogConfig(output=stream)))
        TestClient(app).get("/nope.html")
        assert "GET /nope.html -> 404" in stream.getvalue()

    def test_read_failure_logged_as_500(
        self, output_root: Path, coordinator: BuildCoordinator, monkeypatch: pytest.MonkeyPatch
    ):
        def denied(self: Path) -> bytes:
            raise PermissionError(13, "Permission denied", str(self))

        stream = io.StringIO()
        app = create_dev_app(output_root, coordinator, SanityLogger(LogConfig(output=stream)))
        monkeypatch.setattr(Path, "read_bytes", denied)
        response = TestClient(app).get("/style.css")
        assert response.status_code == 500
        assert "Permission denied" in response.text
        assert "GET /style.css -> 500" in stream.getvalue()

    def test_request_waits_for_build(
        self, client: TestClient, coordinator: BuildCoordinator, output_root: Path
    ):
        started = threading.Event()
        release = threading.Event()

        def build() -> None:
            (output_root / "index.html").write_text("<h1>half</h1>")
            started.set()
            release.wait(timeout=5)
            (output_root / "index.html").write_text("<h1>new</h1>")

        writer = threading.Thread(target=coordinator.run_build, args=(build,))
        writer.start()
        started.wait(timeout=5)

        responses: list[str] = []
        reader = threading.Thread(target=lambda: responses.append(client.get("/").text))
        reader.start()
        time.sleep(0.05)
        assert responses == []

        release.set()
        writer.join(timeout=5)
        reader.join(timeout=5)
        assert responses == ["<h1>new</h1>"]
