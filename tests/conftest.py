"""
Pytest configuration and shared fixtures for sanity tests.
"""

import io
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sanity.build import BuildOptions, BuildOrchestrator, BuildReport  # noqa: E402
from sanity.logging import LogConfig, SanityLogger  # noqa: E402
from sanity.paths import ProjectPaths  # noqa: E402
from sanity.types import LogLevel  # noqa: E402


# =============================================================================
# Project Fixtures
# =============================================================================


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """An empty project with a source directory."""
    (tmp_path / "www").mkdir()
    return tmp_path


@pytest.fixture
def paths(project_dir: Path) -> ProjectPaths:
    """Project paths for the temporary project."""
    return ProjectPaths.from_root(project_dir)


@pytest.fixture
def write_source(paths: ProjectPaths) -> Callable[..., Path]:
    """Write a file into the source tree, creating parents."""

    def _write(relative: str, content: str | bytes = "") -> Path:
        target = paths.source / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            target.write_bytes(content)
        else:
            target.write_text(content, encoding="utf-8")
        return target

    return _write


@pytest.fixture
def read_output(paths: ProjectPaths) -> Callable[[str], str]:
    """Read a file from the output tree."""

    def _read(relative: str) -> str:
        return (paths.output / relative).read_text(encoding="utf-8")

    return _read


# =============================================================================
# Logging Fixtures
# =============================================================================


@pytest.fixture
def log_stream() -> io.StringIO:
    """Captured log output."""
    return io.StringIO()


@pytest.fixture
def logger(log_stream: io.StringIO) -> SanityLogger:
    """Debug-level logger writing to log_stream."""
    return SanityLogger(LogConfig(level=LogLevel.DEBUG, output=log_stream))


# =============================================================================
# Build Fixtures
# =============================================================================


@pytest.fixture
def run_build(paths: ProjectPaths, logger: SanityLogger) -> Callable[..., BuildReport]:
    """Run a build of the temporary project."""

    def _run(**options) -> BuildReport:
        return BuildOrchestrator(paths, BuildOptions(**options), logger).run()

    return _run


# =============================================================================
# Markers Configuration
# =============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "property: Property-based tests")
    config.addinivalue_line("markers", "slow: Slow tests")
