"""Sanity Application - wires configuration, logging and the build.

The application owns the one BuildCoordinator of the process. Every
build, clean and rebuild goes through it, so the dev server never
observes a half-written output tree.

Initialization sequence:

1. Config loading (plus command line overrides)
2. Logger setup
3. Project paths
4. Build coordinator
"""

import dataclasses
import itertools
import sys
import threading
from pathlib import Path
from typing import TextIO

import uvicorn

from sanity.assets import clear_directory
from sanity.build import BuildOptions, BuildOrchestrator, BuildReport
from sanity.config import ConfigLoader, SanityConfig
from sanity.coordinator import BuildCoordinator
from sanity.errors import SanityError
from sanity.logging import LogConfig, SanityLogger
from sanity.paths import ProjectPaths
from sanity.scripting import write_stubs
from sanity.server import create_dev_app
from sanity.types import LogLevel
from sanity.watch import SourceWatcher, prune_outputs


class SanityApplication:
    """Sanity application orchestrator."""

    def __init__(
        self,
        config_path: str | Path | None = None,
        root: Path | None = None,
        log_output: TextIO | None = None,
        force_prod: bool = False,
        antidote: bool = False,
        profile: bool = False,
        verbose: bool = False,
    ):
        """Initialize application.

        Command line flags only ever switch behaviour on; a flag left off
        keeps the configured value.

        Args:
            config_path: Path to config file (optional)
            root: Project root (default: current working directory)
            log_output: Output stream for logs (default: sys.stdout)
            force_prod: Build in production mode regardless of command
            antidote: Bypass the anti-scraping transform
            profile: Log phase durations
            verbose: Log at DEBUG level
        """
        self._config_path = config_path
        self._root = root or Path.cwd()
        self._log_output = log_output or sys.stdout
        self._force_prod = force_prod
        self._antidote = antidote
        self._profile = profile
        self._verbose = verbose
        self._initialized = False
        self._build_ids = itertools.count(1)

        self.config_loader: ConfigLoader | None = None
        self.config: SanityConfig | None = None
        self.logger: SanityLogger | None = None
        self.paths: ProjectPaths | None = None
        self.coordinator = BuildCoordinator()

    def initialize(self) -> None:
        """Load configuration and set up logging. Idempotent."""
        if self._initialized:
            return

        # 1. Config
        self.config_loader = ConfigLoader()
        self.config = self.config_loader.load(self._config_path)
        build = self.config.build
        build.force_prod = build.force_prod or self._force_prod
        build.antidote = build.antidote or self._antidote
        build.profile = build.profile or self._profile

        # 2. Logger
        log_config = LogConfig(
            level=LogLevel.DEBUG if self._verbose else self.config.logging.level,
            format=self.config.logging.format,
            truncate_at=self.config.logging.truncate_at,
            components=dataclasses.asdict(self.config.logging.components),
            output=self._log_output,
        )
        self.logger = SanityLogger(log_config)
        for issue in self.config_loader.warnings:
            self.logger.warn("build", issue.message, {"path": issue.path})

        # 3. Paths
        self.paths = ProjectPaths.from_root(
            self._root, self.config.paths.source, self.config.paths.output
        )

        self._initialized = True

    def _require(self) -> tuple[SanityConfig, ProjectPaths]:
        self.initialize()
        assert self.config is not None and self.paths is not None
        return self.config, self.paths

    def is_prod(self, command_is_build: bool) -> bool:
        """Production mode: forced, or a one-shot build."""
        config, _ = self._require()
        return config.build.force_prod or command_is_build

    def build_options(self, prod: bool) -> BuildOptions:
        config, _ = self._require()
        return BuildOptions.from_config(config, prod)

    def build(self, prod: bool, prune: list[Path] | None = None) -> BuildReport:
        """Run one full build under the writer lock.

        Args:
            prod: Production mode
            prune: Sources whose mirrored outputs are deleted first

        Raises:
            SanityError: If the build failed (already logged)
        """
        _, paths = self._require()
        orchestrator = BuildOrchestrator(paths, self.build_options(prod), self.logger)
        build_id = next(self._build_ids)

        def run() -> BuildReport:
            if prune:
                for removed in prune_outputs(paths, prune):
                    if self.logger:
                        self.logger.debug("watch", f"Removed {removed}")
            return orchestrator.run(build_id)

        return self.coordinator.run_build(run)

    def clean(self) -> int:
        """Delete everything in the output root.

        Returns:
            Number of top-level entries removed
        """
        _, paths = self._require()
        removed = self.coordinator.run_build(lambda: clear_directory(paths.output))
        if self.logger:
            self.logger.info("build", f"Cleaned {paths.output} ({removed} entries removed)")
        return removed

    def write_stubs(self) -> Path:
        """Write build script stubs into the project root."""
        _, paths = self._require()
        target = write_stubs(paths.root)
        if self.logger:
            self.logger.info("script", f"Wrote {target}")
        return target

    def create_watcher(self, prod: bool) -> SourceWatcher:
        config, paths = self._require()

        def rebuild(prune: list[Path]) -> None:
            self.build(prod, prune)

        return SourceWatcher(
            paths,
            rebuild,
            debounce=config.watch.debounce_seconds,
            sanity_logger=self.logger,
        )

    def watch(self, prod: bool, stop: threading.Event | None = None) -> None:
        """Build, then rebuild on every source change until stopped.

        Build failures are logged and watching continues.
        """
        stop = stop or threading.Event()
        try:
            self.build(prod)
        except SanityError:
            pass  # Logged by the build; keep watching for a fix

        with self.create_watcher(prod):
            try:
                while not stop.wait(timeout=1.0):
                    pass
            except KeyboardInterrupt:
                if self.logger:
                    self.logger.info("watch", "Stopped watching")

    def serve(self, prod: bool, port: int | None = None, host: str | None = None) -> None:
        """Watch in the background and serve the output tree until interrupted."""
        config, paths = self._require()
        stop = threading.Event()
        watcher = threading.Thread(
            target=self.watch, args=(prod, stop), name="sanity-watch", daemon=True
        )
        watcher.start()

        app = create_dev_app(paths.output, self.coordinator, self.logger)
        server_config = uvicorn.Config(
            app,
            host=host or config.server.host,
            port=port or config.server.port,
            log_level="info",
        )
        server = uvicorn.Server(server_config)
        try:
            server.run()
        finally:
            stop.set()
            watcher.join(timeout=5)
