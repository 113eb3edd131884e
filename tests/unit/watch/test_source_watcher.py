"""Unit tests for watching and rebuild scheduling."""

import threading
import time
from pathlib import Path
from unittest.mock import MagicMock

from watchdog.events import (
    DirModifiedEvent,
    FileCreatedEvent,
    FileDeletedEvent,
    FileModifiedEvent,
    FileMovedEvent,
)

from sanity.paths import ProjectPaths
from sanity.watch import (
    Debouncer,
    RebuildScheduler,
    SourceEventHandler,
    SourceWatcher,
    prune_outputs,
)


def _wait_for(predicate, timeout: float = 5.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


class TestDebouncer:
    """Tests for Debouncer."""

    def test_batches_events(self):
        calls: list[list[Path]] = []
        debouncer = Debouncer(0.05, calls.append)
        debouncer.trigger(Path("a"))
        debouncer.trigger(None)
        debouncer.trigger(Path("b"))
        assert _wait_for(lambda: len(calls) == 1)
        time.sleep(0.1)
        assert calls == [[Path("a"), Path("b")]]

    def test_cancel(self):
        calls: list[list[Path]] = []
        debouncer = Debouncer(0.05, calls.append)
        debouncer.trigger(Path("a"))
        debouncer.cancel()
        time.sleep(0.1)
        assert calls == []


class TestRebuildScheduler:
    """Tests for RebuildScheduler."""

    def test_runs_immediately(self):
        batches: list[list[Path]] = []
        scheduler = RebuildScheduler(batches.append)
        scheduler.request([Path("x")])
        assert batches == [[Path("x")]]
        assert not scheduler.running

    def test_requests_during_build_coalesce(self):
        batches: list[list[Path]] = []
        in_build = threading.Event()
        release = threading.Event()

        def rebuild(prune: list[Path]) -> None:
            batches.append(prune)
            if len(batches) == 1:
                in_build.set()
                release.wait(timeout=5)

        scheduler = RebuildScheduler(rebuild)
        first = threading.Thread(target=scheduler.request, args=([Path("a")],))
        first.start()
        in_build.wait(timeout=5)

        for name in ("b", "c", "d"):
            scheduler.request([Path(name)])
        assert scheduler.running

        release.set()
        first.join(timeout=5)
        assert batches == [[Path("a")], [Path("b"), Path("c"), Path("d")]]
        assert scheduler.runs == 2
        assert not scheduler.running

    def test_failure_keeps_scheduler_usable(self):
        rebuild = MagicMock(side_effect=[RuntimeError("bad"), None])
        scheduler = RebuildScheduler(rebuild)
        scheduler.request()
        scheduler.request()
        assert rebuild.call_count == 2
        assert not scheduler.running

    def test_system_exit_releases_scheduler(self):
        rebuild = MagicMock(side_effect=[SystemExit(3), None])
        scheduler = RebuildScheduler(rebuild)
        worker = threading.Thread(target=scheduler.request)
        worker.start()
        worker.join(timeout=5)
        assert not scheduler.running

        scheduler.request()
        assert rebuild.call_count == 2
        assert not scheduler.running


class TestPruneOutputs:
    """Tests for prune_outputs()."""

    def test_removes_mirrored_outputs(self, paths: ProjectPaths):
        paths.output.mkdir()
        for name in ("app.js", "main.css", "index.html"):
            (paths.output / name).write_text("x")
        removed = prune_outputs(
            paths,
            [
                paths.source / "app.js",
                paths.source / "main.scss",
                paths.source / "index.html.j2",
                paths.source / "app.js",
            ],
        )
        assert sorted(p.name for p in removed) == ["app.js", "index.html", "main.css"]
        assert list(paths.output.iterdir()) == []

    def test_ignores_missing_and_foreign(self, paths: ProjectPaths, tmp_path: Path):
        assert prune_outputs(paths, [paths.source / "gone.txt", tmp_path / "other.txt"]) == []

    def test_keeps_directories(self, paths: ProjectPaths):
        (paths.output / "blog").mkdir(parents=True)
        assert prune_outputs(paths, [paths.source / "blog"]) == []
        assert (paths.output / "blog").is_dir()


class TestSourceEventHandler:
    """Tests for event translation."""

    def test_modified_and_deleted_prune(self):
        debouncer = MagicMock()
        handler = SourceEventHandler(debouncer)
        handler.dispatch(FileModifiedEvent("/site/www/app.js"))
        handler.dispatch(FileDeletedEvent("/site/www/old.txt"))
        assert [c.args[0] for c in debouncer.trigger.call_args_list] == [
            Path("/site/www/app.js"),
            Path("/site/www/old.txt"),
        ]

    def test_moved_prunes_source(self):
        debouncer = MagicMock()
        SourceEventHandler(debouncer).dispatch(
            FileMovedEvent("/site/www/a.txt", "/site/www/b.txt")
        )
        debouncer.trigger.assert_called_once_with(Path("/site/www/a.txt"))

    def test_created_only_triggers(self):
        debouncer = MagicMock()
        SourceEventHandler(debouncer).dispatch(FileCreatedEvent("/site/www/new.txt"))
        debouncer.trigger.assert_called_once_with(None)

    def test_directory_modification_ignored(self):
        debouncer = MagicMock()
        SourceEventHandler(debouncer).dispatch(DirModifiedEvent("/site/www"))
        debouncer.trigger.assert_not_called()


class TestSourceWatcher:
    """Tests for the observer wiring."""

    def test_change_triggers_rebuild(self, paths: ProjectPaths, write_source):
        batches: list[list[Path]] = []
        target = write_source("app.js", "1")
        with SourceWatcher(paths, batches.append, debounce=0.05) as watcher:
            assert watcher.running
            time.sleep(0.1)
            target.write_text("2")
            assert _wait_for(lambda: len(batches) >= 1)
        assert not watcher.running
        assert any(target in batch for batch in batches)
