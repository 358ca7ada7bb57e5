"""Snapshots stored inside a project"""

from __future__ import annotations

from pathlib import Path

from envsnap._src.constants import RestoreDecision
from envsnap._src.data.local import load_snapshot
from envsnap._src.models.snapshot import RestoreOptions
from envsnap._src.project import (
    insert_snapshot_in_project,
    project_snapshot_path,
    restore_from_project,
)
from envsnap._src.restore import RestoreEngine
from envsnap._src.utils import format_duration, get_project_root


def _project(tmp_path: Path) -> Path:
    project = tmp_path / "study"
    (project / "src" / "study").mkdir(parents=True)
    (project / "pyproject.toml").write_text("[project]\nname = 'study'\n")
    return project


class TestProjectRoot:
    def test_found_from_sub_directory(self, tmp_path: Path) -> None:
        project = _project(tmp_path)
        assert get_project_root(project / "src" / "study") == project.resolve()

    def test_none_without_marker(self, tmp_path: Path) -> None:
        assert get_project_root(tmp_path, root_path=Path("no-such-marker.toml")) is None

    def test_snapshot_path_relative_to_root(self, tmp_path: Path) -> None:
        project = _project(tmp_path)
        path = project_snapshot_path("settings/env.csv", directory=project / "src")
        assert path == project.resolve() / "settings" / "env.csv"

    def test_absolute_path_kept(self, tmp_path: Path) -> None:
        target = tmp_path / "elsewhere.csv"
        assert project_snapshot_path(str(target), directory=tmp_path) == target


class TestInsertAndRestore:
    def test_round_trip_through_project(self, tmp_path: Path, store, installer) -> None:
        project = _project(tmp_path)
        store.add("study", "0.3.1", imported=["numpy"])
        store.add("numpy", "1.26.4")

        written = insert_snapshot_in_project("study", directory=project / "src", store=store)

        assert written == project.resolve() / "environment-snapshot.csv"
        assert load_snapshot(written).entries[-1].package == "study"

        # the environment drifted, numpy went away
        del store.packages["numpy"]
        engine = RestoreEngine(
            store=store,
            installer=installer,
            runtime_version=load_snapshot(written).runtime_version,
        )
        report = restore_from_project(directory=project, options=RestoreOptions(), engine=engine)

        assert report.decisions() == [RestoreDecision.INSTALL_FROM_PRIMARY_REGISTRY]
        assert installer.calls[0][:2] == ("numpy", "1.26.4")


class TestFormatDuration:
    def test_units(self) -> None:
        assert format_duration(2.0) == "2.0 secs"
        assert format_duration(90) == "1.5 mins"
        assert format_duration(5400) == "1.5 hours"
