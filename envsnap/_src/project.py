# Snapshots stored inside the project that produced them, so the
# environment an analysis ran in travels with its code.
from pathlib import Path
from typing import Optional

from envsnap._src.constants import DEFAULT_SNAPSHOT_FILENAME
from envsnap._src.data.local import load_snapshot, save_snapshot
from envsnap._src.metadata.store import PackageMetadataStore
from envsnap._src.models.snapshot import RestoreOptions, RestoreReport
from envsnap._src.restore import RestoreEngine
from envsnap._src.snapshot import SnapshotBuilder
from envsnap._src.utils import get_project_root


def project_snapshot_path(
    path: Optional[str] = None,
    directory: str | Path = ".",
) -> Path:
    """Resolve where the project snapshot lives.

    Relative paths are taken from the project root, the nearest directory
    holding a pyproject.toml, or `directory` when there is none.
    """
    path = Path(path or DEFAULT_SNAPSHOT_FILENAME)
    if path.is_absolute():
        return path
    root = get_project_root(directory) or Path(directory).resolve()
    return root / path


def insert_snapshot_in_project(
    root_package: str,
    path: Optional[str] = None,
    directory: str | Path = ".",
    store: Optional[PackageMetadataStore] = None,
) -> Path:
    snapshot = SnapshotBuilder(store=store).build(root_package)
    return save_snapshot(project_snapshot_path(path, directory), snapshot)


def restore_from_project(
    path: Optional[str] = None,
    options: Optional[RestoreOptions] = None,
    directory: str | Path = ".",
    engine: Optional[RestoreEngine] = None,
) -> RestoreReport:
    snapshot = load_snapshot(project_snapshot_path(path, directory))
    if engine is None:
        engine = RestoreEngine()
    return engine.restore(snapshot, options)
