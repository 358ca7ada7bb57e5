import logging
import platform
from typing import Optional

from envsnap._src.constants import RUNTIME_PACKAGE
from envsnap._src.metadata.distributions import DistributionMetadataStore
from envsnap._src.metadata.store import PackageMetadataStore
from envsnap._src.models.snapshot import Snapshot, SnapshotEntry
from envsnap._src.resolver import DependencyResolver


logger = logging.getLogger(__name__)


class SnapshotBuilder():
    def __init__(
        self,
        store: Optional[PackageMetadataStore] = None,
        runtime_version: Optional[str] = None,
    ):
        if store is None:
            store = DistributionMetadataStore()
        if runtime_version is None:
            runtime_version = platform.python_version()
        self.store = store
        self.runtime_version = runtime_version
        self.resolver = DependencyResolver(store)

    def build(self, root_package: str) -> Snapshot:
        """Record the versions of `root_package` and everything it requires.

        Dependencies come out deepest first so the snapshot doubles as an
        install order. Any package that cannot be found aborts the build
        with PackageNotFoundError.
        """
        dependencies = self.resolver.resolve(root_package)
        dependencies.sort(key=lambda entry: entry.level, reverse=True)

        entries = [SnapshotEntry(package=RUNTIME_PACKAGE, version=self.runtime_version)]
        for name in [dep.name for dep in dependencies] + [root_package]:
            entries.append(
                SnapshotEntry(package=name, version=self.store.installed_version(name))
            )

        logger.info(
            "Took snapshot of %s with %d dependencies", root_package, len(dependencies)
        )
        return Snapshot(entries=tuple(entries))
