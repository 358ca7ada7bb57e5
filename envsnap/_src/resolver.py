import logging
from typing import Dict, List

from envsnap._src.constants import RUNTIME_PACKAGE
from envsnap._src.exceptions import DependencyCycleError
from envsnap._src.metadata.store import PackageMetadataStore
from envsnap._src.models.package import DependencyEntry


logger = logging.getLogger(__name__)


class DependencyResolver:
    def __init__(self, store: PackageMetadataStore, runtime_package: str = RUNTIME_PACKAGE):
        """Walks the required dependencies of a package depth first.

        The mandatory and imported dependency graph is expected to be
        acyclic. A cycle raises DependencyCycleError rather than recursing
        forever.
        """
        self.store = store
        self.runtime_package = runtime_package

    def _dependencies_of(self, name: str) -> List[str]:
        declared = self.store.declared_dependencies(name)
        return [dep for dep in declared.names() if dep != self.runtime_package]

    def resolve(self, root_package: str) -> List[DependencyEntry]:
        """Return every transitive dependency of `root_package` with its level.

        A package reached on several paths keeps the deepest level it was
        seen at, so installing in descending level order always installs a
        package before anything that depends on it. The root itself is not
        part of the result.
        """
        levels: Dict[str, int] = {}
        cache: Dict[str, List[str]] = {}

        def visit(package: str, level: int, path: List[str]):
            if package not in cache:
                cache[package] = self._dependencies_of(package)
            for dep in cache[package]:
                if dep in path:
                    cycle = path[path.index(dep):] + [dep]
                    raise DependencyCycleError(cycle)
                # already expanded at this depth or deeper, nothing below can change
                if levels.get(dep, -1) >= level:
                    continue
                levels[dep] = level
                visit(dep, level + 1, path + [dep])

        visit(root_package, 0, [root_package])
        logger.debug("Resolved %d dependencies for %s", len(levels), root_package)
        return [DependencyEntry(name=name, level=level) for name, level in levels.items()]
