import logging
from importlib.metadata import Distribution
from typing import List, Optional

from packaging.requirements import InvalidRequirement, Requirement

from envsnap._src.exceptions import PackageNotFoundError
from envsnap._src.models.package import DeclaredDependencies


logger = logging.getLogger(__name__)


class DistributionMetadataStore:
    def __init__(self, path: Optional[List[str]] = None):
        """DistributionMetadataStore reads the metadata of installed
        distributions, the same records pip and importlib.metadata use.

        Parameters
        ----------
        path: list[str], optional
            Directories to search for distributions. Defaults to sys.path
            of the running interpreter.
        """
        self.path = path

    def _find(self, name: str) -> Optional[Distribution]:
        kwargs = {"name": name}
        if self.path is not None:
            kwargs["path"] = self.path
        return next(iter(Distribution.discover(**kwargs)), None)

    def _get(self, name: str) -> Distribution:
        dist = self._find(name)
        if dist is None:
            raise PackageNotFoundError(name)
        return dist

    def _display_name(self, requirement_name: str) -> str:
        # use the spelling the distribution registered itself under, so that
        # "PyYAML" and "pyyaml" end up as a single snapshot entry
        dist = self._find(requirement_name)
        if dist is None:
            return requirement_name
        return dist.metadata["Name"] or requirement_name

    def is_installed(self, name: str) -> bool:
        return self._find(name) is not None

    def installed_version(self, name: str) -> str:
        return self._get(name).version

    def declared_dependencies(self, name: str) -> DeclaredDependencies:
        """Return the required dependencies of an installed distribution.

        Requirements without an environment marker are mandatory. Requirements
        whose marker holds for this interpreter are imported. Requirements that
        only apply to an extra are optional and left out, as are marker gated
        requirements that do not apply here.

        Returns
        -------
        dependencies: DeclaredDependencies
        """
        dist = self._get(name)
        mandatory = []
        imported = []
        for raw in dist.requires or []:
            try:
                req = Requirement(raw)
            except InvalidRequirement:
                logger.debug("Unparseable requirement %r in %s", raw, name)
                continue

            if req.marker is None:
                mandatory.append(self._display_name(req.name))
            elif "extra" in str(req.marker):
                continue
            elif req.marker.evaluate():
                imported.append(self._display_name(req.name))

        return DeclaredDependencies(mandatory=mandatory, imported=imported)
