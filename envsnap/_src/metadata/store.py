from typing import Protocol

from envsnap._src.models.package import DeclaredDependencies


class PackageMetadataStore(Protocol):
    """Read access to the packages installed in an environment."""

    def declared_dependencies(self, name: str) -> DeclaredDependencies:
        """Return the required dependencies `name` declares.

        Raises
        ------
        PackageNotFoundError
            If `name` is not installed.
        """
        ...

    def installed_version(self, name: str) -> str:
        """Return the installed version of `name`.

        Raises
        ------
        PackageNotFoundError
            If `name` is not installed.
        """
        ...

    def is_installed(self, name: str) -> bool:
        ...
