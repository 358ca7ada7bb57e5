"""Shared fakes standing in for the installed environment and pip."""

from __future__ import annotations

import pytest

from envsnap._src.exceptions import InstallError, PackageNotFoundError
from envsnap._src.installer import SourceHint
from envsnap._src.models.package import DeclaredDependencies


class FakeMetadataStore:
    """In-memory environment: name -> (version, mandatory, imported)."""

    def __init__(self) -> None:
        self.packages: dict[str, tuple[str, list[str], list[str]]] = {}
        self.version_queries: list[str] = []

    def add(
        self,
        name: str,
        version: str = "1.0.0",
        mandatory: list[str] | None = None,
        imported: list[str] | None = None,
    ) -> FakeMetadataStore:
        self.packages[name] = (version, mandatory or [], imported or [])
        return self

    def declared_dependencies(self, name: str) -> DeclaredDependencies:
        if name not in self.packages:
            raise PackageNotFoundError(name)
        _, mandatory, imported = self.packages[name]
        return DeclaredDependencies(mandatory=list(mandatory), imported=list(imported))

    def installed_version(self, name: str) -> str:
        self.version_queries.append(name)
        if name not in self.packages:
            raise PackageNotFoundError(name)
        return self.packages[name][0]

    def is_installed(self, name: str) -> bool:
        return name in self.packages


class FakeInstaller:
    """Records install calls and applies them to a FakeMetadataStore."""

    def __init__(self, store: FakeMetadataStore, failing: set[str] | None = None) -> None:
        self.store = store
        self.failing = failing or set()
        self.calls: list[tuple[str, str, SourceHint]] = []

    def install_exact(self, name: str, version: str, source: SourceHint) -> None:
        self.calls.append((name, version, source))
        if name in self.failing:
            raise InstallError(name, version, ["pip", "install", name], "build failed")
        _, mandatory, imported = self.store.packages.get(name, ("", [], []))
        self.store.packages[name] = (version, mandatory, imported)


@pytest.fixture
def store() -> FakeMetadataStore:
    return FakeMetadataStore()


@pytest.fixture
def installer(store: FakeMetadataStore) -> FakeInstaller:
    return FakeInstaller(store)
