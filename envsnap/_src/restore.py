import logging
import platform
import time
import warnings
from typing import AbstractSet, Optional

from envsnap._src.constants import (
    ALTERNATE_REGISTRY_TEMPLATE,
    DEFAULT_PLATFORM_CORE_PACKAGES,
    RestoreDecision,
)
from envsnap._src.exceptions import (
    ConfigError,
    MalformedVersionError,
    RuntimeVersionMismatchError,
    RuntimeVersionWarning,
)
from envsnap._src.installer import Installer, PipInstaller, SourceHint
from envsnap._src.metadata.distributions import DistributionMetadataStore
from envsnap._src.metadata.store import PackageMetadataStore
from envsnap._src.models.snapshot import (
    RestoreOptions,
    RestoreReport,
    RestoreStep,
    Snapshot,
    SnapshotEntry,
)
from envsnap._src.settings import EnvsnapSettings
from envsnap._src.utils import format_duration
from envsnap._src.version import is_newer_compatible


logger = logging.getLogger(__name__)


class RestoreEngine():
    @classmethod
    def from_settings(
        cls,
        settings: EnvsnapSettings,
        store: Optional[PackageMetadataStore] = None,
        installer: Optional[Installer] = None,
    ):
        if installer is None:
            installer = PipInstaller(
                index_url=settings.primary_index_url,
                build_from_source=settings.build_from_source,
                timeout=settings.install_timeout,
            )
        return cls(
            store=store,
            installer=installer,
            platform_core_packages=settings.platform_core_packages,
            alternate_registry_packages=settings.alternate_registry_packages,
            alternate_registry_url=settings.alternate_registry_url,
            alternate_registry_template=settings.alternate_registry_template,
        )

    def __init__(
        self,
        store: Optional[PackageMetadataStore] = None,
        installer: Optional[Installer] = None,
        platform_core_packages: AbstractSet[str] = DEFAULT_PLATFORM_CORE_PACKAGES,
        alternate_registry_packages: AbstractSet[str] = frozenset(),
        alternate_registry_url: Optional[str] = None,
        alternate_registry_template: str = ALTERNATE_REGISTRY_TEMPLATE,
        runtime_version: Optional[str] = None,
    ):
        if alternate_registry_packages and not alternate_registry_url:
            raise ConfigError("alternate registry packages given without an alternate registry url")
        self.store = store if store is not None else DistributionMetadataStore()
        self.installer = installer if installer is not None else PipInstaller()
        self.platform_core_packages = frozenset(platform_core_packages)
        self.alternate_registry_packages = frozenset(alternate_registry_packages)
        self.alternate_registry_url = alternate_registry_url
        self.alternate_registry_template = alternate_registry_template
        self.runtime_version = runtime_version or platform.python_version()

    def check_runtime(self, snapshot: Snapshot, stop_on_mismatch: bool) -> None:
        if snapshot.runtime_version == self.runtime_version:
            return
        error = RuntimeVersionMismatchError(snapshot.runtime_version, self.runtime_version)
        if stop_on_mismatch:
            raise error
        warnings.warn(error.msg, RuntimeVersionWarning, stacklevel=3)

    def decide(self, entry: SnapshotEntry, strict: bool) -> RestoreStep:
        """Choose what to do about a single snapshot entry.

        The installed state is queried fresh on every call, an earlier
        install may have changed it.
        """
        name, required = entry.package, entry.version

        if name in self.platform_core_packages:
            return RestoreStep(package=name, required_version=required, decision=RestoreDecision.SKIP_CORE)

        installed = None
        if self.store.is_installed(name):
            installed = self.store.installed_version(name)

        if installed is not None and installed == required:
            decision = RestoreDecision.SKIP_UP_TO_DATE
        elif not strict and installed is not None and self._newer_compatible(installed, required):
            decision = RestoreDecision.SKIP_COMPATIBLE_NEWER
        elif name in self.alternate_registry_packages:
            decision = RestoreDecision.INSTALL_FROM_ALTERNATE_REGISTRY
        else:
            decision = RestoreDecision.INSTALL_FROM_PRIMARY_REGISTRY

        return RestoreStep(
            package=name, required_version=required, installed_version=installed, decision=decision,
        )

    @staticmethod
    def _newer_compatible(installed: str, required: str) -> bool:
        try:
            return is_newer_compatible(installed, required)
        except MalformedVersionError as e:
            logger.debug("%s, treating as not compatible", e.msg)
            return False

    def _report(self, step: RestoreStep) -> None:
        name, required, installed = step.package, step.required_version, step.installed_version
        if step.decision == RestoreDecision.SKIP_CORE:
            logger.info("Skipping %s (%s) because part of the base install", name, required)
        elif step.decision == RestoreDecision.SKIP_UP_TO_DATE:
            logger.info("Skipping %s (%s) because correct version already installed", name, required)
        elif step.decision == RestoreDecision.SKIP_COMPATIBLE_NEWER:
            logger.info(
                "Skipping %s because installed version (%s) is newer than required version (%s), "
                "and major version number is the same",
                name, installed, required,
            )
        elif installed is not None:
            logger.info("Installing %s because version %s needed but version %s found", name, required, installed)
        else:
            logger.info("Installing %s (%s)", name, required)

    def _source_for(self, step: RestoreStep) -> SourceHint:
        if step.decision == RestoreDecision.INSTALL_FROM_ALTERNATE_REGISTRY:
            return SourceHint.alternate(
                self.alternate_registry_url,
                step.package,
                step.required_version,
                template=self.alternate_registry_template,
            )
        return SourceHint.primary()

    def restore(self, snapshot: Snapshot, options: Optional[RestoreOptions] = None) -> RestoreReport:
        """Bring the environment back to the package versions in `snapshot`.

        Entries are handled one at a time in snapshot order, which already
        installs dependencies before their dependents, so every install is
        done without dependency resolution. A failed install stops the
        restore, packages installed before it stay installed.
        """
        if options is None:
            options = RestoreOptions()
        start = time.monotonic()

        self.check_runtime(snapshot, options.stop_on_wrong_runtime_version)

        entries = snapshot.packages()
        if options.skip_last and entries:
            entries = entries[:-1]

        report = RestoreReport()
        for entry in entries:
            step = self.decide(entry, strict=options.strict)
            self._report(step)
            report.steps.append(step)
            if step.decision.installs and not options.dry_run:
                self.installer.install_exact(step.package, step.required_version, self._source_for(step))

        report.elapsed = time.monotonic() - start
        logger.info("Restoring environment took %s", format_duration(report.elapsed))
        return report
