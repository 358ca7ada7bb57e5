from enum import Enum


# name of the synthetic snapshot entry holding the interpreter version
RUNTIME_PACKAGE = "python"

DEFAULT_SNAPSHOT_FILENAME = "environment-snapshot.csv"

SNAPSHOT_COLUMNS = ("package", "version")

# Distributions the restore never touches. These make up the installer
# toolchain itself, so reinstalling them mid-restore is not possible.
DEFAULT_PLATFORM_CORE_PACKAGES = frozenset({
    "pip",
    "setuptools",
    "wheel",
    "envsnap",
})

ALTERNATE_REGISTRY_TEMPLATE = "{base}/{name}_{version}.tar.gz"

DEFAULT_REMOTE_HOST = "https://raw.githubusercontent.com"
DEFAULT_REMOTE_BRANCH = "master"


class RestoreDecision(str, Enum):
    SKIP_CORE = "skip-core"
    SKIP_UP_TO_DATE = "skip-up-to-date"
    SKIP_COMPATIBLE_NEWER = "skip-compatible-newer"
    INSTALL_FROM_ALTERNATE_REGISTRY = "install-alternate"
    INSTALL_FROM_PRIMARY_REGISTRY = "install-primary"

    @property
    def installs(self) -> bool:
        return self in (
            RestoreDecision.INSTALL_FROM_ALTERNATE_REGISTRY,
            RestoreDecision.INSTALL_FROM_PRIMARY_REGISTRY,
        )


class SourceKind(str, Enum):
    PRIMARY = "primary"
    ALTERNATE = "alternate"
