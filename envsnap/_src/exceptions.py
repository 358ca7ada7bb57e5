from typing import List


class EnvsnapError(Exception):
    """Base class for every failure raised by envsnap."""


class ConfigError(EnvsnapError):
    pass


class PackageNotFoundError(EnvsnapError):
    def __init__(self, name: str):
        self.name = name
        self.msg = f"Package '{name}' is not installed or has no metadata"
        super().__init__(self.msg)


class DependencyCycleError(EnvsnapError):
    def __init__(self, cycle: List[str]):
        self.cycle = cycle
        self.msg = (
            "Dependency cycle detected among required packages: "
            + " -> ".join(cycle)
        )
        super().__init__(self.msg)


class MalformedVersionError(EnvsnapError):
    def __init__(self, version: str):
        self.version = version
        self.msg = f"Cannot split version '{version}' into numeric components"
        super().__init__(self.msg)


class RuntimeVersionMismatchError(EnvsnapError):
    def __init__(self, required: str, found: str):
        self.required = required
        self.found = found
        self.msg = f"Wrong Python version: need version {required}, found version {found}"
        super().__init__(self.msg)


class RuntimeVersionWarning(UserWarning):
    pass


class InstallError(EnvsnapError):
    def __init__(self, package, version, command, err):
        self.package = package
        self.version = version
        self.command = command
        self.msg = (
            f"Failed to install {package} ({version})!"
            f"\nRan command: `{' '.join(command)}`"
            f"\nError message: {err}"
        )
        super().__init__(self.msg)


class SnapshotFormatError(EnvsnapError):
    pass


class SnapshotLoadError(EnvsnapError):
    pass
