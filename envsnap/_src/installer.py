import logging
import subprocess
import sys
from typing import List, Optional, Protocol

from pydantic import BaseModel

from envsnap._src.constants import ALTERNATE_REGISTRY_TEMPLATE, SourceKind
from envsnap._src.exceptions import InstallError


logger = logging.getLogger(__name__)


class SourceHint(BaseModel):
    """Where an exact package version should be installed from."""
    kind: SourceKind = SourceKind.PRIMARY
    # archive url, only set for the alternate registry
    url: Optional[str] = None

    @classmethod
    def primary(cls):
        return cls(kind=SourceKind.PRIMARY)

    @classmethod
    def alternate(cls, base: str, name: str, version: str, template: str = ALTERNATE_REGISTRY_TEMPLATE):
        url = template.format(base=base.rstrip("/"), name=name, version=version)
        return cls(kind=SourceKind.ALTERNATE, url=url)


class Installer(Protocol):
    def install_exact(self, name: str, version: str, source: SourceHint) -> None:
        """Install exactly `version` of `name` without its dependencies.

        Raises
        ------
        InstallError
            If the install did not succeed.
        """
        ...


class PipInstaller:
    def __init__(
        self,
        python: str = sys.executable,
        index_url: Optional[str] = None,
        build_from_source: bool = True,
        timeout: Optional[int] = None,
    ):
        self.python = python
        self.index_url = index_url
        self.build_from_source = build_from_source
        self.timeout = timeout

    def command(self, name: str, version: str, source: SourceHint) -> List[str]:
        cmd = [self.python, "-m", "pip", "install", "--no-deps"]
        if source.kind == SourceKind.ALTERNATE:
            cmd.append(source.url)
            return cmd

        if self.index_url:
            cmd += ["--index-url", self.index_url]
        if self.build_from_source:
            cmd += ["--no-binary", name]
        cmd.append(f"{name}=={version}")
        return cmd

    def install_exact(self, name: str, version: str, source: SourceHint) -> None:
        cmd = self.command(name, version, source)
        logger.debug("Running %s", " ".join(cmd))
        try:
            proc = subprocess.run(
                cmd, capture_output=True, text=True, check=False, timeout=self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise InstallError(name, version, cmd, e) from e

        if proc.returncode != 0:
            raise InstallError(name, version, cmd, proc.stderr.strip())
