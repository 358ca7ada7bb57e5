from __future__ import annotations

import subprocess

import pytest

from envsnap._src import installer as installer_module
from envsnap._src.exceptions import InstallError
from envsnap._src.installer import PipInstaller, SourceHint


class TestSourceHint:
    def test_alternate_url(self) -> None:
        hint = SourceHint.alternate("https://example.org/contrib/", "CohortMethod", "4.1.2")
        assert hint.url == "https://example.org/contrib/CohortMethod_4.1.2.tar.gz"

    def test_custom_template(self) -> None:
        hint = SourceHint.alternate(
            "https://example.org", "pkg", "1.0", template="{base}/{name}/{name}-{version}.tar.gz"
        )
        assert hint.url == "https://example.org/pkg/pkg-1.0.tar.gz"


class TestPipInstaller:
    def test_primary_command_builds_from_source(self) -> None:
        pip = PipInstaller(python="python")
        cmd = pip.command("numpy", "1.26.4", SourceHint.primary())
        assert cmd == [
            "python", "-m", "pip", "install", "--no-deps",
            "--no-binary", "numpy", "numpy==1.26.4",
        ]

    def test_primary_command_with_index_and_wheels(self) -> None:
        pip = PipInstaller(python="python", index_url="https://pypi.example.org/simple", build_from_source=False)
        cmd = pip.command("numpy", "1.26.4", SourceHint.primary())
        assert cmd == [
            "python", "-m", "pip", "install", "--no-deps",
            "--index-url", "https://pypi.example.org/simple", "numpy==1.26.4",
        ]

    def test_alternate_command_installs_archive(self) -> None:
        pip = PipInstaller(python="python", index_url="https://pypi.example.org/simple")
        hint = SourceHint.alternate("https://example.org", "pkg", "1.0")
        cmd = pip.command("pkg", "1.0", hint)
        assert cmd == [
            "python", "-m", "pip", "install", "--no-deps", "https://example.org/pkg_1.0.tar.gz",
        ]

    def test_install_success(self, monkeypatch: pytest.MonkeyPatch) -> None:
        ran: list[list[str]] = []

        def fake_run(cmd, **kwargs):
            ran.append(cmd)
            return subprocess.CompletedProcess(cmd, 0, stdout="ok", stderr="")

        monkeypatch.setattr(installer_module.subprocess, "run", fake_run)

        PipInstaller(python="python").install_exact("numpy", "1.26.4", SourceHint.primary())
        assert ran[0][-1] == "numpy==1.26.4"

    def test_install_failure(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_run(cmd, **kwargs):
            return subprocess.CompletedProcess(cmd, 1, stdout="", stderr="no matching distribution")

        monkeypatch.setattr(installer_module.subprocess, "run", fake_run)

        with pytest.raises(InstallError, match="no matching distribution") as exc_info:
            PipInstaller(python="python").install_exact("numpy", "0.0.1", SourceHint.primary())
        assert exc_info.value.package == "numpy"

    def test_install_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_run(cmd, **kwargs):
            raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

        monkeypatch.setattr(installer_module.subprocess, "run", fake_run)

        with pytest.raises(InstallError):
            PipInstaller(python="python", timeout=5).install_exact("numpy", "1.0", SourceHint.primary())
