from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from envsnap._src.constants import RUNTIME_PACKAGE, RestoreDecision


class SnapshotEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    package: str
    version: str

    def __str__(self):
        return f"{self.package} - {self.version}"


class Snapshot(BaseModel):
    """The versions of everything a root package needs, in install order.

    The first entry is the Python runtime, the last entry is the root
    package and everything in between is ordered deepest dependency first.
    """
    model_config = ConfigDict(frozen=True)

    entries: Tuple[SnapshotEntry, ...]

    @field_validator("entries")
    @classmethod
    def _starts_with_runtime(cls, entries):
        if not entries or entries[0].package != RUNTIME_PACKAGE:
            raise ValueError(f"the first snapshot entry must be '{RUNTIME_PACKAGE}'")
        return entries

    @classmethod
    def from_rows(cls, rows: List[Tuple[str, str]]):
        return cls(entries=tuple(SnapshotEntry(package=p, version=v) for p, v in rows))

    @property
    def runtime_version(self) -> str:
        return self.entries[0].version

    @property
    def root_entry(self) -> Optional[SnapshotEntry]:
        if len(self.entries) < 2:
            return None
        return self.entries[-1]

    def packages(self) -> List[SnapshotEntry]:
        """All entries except the runtime one, in snapshot order."""
        return [entry for entry in self.entries if entry.package != RUNTIME_PACKAGE]

    def versions(self) -> Dict[str, str]:
        return {entry.package: entry.version for entry in self.entries}

    def diff(self, other: "Snapshot") -> List[Tuple[str, Optional[str], Optional[str]]]:
        """Packages whose version differs between this snapshot and `other`.

        Returns (package, version here, version in other) triples where a
        missing side is None.
        """
        mine = self.versions()
        theirs = other.versions()
        changes = []
        for name in sorted(set(mine) | set(theirs)):
            if mine.get(name) != theirs.get(name):
                changes.append((name, mine.get(name), theirs.get(name)))
        return changes


class RestoreOptions(BaseModel):
    stop_on_wrong_runtime_version: bool = False
    # install the exact version even when a compatible newer one is present
    strict: bool = False
    # the last entry is usually the study package, installed by hand
    skip_last: bool = True
    dry_run: bool = False


class RestoreStep(BaseModel):
    package: str
    required_version: str
    installed_version: Optional[str] = None
    decision: RestoreDecision


class RestoreReport(BaseModel):
    steps: List[RestoreStep] = Field(default_factory=list)
    elapsed: float = 0.0

    def decisions(self) -> List[RestoreDecision]:
        return [step.decision for step in self.steps]

    def installed(self) -> List[RestoreStep]:
        return [step for step in self.steps if step.decision.installs]
