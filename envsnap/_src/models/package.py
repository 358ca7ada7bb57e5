from typing import List

from pydantic import BaseModel, Field


class DeclaredDependencies(BaseModel):
    """Required dependencies a package declares.

    Optional (extra-only) requirements are never part of this model, they
    may point back at the package that declares them.
    """
    mandatory: List[str] = Field(default_factory=list)
    imported: List[str] = Field(default_factory=list)

    def names(self) -> List[str]:
        return self.mandatory + self.imported


class DependencyEntry(BaseModel):
    name: str
    # distance from the root, its direct dependencies are level 0
    level: int = Field(ge=0)

    def __str__(self):
        return f"{self.name} (level {self.level})"
