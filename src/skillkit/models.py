"""Skill records and the pydantic models returned by registry queries."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, Field

from .skill_md import SkillFrontmatter, SkillMd, SkillMetadata


@dataclass(slots=True, frozen=True)
class Skill:
    """A loaded skill: identity, trigger description and Markdown body."""

    name: str
    description: str
    body: str
    path: str
    """Source file the record was read from."""
    frontmatter: SkillFrontmatter
    directory: str = ""
    """Skill directory relative to the scanned root; empty for a root-level file."""

    @classmethod
    def from_skill_md(cls, skill_md: SkillMd, path: str, *, directory: str = "") -> Skill:
        return cls(
            name=skill_md.frontmatter.name,
            description=skill_md.frontmatter.description,
            body=skill_md.body,
            path=path,
            frontmatter=skill_md.frontmatter,
            directory=directory,
        )

    @property
    def metadata(self) -> SkillMetadata | None:
        return self.frontmatter.metadata

    @property
    def license(self) -> str | None:
        return self.frontmatter.license

    @property
    def related(self) -> list[str]:
        return list(self.frontmatter.related)


class SkillSummary(BaseModel):
    name: str
    description: str
    path: str


class SkillSearchResult(BaseModel):
    name: str
    path: str
    snippet: str | None = None
    relevance_score: float = Field(description="Weighted keyword hit count")


__all__ = ["Skill", "SkillSummary", "SkillSearchResult"]
