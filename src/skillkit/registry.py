"""Read-only registry of loaded skills keyed by name."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from .exceptions import DuplicateSkillError
from .models import Skill, SkillSummary


class SkillRegistry(Mapping[str, Skill]):
    """Mapping of skill name to `Skill`.

    Names are unique; building a registry from two records with the same name
    raises `DuplicateSkillError`. The registry is not mutated after construction.
    """

    def __init__(self, skills: Iterable[Skill] = ()) -> None:
        self._skills: dict[str, Skill] = {}
        for skill in skills:
            existing = self._skills.get(skill.name)
            if existing is not None:
                raise DuplicateSkillError(skill.name, existing.path, skill.path)
            self._skills[skill.name] = skill

    def __getitem__(self, name: str) -> Skill:
        return self._skills[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._skills)

    def __len__(self) -> int:
        return len(self._skills)

    def __repr__(self) -> str:
        return f"SkillRegistry({self.names()!r})"

    def names(self) -> list[str]:
        return sorted(self._skills)

    def summaries(self) -> list[SkillSummary]:
        return [
            SkillSummary(name=skill.name, description=skill.description, path=skill.path)
            for skill in (self._skills[name] for name in self.names())
        ]

    def related_to(self, name: str) -> list[Skill]:
        """Return the loaded skills that `name` lists as related.

        Names that do not resolve are skipped; the validator reports them.
        """
        skill = self._skills[name]
        return [self._skills[ref] for ref in skill.related if ref in self._skills]

    def render_catalog(self) -> str:
        """Render a Markdown list of skills suitable for an agent prompt."""
        lines = [
            f"- **{summary.name}**: {' '.join(summary.description.split())}"
            for summary in self.summaries()
        ]
        return "\n".join(lines)


__all__ = ["SkillRegistry"]
