"""Parsing and rendering for SKILL.md files (Agent Skills format + extensions)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import MalformedSkillError


_SKILL_MD_FRONTMATTER_RE = re.compile(r"^---\s*$")

_KNOWN_KEYS = frozenset(
    {
        "name",
        "description",
        "license",
        "compatibility",
        "metadata",
        "related",
        "allowed-tools",
        "allowed_tools",
    }
)


class SkillMetadata(BaseModel):
    """Provenance details for a skill. Unknown keys are kept as-is."""

    author: str | None = None
    source: str | None = None
    version: str | None = None
    copied_date: str | None = None

    model_config = ConfigDict(extra="allow")

    @field_validator("author", "source", "version", "copied_date", mode="before")
    @classmethod
    def _stringify_scalars(cls, value: Any) -> Any:
        # YAML turns `1.0` into a float and `2025-01-02` into a date.
        if isinstance(value, date):
            return value.isoformat()
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class SkillFrontmatter(BaseModel):
    """Frontmatter fields with support for extension fields via `extras`."""

    name: str
    description: str
    license: str | None = None
    compatibility: str | None = None
    metadata: SkillMetadata | None = None
    related: list[str] = Field(default_factory=list)
    allowed_tools: str | None = Field(default=None, alias="allowed-tools")

    extras: dict[str, Any] = Field(default_factory=dict, exclude=True)

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must be non-empty")
        return value

    @field_validator("description", mode="before")
    @classmethod
    def _null_description_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("related", mode="before")
    @classmethod
    def _related_as_list(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value


@dataclass(slots=True, frozen=True)
class SkillMd:
    frontmatter: SkillFrontmatter
    body: str


def split_frontmatter(text: str, *, path: str | None = None) -> tuple[dict[str, Any], str]:
    """Split SKILL.md text into raw frontmatter data and body.

    Text that does not open with a `---` line has no frontmatter and is all body.
    """
    lines = text.lstrip("\ufeff").splitlines()
    if not lines or not _SKILL_MD_FRONTMATTER_RE.match(lines[0]):
        return {}, "\n".join(lines)

    end_index: int | None = None
    for idx in range(1, len(lines)):
        if _SKILL_MD_FRONTMATTER_RE.match(lines[idx]):
            end_index = idx
            break
    if end_index is None:
        raise MalformedSkillError("frontmatter block is not closed ('---')", path=path)

    yaml_block = "\n".join(lines[1:end_index])
    body = "\n".join(lines[end_index + 1 :])

    try:
        data = yaml.safe_load(yaml_block) or {}
    except yaml.YAMLError as exc:
        raise MalformedSkillError(f"frontmatter is not valid YAML: {exc}", path=path) from exc
    if not isinstance(data, dict):
        raise MalformedSkillError("frontmatter must be a YAML mapping", path=path)
    return data, body


def parse_skill_md(text: str, *, path: str | None = None) -> SkillMd:
    """Parse a SKILL.md file into frontmatter and body."""
    data, body = split_frontmatter(text, path=path)

    known: dict[str, Any] = {k: v for k, v in data.items() if k in _KNOWN_KEYS}
    extras: dict[str, Any] = {k: v for k, v in data.items() if k not in _KNOWN_KEYS}

    try:
        frontmatter = SkillFrontmatter.model_validate({**known, "extras": extras})
    except ValidationError as exc:
        missing = tuple(
            ".".join(str(part) for part in error["loc"])
            for error in exc.errors()
            if error["type"] == "missing"
        )
        raise MalformedSkillError(
            _describe_validation_error(exc), path=path, missing_fields=missing
        ) from exc

    return SkillMd(frontmatter=frontmatter, body=body)


def render_skill_md(skill: SkillMd) -> str:
    """Render a SkillMd back into SKILL.md text."""
    frontmatter_data = skill.frontmatter.model_dump(
        by_alias=True,
        exclude_none=True,
        exclude_defaults=True,
        exclude={"extras"},
    )
    if skill.frontmatter.extras:
        frontmatter_data.update(skill.frontmatter.extras)

    yaml_text = yaml.safe_dump(
        frontmatter_data,
        sort_keys=False,
        allow_unicode=True,
    ).strip()

    # The parser consumes exactly one newline after the closing delimiter.
    return f"---\n{yaml_text}\n---\n{skill.body}\n"


def _describe_validation_error(exc: ValidationError) -> str:
    problems: list[str] = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"])
        if error["type"] == "missing":
            problems.append(f"missing required frontmatter field {field!r}")
        else:
            problems.append(f"invalid frontmatter field {field!r}: {error['msg']}")
    return "; ".join(problems)


__all__ = [
    "SkillFrontmatter",
    "SkillMd",
    "SkillMetadata",
    "parse_skill_md",
    "render_skill_md",
    "split_frontmatter",
]
