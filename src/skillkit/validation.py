"""Structural checks over loaded skills.

Validators report problems as `ValidationIssue` values and never raise for
content problems; callers decide which issues are fatal.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Iterable, Literal

from .config import LoaderConfig, ValidationConfig
from .exceptions import DuplicateSkillError, MalformedSkillError
from .fs import SkillsFS
from .logging_utils import StructuredLogger, get_structured_logger, log_structured
from .loader import iter_skill_sources, open_skills_fs, read_skill
from .models import Skill
from .registry import SkillRegistry

IssueKind = Literal[
    "malformed",
    "duplicate_name",
    "missing_field",
    "empty_description",
    "invalid_name",
    "name_mismatch",
    "description_too_long",
    "dangling_reference",
]

ERROR_KINDS: frozenset[str] = frozenset({"malformed", "duplicate_name", "missing_field"})

# Lowercase alphanumerics separated by single hyphens.
_NAME_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


@dataclass(slots=True, frozen=True)
class ValidationIssue:
    kind: IssueKind
    path: str
    message: str
    skill: str | None = None


def validate_skill(
    skill: Skill, *, config: ValidationConfig | None = None
) -> list[ValidationIssue]:
    """Check a single record for required fields and naming rules."""
    config = config or ValidationConfig()
    issues: list[ValidationIssue] = []

    def report(kind: IssueKind, message: str) -> None:
        issues.append(
            ValidationIssue(kind=kind, path=skill.path, message=message, skill=skill.name or None)
        )

    if not skill.name:
        report("missing_field", "missing required field 'name'")
        return issues

    if not skill.description.strip():
        report("empty_description", f"skill {skill.name!r} has an empty description")
    elif len(skill.description) > config.max_description_length:
        report(
            "description_too_long",
            f"description is {len(skill.description)} characters "
            f"(limit {config.max_description_length})",
        )

    if len(skill.name) > config.max_name_length:
        report(
            "invalid_name",
            f"name {skill.name!r} is longer than {config.max_name_length} characters",
        )
    elif not _NAME_RE.match(skill.name):
        report(
            "invalid_name",
            f"name {skill.name!r} must use lowercase letters, digits and single hyphens",
        )

    if config.require_directory_match and skill.directory:
        directory = PurePosixPath(skill.directory).name
        if directory != skill.name:
            report(
                "name_mismatch",
                f"name {skill.name!r} does not match its directory {directory!r}",
            )

    return issues


def validate_registry(
    registry: SkillRegistry,
    *,
    config: ValidationConfig | None = None,
    logger: StructuredLogger | None = None,
) -> list[ValidationIssue]:
    """Validate every record and check that related-skill references resolve."""
    return _finish(_registry_issues(registry, config), logger)


def validate_directory(
    root: Path | str | SkillsFS,
    *,
    loader_config: LoaderConfig | None = None,
    config: ValidationConfig | None = None,
    logger: StructuredLogger | None = None,
) -> list[ValidationIssue]:
    """Scan `root` and report every problem instead of stopping at the first.

    Malformed files and duplicate names become issues; the remaining skills are
    validated as a registry. A missing root still raises `ValueError`.
    """
    loader_config = loader_config or LoaderConfig()
    fs = open_skills_fs(root, loader_config)

    issues: list[ValidationIssue] = []
    loaded: dict[str, Skill] = {}
    for source in iter_skill_sources(fs, loader_config):
        try:
            skill = read_skill(fs, source, loader_config)
        except MalformedSkillError as exc:
            issues.append(
                ValidationIssue(
                    kind="missing_field" if exc.missing_fields else "malformed",
                    path=exc.path or source.path,
                    message=exc.reason,
                )
            )
            continue
        existing = loaded.get(skill.name)
        if existing is not None:
            error = DuplicateSkillError(skill.name, existing.path, skill.path)
            issues.append(
                ValidationIssue(
                    kind="duplicate_name",
                    path=skill.path,
                    message=str(error),
                    skill=skill.name,
                )
            )
            continue
        loaded[skill.name] = skill

    issues.extend(_registry_issues(SkillRegistry(loaded.values()), config))
    return _finish(issues, logger)


def has_errors(issues: Iterable[ValidationIssue]) -> bool:
    """Return True when any issue means the tree would fail to load."""
    return any(issue.kind in ERROR_KINDS for issue in issues)


def _registry_issues(
    registry: SkillRegistry, config: ValidationConfig | None
) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for name in registry.names():
        skill = registry[name]
        issues.extend(validate_skill(skill, config=config))
        for ref in skill.related:
            if ref not in registry:
                issues.append(
                    ValidationIssue(
                        kind="dangling_reference",
                        path=skill.path,
                        message=f"related skill {ref!r} is not loaded",
                        skill=skill.name,
                    )
                )
    return issues


def _finish(
    issues: list[ValidationIssue], logger: StructuredLogger | None
) -> list[ValidationIssue]:
    issues = sorted(issues, key=lambda issue: (issue.path, issue.kind))
    log_structured(
        get_structured_logger(logger),
        "warning" if issues else "info",
        "Validated skills with {count} issues",
        count=len(issues),
    )
    return issues


__all__ = [
    "ERROR_KINDS",
    "IssueKind",
    "ValidationIssue",
    "has_errors",
    "validate_directory",
    "validate_registry",
    "validate_skill",
]
