"""Load and validate directories of SKILL.md guidance documents."""

from __future__ import annotations

from .config import LoaderConfig, ValidationConfig
from .exceptions import DuplicateSkillError, MalformedSkillError, SkillError
from .fs import SkillsFS, normalize_rel_path
from .loader import SkillSource, iter_skill_sources, load_skills, read_skill
from .models import Skill, SkillSearchResult, SkillSummary
from .registry import SkillRegistry
from .search import search_skills
from .skill_md import (
    SkillFrontmatter,
    SkillMd,
    SkillMetadata,
    parse_skill_md,
    render_skill_md,
    split_frontmatter,
)
from .validation import (
    ValidationIssue,
    has_errors,
    validate_directory,
    validate_registry,
    validate_skill,
)

__all__ = [
    "load_skills",
    "read_skill",
    "iter_skill_sources",
    "SkillSource",
    "LoaderConfig",
    "ValidationConfig",
    "SkillError",
    "MalformedSkillError",
    "DuplicateSkillError",
    "SkillsFS",
    "normalize_rel_path",
    "Skill",
    "SkillSummary",
    "SkillSearchResult",
    "SkillRegistry",
    "search_skills",
    "SkillFrontmatter",
    "SkillMd",
    "SkillMetadata",
    "parse_skill_md",
    "render_skill_md",
    "split_frontmatter",
    "ValidationIssue",
    "has_errors",
    "validate_directory",
    "validate_registry",
    "validate_skill",
]

__version__ = "0.1.0"
