"""Scan a skill tree and build a `SkillRegistry`."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from .config import LoaderConfig
from .exceptions import DuplicateSkillError, MalformedSkillError
from .fs import SkillsFS
from .logging_utils import StructuredLogger, get_structured_logger, log_structured
from .models import Skill
from .registry import SkillRegistry
from .skill_md import parse_skill_md


@dataclass(slots=True, frozen=True)
class SkillSource:
    """Location of one skill file inside a tree."""

    directory: str
    """Skill directory relative to the tree root ('' for a root-level file)."""
    rel_path: str
    path: str
    """Path reported in errors: on-disk when the tree came from disk."""


def open_skills_fs(root: Path | str | SkillsFS, config: LoaderConfig) -> SkillsFS:
    """Return `root` as a `SkillsFS`, reading only skill files from disk."""
    if isinstance(root, SkillsFS):
        return root
    return SkillsFS.from_disk(
        Path(root),
        filename=config.skill_filename,
        include_hidden=config.include_hidden,
    )


def iter_skill_sources(fs: SkillsFS, config: LoaderConfig) -> Iterator[SkillSource]:
    """Yield every skill file in the tree in path order."""
    for skill_dir in fs.iter_skill_dirs(config.skill_filename):
        rel = f"{skill_dir}/{config.skill_filename}" if skill_dir else config.skill_filename
        yield SkillSource(directory=skill_dir, rel_path=rel, path=fs.source_path(rel))


def read_skill(fs: SkillsFS, source: SkillSource, config: LoaderConfig) -> Skill:
    """Read and parse one skill file, raising `MalformedSkillError`."""
    content = fs.read_bytes(source.rel_path)
    if config.max_file_bytes is not None and len(content) > config.max_file_bytes:
        raise MalformedSkillError(
            f"file is {len(content)} bytes (limit {config.max_file_bytes})", path=source.path
        )
    try:
        text = content.decode(config.encoding)
    except UnicodeDecodeError as exc:
        raise MalformedSkillError(
            f"file is not valid {config.encoding} text", path=source.path
        ) from exc
    skill_md = parse_skill_md(text, path=source.path)
    return Skill.from_skill_md(skill_md, source.path, directory=source.directory)


def load_skills(
    root: Path | str | SkillsFS,
    *,
    config: LoaderConfig | None = None,
    logger: StructuredLogger | None = None,
) -> SkillRegistry:
    """Load every skill under `root` into a registry.

    Raises `MalformedSkillError` for a file that cannot be parsed (including a
    missing `name` or `description`) and `DuplicateSkillError` when two files
    declare the same name. An empty tree loads as an empty registry.
    """
    config = config or LoaderConfig()
    log = get_structured_logger(logger)
    fs = open_skills_fs(root, config)

    skills: dict[str, Skill] = {}
    for source in iter_skill_sources(fs, config):
        skill = read_skill(fs, source, config)
        existing = skills.get(skill.name)
        if existing is not None:
            raise DuplicateSkillError(skill.name, existing.path, skill.path)
        skills[skill.name] = skill
        log_structured(log, "debug", "Loaded skill {name}", name=skill.name, path=skill.path)

    registry = SkillRegistry(skills.values())
    log_structured(
        log,
        "info",
        "Loaded {count} skills",
        count=len(registry),
        root=fs.source_path(""),
    )
    return registry


__all__ = [
    "SkillSource",
    "iter_skill_sources",
    "load_skills",
    "open_skills_fs",
    "read_skill",
]
