"""Configuration objects for loading and validating skills."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LoaderConfig:
    """Configuration for scanning a skill tree."""

    skill_filename: str = "SKILL.md"
    """File name that marks a directory as a skill."""

    include_hidden: bool = False
    """Descend into dot-directories and read dot-files."""

    max_file_bytes: int | None = None
    """Reject skill files larger than this many bytes. None disables the limit."""

    encoding: str = "utf-8"
    """Text encoding used to decode skill files."""


@dataclass(frozen=True)
class ValidationConfig:
    """Limits applied by the validator."""

    max_name_length: int = 64
    """Longest accepted skill name."""

    max_description_length: int = 1024
    """Longest accepted description, in characters."""

    require_directory_match: bool = True
    """Require a skill's name to equal the name of the directory holding it.

    Skills loaded from a root-level file have no directory and are exempt.
    """


__all__ = ["LoaderConfig", "ValidationConfig"]
