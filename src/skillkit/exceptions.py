"""Custom exceptions used across skillkit."""

from __future__ import annotations


class SkillError(Exception):
    """Base error for skill loading."""


class MalformedSkillError(SkillError, ValueError):
    """Raised when a skill file cannot be parsed into a valid record."""

    def __init__(
        self,
        reason: str,
        *,
        path: str | None = None,
        missing_fields: tuple[str, ...] = (),
    ) -> None:
        self.reason = reason
        self.path = path
        self.missing_fields = missing_fields
        if path:
            super().__init__(f"{path}: {reason}")
        else:
            super().__init__(reason)


class DuplicateSkillError(SkillError):
    """Raised when two skill files declare the same name."""

    def __init__(self, name: str, first_path: str, second_path: str) -> None:
        self.name = name
        self.first_path = first_path
        self.second_path = second_path
        super().__init__(
            f"duplicate skill name {name!r} declared in {first_path} and {second_path}"
        )


__all__ = ["SkillError", "MalformedSkillError", "DuplicateSkillError"]
