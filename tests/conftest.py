from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import logfire
import pytest


@pytest.fixture(scope="session", autouse=True)
def quiet_logfire() -> Iterator[None]:
    logfire.configure(send_to_logfire=False, console=False)
    yield


class RecordingLogger:
    """Collects structured log calls made through `log_structured`."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, dict[str, object]]] = []

    def info(self, message: str, /, **kwargs: object) -> None:
        self.calls.append(("info", message, dict(kwargs)))

    def debug(self, message: str, /, **kwargs: object) -> None:
        self.calls.append(("debug", message, dict(kwargs)))

    def warning(self, message: str, /, **kwargs: object) -> None:
        self.calls.append(("warning", message, dict(kwargs)))

    def error(self, message: str, /, **kwargs: object) -> None:
        self.calls.append(("error", message, dict(kwargs)))


@pytest.fixture
def recorder() -> RecordingLogger:
    return RecordingLogger()


def _skill_text(name: str | None, description: str | None = "d", body: str = "# Body\n", **extra: str) -> str:
    lines = ["---"]
    if name is not None:
        lines.append(f"name: {name}")
    if description is not None:
        lines.append(f"description: {description}")
    lines.extend(f"{key}: {value}" for key, value in extra.items())
    lines.append("---")
    return "\n".join(lines) + "\n" + body


@pytest.fixture
def skill_text() -> Callable[..., str]:
    """Build SKILL.md text; pass `None` to omit `name` or `description`."""
    return _skill_text


@pytest.fixture
def write_skill(tmp_path: Path) -> Callable[..., Path]:
    """Write `<tmp_path>/<directory>/SKILL.md` and return its path."""

    def _write(directory: str, text: str) -> Path:
        target = tmp_path / directory / "SKILL.md" if directory else tmp_path / "SKILL.md"
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
        return target

    return _write
