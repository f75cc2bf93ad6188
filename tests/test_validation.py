from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from inline_snapshot import snapshot

from skillkit import (
    Skill,
    LoaderConfig,
    SkillRegistry,
    SkillsFS,
    ValidationConfig,
    ValidationIssue,
    has_errors,
    load_skills,
    parse_skill_md,
    validate_directory,
    validate_registry,
    validate_skill,
)


def _skill(name: str, description: str = "d", *, directory: str | None = None, related: str = "[]") -> Skill:
    text = f"---\nname: {name}\ndescription: '{description}'\nrelated: {related}\n---\nbody\n"
    directory = name if directory is None else directory
    path = f"{directory}/SKILL.md" if directory else "SKILL.md"
    return Skill.from_skill_md(parse_skill_md(text), path, directory=directory)


def test_valid_skill_has_no_issues() -> None:
    assert validate_skill(_skill("react-testing", "Write React tests")) == []


def test_empty_description_is_reported() -> None:
    issues = validate_skill(_skill("blank", "   "))
    assert [issue.kind for issue in issues] == ["empty_description"]
    assert issues[0].path == "blank/SKILL.md"
    assert issues[0].skill == "blank"


def test_record_without_name_reports_missing_field() -> None:
    skill = Skill(name="", description="d", body="", path="x/SKILL.md", frontmatter=_skill("x").frontmatter)
    assert validate_skill(skill) == [
        ValidationIssue(kind="missing_field", path="x/SKILL.md", message="missing required field 'name'")
    ]


def test_name_rules() -> None:
    assert [i.kind for i in validate_skill(_skill("Bad_Name"))] == ["invalid_name"]
    assert [i.kind for i in validate_skill(_skill("double--hyphen"))] == ["invalid_name"]
    long_name = "a" * 65
    assert [i.kind for i in validate_skill(_skill(long_name))] == ["invalid_name"]


def test_name_must_match_directory_unless_disabled() -> None:
    skill = _skill("pull-requests", directory="skills/prs")
    assert [i.kind for i in validate_skill(skill)] == ["name_mismatch"]
    assert validate_skill(skill, config=ValidationConfig(require_directory_match=False)) == []


def test_root_level_skill_is_exempt_from_directory_match() -> None:
    assert validate_skill(_skill("anything", directory="")) == []


def test_description_length_limit() -> None:
    skill = _skill("long", "x" * 20)
    issues = validate_skill(skill, config=ValidationConfig(max_description_length=10))
    assert [issue.message for issue in issues] == ["description is 20 characters (limit 10)"]


def test_dangling_related_reference(recorder) -> None:
    registry = SkillRegistry(
        [
            _skill("a", related="[b, ghost]"),
            _skill("b", related="[a]"),
        ]
    )

    issues = validate_registry(registry, logger=recorder)

    assert issues == snapshot(
        [
            ValidationIssue(
                kind="dangling_reference",
                path="a/SKILL.md",
                message="related skill 'ghost' is not loaded",
                skill="a",
            )
        ]
    )
    assert not has_errors(issues)
    assert recorder.calls == [("warning", "Validated skills with {count} issues", {"count": 1})]


def test_validate_registry_logs_info_when_clean(recorder) -> None:
    assert validate_registry(SkillRegistry([_skill("a")]), logger=recorder) == []
    assert recorder.calls == [("info", "Validated skills with {count} issues", {"count": 0})]


def test_validate_directory_collects_every_problem(
    tmp_path: Path, write_skill: Callable[..., Path], skill_text: Callable[..., str], recorder
) -> None:
    write_skill("good", skill_text("good", "fine"))
    broken = write_skill("broken", skill_text(None, "no name"))
    write_skill("copy-one", skill_text("copy", "first"))
    second_copy = write_skill("copy-two", skill_text("copy", "second"))
    empty = write_skill("empty", skill_text("empty", "''"))

    issues = validate_directory(tmp_path, logger=recorder)

    by_path = {(issue.path, issue.kind) for issue in issues}
    assert (str(broken), "missing_field") in by_path
    assert (str(second_copy), "duplicate_name") in by_path
    assert (str(empty), "empty_description") in by_path
    assert has_errors(issues)
    assert issues == sorted(issues, key=lambda issue: (issue.path, issue.kind))


def test_validate_directory_matches_loader_on_clean_tree(
    tmp_path: Path, write_skill: Callable[..., Path], skill_text: Callable[..., str]
) -> None:
    write_skill("example", skill_text("example", "test skill"))

    assert validate_directory(tmp_path) == []
    assert validate_registry(load_skills(tmp_path)) == []


def test_validate_directory_reports_undecodable_file_and_continues() -> None:
    fs = SkillsFS()
    fs.write_bytes("bad/SKILL.md", b"\xff\xfe")
    fs.write_text("good/SKILL.md", "---\nname: good\ndescription: d\n---\n")

    issues = validate_directory(fs)

    assert [(issue.path, issue.kind) for issue in issues] == [("bad/SKILL.md", "malformed")]


def test_validate_directory_reports_oversized_file_and_continues(
    tmp_path: Path, write_skill: Callable[..., Path], skill_text: Callable[..., str]
) -> None:
    big = write_skill("big", skill_text("big", "d", body="x" * 200))
    write_skill("small", skill_text("small", "d", body=""))

    issues = validate_directory(tmp_path, loader_config=LoaderConfig(max_file_bytes=50))

    assert [(issue.path, issue.kind) for issue in issues] == [(str(big), "malformed")]
    assert issues[0].message.endswith("(limit 50)")


def test_validate_directory_reports_missing_fields() -> None:
    fs = SkillsFS()
    fs.write_text("nameless/SKILL.md", "---\ndescription: d\n---\n")
    fs.write_text("terse/SKILL.md", "---\nname: terse\n---\n")
    fs.write_text("typo/SKILL.md", "---\nname: typo\ndescription: d\nrelated: {x: 1}\n---\n")

    issues = validate_directory(fs)

    assert [(issue.path, issue.kind) for issue in issues] == [
        ("nameless/SKILL.md", "missing_field"),
        ("terse/SKILL.md", "missing_field"),
        ("typo/SKILL.md", "malformed"),
    ]
    assert "'description'" in issues[1].message
