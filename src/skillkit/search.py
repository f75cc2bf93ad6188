"""Keyword relevance matching over a loaded registry.

This module intentionally avoids any external search/index dependencies.
"""

from __future__ import annotations

import re

from .models import Skill, SkillSearchResult
from .registry import SkillRegistry

DESCRIPTION_WEIGHT = 3.0
"""Multiplier for hits in a skill's description relative to its body."""


def tokenize_query(query: str) -> list[str]:
    return [t for t in re.split(r"\W+", query.strip().lower()) if t]


def score_skill(skill: Skill, tokens: list[str]) -> float:
    description = skill.description.lower()
    body = skill.body.lower()
    score = 0.0
    for tok in tokens:
        score += DESCRIPTION_WEIGHT * description.count(tok)
        score += body.count(tok)
    return score


def search_skills(
    registry: SkillRegistry,
    query: str,
    *,
    top_k: int = 5,
) -> list[SkillSearchResult]:
    """Rank skills by keyword hits in their description and body.

    Blank queries and a non-positive `top_k` return no results. Ties are
    broken by skill name.
    """
    tokens = tokenize_query(query)
    if not tokens:
        return []

    scored: list[tuple[float, Skill]] = []
    for skill in registry.values():
        score = score_skill(skill, tokens)
        if score > 0:
            scored.append((score, skill))

    scored.sort(key=lambda item: (-item[0], item[1].name))
    results: list[SkillSearchResult] = []
    for score, skill in scored[: max(0, top_k)]:
        haystack = f"{skill.description}\n{skill.body}"
        results.append(
            SkillSearchResult(
                name=skill.name,
                path=skill.path,
                snippet=_snippet_for_tokens(haystack, tokens),
                relevance_score=score,
            )
        )
    return results


def _snippet_for_tokens(text: str, tokens: list[str]) -> str | None:
    lowered = text.lower()
    for tok in tokens:
        idx = lowered.find(tok)
        if idx >= 0:
            start = max(0, idx - 60)
            end = min(len(text), idx + 180)
            return text[start:end].strip()
    return None


__all__ = ["DESCRIPTION_WEIGHT", "score_skill", "search_skills", "tokenize_query"]
