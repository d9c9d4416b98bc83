"""Skill-based matching.

Ranks projects against a developer's skills and developers against each other.
Everything here works on plain value types so it can be called from any request
handler without a session; conversion from ORM rows happens in
`devmatch.services.matching_service`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, Generic, Iterable, Sequence, TypeVar


# Complementary skills count for more than duplicated ones.
COMMON_SKILL_WEIGHT = 0.4
UNIQUE_SKILL_WEIGHT = 0.6

NO_SKILLS_MESSAGE = "To get better recommendations, please add skills to your profile."

T = TypeVar("T")


@dataclass(frozen=True)
class DeveloperRecord:
    id: Any
    skills: tuple[str, ...] = ()
    name: str | None = None


@dataclass(frozen=True)
class ProjectRecord:
    id: Any
    required_skills: tuple[str, ...] = ()
    member_ids: frozenset = field(default_factory=frozenset)
    title: str | None = None


@dataclass(frozen=True)
class MatchResult(Generic[T]):
    subject: T
    score: float
    matching_skills: list[str]
    complementary_skills: list[str] | None = None


def unique_skills(skills: Iterable[str] | None) -> list[str]:
    """Collapse duplicates, keeping the first occurrence order."""
    seen: set[str] = set()
    result: list[str] = []
    for skill in skills or ():
        if skill in seen:
            continue
        seen.add(skill)
        result.append(skill)
    return result


def round1(value: float) -> float:
    # Half away from zero on the exact binary value, like Number.prototype.toFixed(1).
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _as_percent(ratio: float) -> float:
    return max(0.0, min(100.0, round1(100 * ratio)))


def score_project_match(user_skills: Iterable[str], project: ProjectRecord) -> MatchResult[ProjectRecord]:
    required = unique_skills(project.required_skills)
    user_set = set(user_skills or ())
    matching = [skill for skill in required if skill in user_set]
    score = _as_percent(len(matching) / len(required)) if required else 0.0
    return MatchResult(subject=project, score=score, matching_skills=matching)


def score_developer_compatibility(
    user_skills: Iterable[str],
    candidate_skills: Iterable[str],
) -> MatchResult[tuple[str, ...]]:
    user = unique_skills(user_skills)
    candidate = unique_skills(candidate_skills)
    user_set = set(user)

    common = [skill for skill in candidate if skill in user_set]
    unique = [skill for skill in candidate if skill not in user_set]

    common_score = len(common) / max(len(user), 1)
    unique_score = len(unique) / max(len(candidate), 1)
    score = _as_percent(COMMON_SKILL_WEIGHT * common_score + UNIQUE_SKILL_WEIGHT * unique_score)
    return MatchResult(
        subject=tuple(candidate),
        score=score,
        matching_skills=common,
        complementary_skills=unique,
    )


def score_developer(user_skills: Iterable[str], developer: DeveloperRecord) -> MatchResult[DeveloperRecord]:
    result = score_developer_compatibility(user_skills, developer.skills)
    return MatchResult(
        subject=developer,
        score=result.score,
        matching_skills=result.matching_skills,
        complementary_skills=result.complementary_skills,
    )


# ---------------- Candidate filters ----------------
def shares_skill_with(user_skills: Iterable[str]) -> Callable[[Any], bool]:
    user_set = set(user_skills or ())

    def predicate(candidate: Any) -> bool:
        skills = candidate.required_skills if isinstance(candidate, ProjectRecord) else candidate.skills
        return any(skill in user_set for skill in skills or ())

    return predicate


def excludes_member(user_id: Any) -> Callable[[ProjectRecord], bool]:
    def predicate(project: ProjectRecord) -> bool:
        return user_id not in project.member_ids

    return predicate


def excludes_user(user_id: Any) -> Callable[[DeveloperRecord], bool]:
    def predicate(developer: DeveloperRecord) -> bool:
        return developer.id != user_id

    return predicate


def all_of(*predicates: Callable[[T], bool]) -> Callable[[T], bool]:
    def predicate(candidate: T) -> bool:
        return all(check(candidate) for check in predicates)

    return predicate


# ---------------- Ranking ----------------
def rank_candidates(
    candidates: Iterable[T],
    scorer: Callable[[T], MatchResult],
    *,
    limit: int,
    predicate: Callable[[T], bool] | None = None,
) -> list[MatchResult]:
    """Filter, score, sort by score descending and keep the top `limit`.

    The sort is stable, so candidates with equal scores keep their input order.
    """
    if limit < 0:
        raise ValueError("limit must be >= 0")
    if limit == 0:
        return []

    pool = [c for c in candidates if predicate is None or predicate(c)]
    scored = [scorer(candidate) for candidate in pool]
    scored.sort(key=lambda result: result.score, reverse=True)
    return scored[:limit]


def recommend_projects(
    user: DeveloperRecord,
    projects: Sequence[ProjectRecord],
    *,
    limit: int,
    min_score: float | None = None,
) -> list[MatchResult[ProjectRecord]]:
    if limit < 0:
        raise ValueError("limit must be >= 0")
    user_skills = unique_skills(user.skills)
    if not user_skills:
        return []
    predicate = all_of(shares_skill_with(user_skills), excludes_member(user.id))
    ranked = rank_candidates(
        projects,
        lambda project: score_project_match(user_skills, project),
        limit=len(projects) if min_score is not None else limit,
        predicate=predicate,
    )
    if min_score is not None:
        ranked = [result for result in ranked if result.score > min_score][:limit]
    return ranked


def recommend_developers(
    user: DeveloperRecord,
    developers: Sequence[DeveloperRecord],
    *,
    limit: int,
) -> list[MatchResult[DeveloperRecord]]:
    user_skills = unique_skills(user.skills)
    if not user_skills:
        return []
    predicate = all_of(shares_skill_with(user_skills), excludes_user(user.id))
    return rank_candidates(
        developers,
        lambda developer: score_developer(user_skills, developer),
        limit=limit,
        predicate=predicate,
    )
