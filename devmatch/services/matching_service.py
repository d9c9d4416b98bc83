from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from devmatch.config import settings
from devmatch.models.project import Project, ProjectMember
from devmatch.models.user import User
from devmatch.services.matching import (
    NO_SKILLS_MESSAGE,
    DeveloperRecord,
    MatchResult,
    ProjectRecord,
    recommend_developers,
    recommend_projects,
    unique_skills,
)


logger = logging.getLogger(__name__)


class MatchingUnavailableError(RuntimeError):
    pass


@dataclass(frozen=True)
class MatchingOutcome:
    projects: list[MatchResult[ProjectRecord]] = field(default_factory=list)
    developers: list[MatchResult[DeveloperRecord]] = field(default_factory=list)
    message: str | None = None

    # ORM rows for the ranked subjects, keyed by id, so callers can render them.
    project_rows: dict[int, Project] = field(default_factory=dict)
    developer_rows: dict[int, User] = field(default_factory=dict)


def developer_record(user: User) -> DeveloperRecord:
    return DeveloperRecord(id=user.id, skills=tuple(unique_skills(user.skills or [])), name=user.name)


def project_record(project: Project) -> ProjectRecord:
    return ProjectRecord(
        id=project.id,
        required_skills=tuple(unique_skills(project.required_skills or [])),
        member_ids=frozenset(member.user_id for member in project.members),
        title=project.title,
    )


def _load_projects(db: Session) -> list[Project]:
    return (
        db.query(Project)
        .options(
            selectinload(Project.owner),
            selectinload(Project.members).selectinload(ProjectMember.user),
        )
        .order_by(Project.created_at.desc(), Project.id.desc())
        .all()
    )


def _load_developers(db: Session, exclude_user_id: int) -> list[User]:
    # Reads every other user. Skills live in a JSON column with no portable
    # containment operator, so the shared-skill filter runs in recommend_developers.
    # Cost grows linearly with the user table.
    return db.query(User).filter(User.id != exclude_user_id).order_by(User.id).all()


def find_matches(
    db: Session,
    user: User,
    *,
    project_limit: int | None = None,
    developer_limit: int | None = None,
) -> MatchingOutcome:
    me = developer_record(user)
    if not me.skills:
        return MatchingOutcome(message=NO_SKILLS_MESSAGE)

    project_limit = settings.matching_project_limit if project_limit is None else project_limit
    developer_limit = settings.matching_developer_limit if developer_limit is None else developer_limit

    try:
        project_rows = {p.id: p for p in _load_projects(db)}
        developer_rows = {u.id: u for u in _load_developers(db, user.id)}
    except SQLAlchemyError as exc:
        logger.exception("matching.fetch_failed user_id=%s", user.id)
        raise MatchingUnavailableError("Failed to load matching candidates") from exc

    logger.debug(
        "matching.candidates user_id=%s projects=%d developers=%d",
        user.id,
        len(project_rows),
        len(developer_rows),
    )
    projects = recommend_projects(me, [project_record(p) for p in project_rows.values()], limit=project_limit)
    developers = recommend_developers(
        me,
        [developer_record(u) for u in developer_rows.values()],
        limit=developer_limit,
    )
    return MatchingOutcome(
        projects=projects,
        developers=developers,
        project_rows={r.subject.id: project_rows[r.subject.id] for r in projects},
        developer_rows={r.subject.id: developer_rows[r.subject.id] for r in developers},
    )


def recommend_projects_for_dashboard(db: Session, user: User, *, limit: int | None = None) -> MatchingOutcome:
    me = developer_record(user)
    if not me.skills:
        return MatchingOutcome(message=NO_SKILLS_MESSAGE)

    limit = settings.dashboard_project_limit if limit is None else limit
    try:
        project_rows = {p.id: p for p in _load_projects(db)}
    except SQLAlchemyError as exc:
        logger.exception("matching.dashboard_fetch_failed user_id=%s", user.id)
        raise MatchingUnavailableError("Failed to load matching candidates") from exc

    projects = recommend_projects(
        me,
        [project_record(p) for p in project_rows.values()],
        limit=limit,
        min_score=0,
    )
    return MatchingOutcome(
        projects=projects,
        project_rows={r.subject.id: project_rows[r.subject.id] for r in projects},
    )
