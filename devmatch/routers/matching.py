# matching.py
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from devmatch.database import get_db
from devmatch.models.user import User
from devmatch.routers.dependencies import get_current_user
from devmatch.schemas.matching import (
    DeveloperMatch,
    DeveloperProfile,
    MatchingResponse,
    ProjectMatch,
    ProjectRecommendationResponse,
)
from devmatch.schemas.project import ProjectRead
from devmatch.services.matching_service import (
    MatchingOutcome,
    MatchingUnavailableError,
    find_matches,
    recommend_projects_for_dashboard,
)


router = APIRouter(prefix="/matching", tags=["matching"])

logger = logging.getLogger(__name__)


def _project_matches(outcome: MatchingOutcome) -> list[ProjectMatch]:
    return [
        ProjectMatch(
            project=ProjectRead.model_validate(outcome.project_rows[result.subject.id]),
            matching_skills=result.matching_skills,
            match_score=result.score,
        )
        for result in outcome.projects
    ]


def _developer_matches(outcome: MatchingOutcome) -> list[DeveloperMatch]:
    return [
        DeveloperMatch(
            developer=DeveloperProfile.model_validate(outcome.developer_rows[result.subject.id], from_attributes=True),
            common_skills=result.matching_skills,
            unique_skills=result.complementary_skills or [],
            compatibility_score=result.score,
        )
        for result in outcome.developers
    ]


@router.get("", response_model=MatchingResponse)
def get_matches(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MatchingResponse:
    try:
        outcome = find_matches(db, current_user)
    except MatchingUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error finding matches") from exc

    logger.info(
        "matching.results user_id=%s projects=%d developers=%d",
        current_user.id,
        len(outcome.projects),
        len(outcome.developers),
    )
    return MatchingResponse(
        projects=_project_matches(outcome),
        developers=_developer_matches(outcome),
        message=outcome.message,
    )


@router.get(
    "/recommended-projects",
    response_model=ProjectRecommendationResponse,
)
def get_recommended_projects(
    limit: int | None = Query(default=None, ge=1, le=50),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ProjectRecommendationResponse:
    try:
        outcome = recommend_projects_for_dashboard(db, current_user, limit=limit)
    except MatchingUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error finding matches") from exc
    return ProjectRecommendationResponse(projects=_project_matches(outcome), message=outcome.message)
