# __init__.py
from devmatch.schemas.matching import DeveloperMatch, MatchingResponse, ProjectMatch, ProjectRecommendationResponse
from devmatch.schemas.message import MessageCreate, MessageListResponse, MessageRead
from devmatch.schemas.project import (
	MemberAdd,
	MemberProfile,
	MemberRead,
	MemberRoleUpdate,
	Pagination,
	ProjectCreate,
	ProjectListResponse,
	ProjectRead,
	ProjectUpdate,
)
from devmatch.schemas.task import TaskCreate, TaskRead, TaskUpdate
from devmatch.schemas.user import Token, UserCreate, UserLinks, UserLogin, UserRead, UserSummary, UserUpdate

__all__ = [
	"DeveloperMatch",
	"MatchingResponse",
	"ProjectMatch",
	"ProjectRecommendationResponse",
	"MessageCreate",
	"MessageListResponse",
	"MessageRead",
	"MemberAdd",
	"MemberProfile",
	"MemberRead",
	"MemberRoleUpdate",
	"Pagination",
	"ProjectCreate",
	"ProjectListResponse",
	"ProjectRead",
	"ProjectUpdate",
	"TaskCreate",
	"TaskRead",
	"TaskUpdate",
	"Token",
	"UserCreate",
	"UserLinks",
	"UserLogin",
	"UserRead",
	"UserSummary",
	"UserUpdate",
]
