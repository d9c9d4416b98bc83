# __init__.py
from devmatch.models.message import Message
from devmatch.models.project import Project, ProjectMember
from devmatch.models.task import Task
from devmatch.models.user import User

__all__ = [
	"Message",
	"Project",
	"ProjectMember",
	"Task",
	"User",
]
