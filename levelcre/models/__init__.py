"""SQLAlchemy models."""

from levelcre.models.prospect import Prospect
from levelcre.models.user import User
from levelcre.models.workspace import Workspace
from levelcre.models.workspace_member import WorkspaceMember
from levelcre.models.workspace_prospect import WorkspaceProspect

__all__ = [
    "Prospect",
    "User",
    "Workspace",
    "WorkspaceMember",
    "WorkspaceProspect",
]
