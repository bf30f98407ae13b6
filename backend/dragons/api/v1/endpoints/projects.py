from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from dragons.api import deps
from dragons.api.router import CustomAPIRouter
from dragons.api.v1.helpers.responses import RESP_AUTH_404
from dragons.core.exceptions import NotFoundError
from dragons.db.mongodb import get_database
from dragons.models.user import User
from dragons.repositories import ProjectRepository
from dragons.services.population import populate_project

router = CustomAPIRouter()


@router.get("/{project_id}", summary="Get a project", responses={**RESP_AUTH_404})
async def get_project(
    project_id: str,
    current_user: User = Depends(deps.get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    A project with its tasks, their assignees and effective status.
    """
    project = await ProjectRepository(db).get_by_id(project_id)
    if project is None:
        raise NotFoundError("Project not found.")
    return await populate_project(project, db)
