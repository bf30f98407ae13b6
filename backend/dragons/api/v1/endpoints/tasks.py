import logging

from fastapi import Depends, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from dragons.api import deps
from dragons.api.router import CustomAPIRouter
from dragons.api.v1.helpers import build_model
from dragons.api.v1.helpers.responses import RESP_AUTH_400_404, RESP_AUTH_404
from dragons.core.constants import (
    MAX_TASK_ASSIGNEES,
    ROLE_COORDINATOR,
    ROLE_MENTOR,
    STATUS_COMPLETED,
    STATUS_WAITING_FOR_GRADING,
)
from dragons.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from dragons.db.mongodb import get_database
from dragons.models.task import Task
from dragons.models.user import User
from dragons.repositories import ProjectRepository, TaskRepository, UserRepository
from dragons.schemas.task import TaskAssign, TaskCreate, TaskSubmit, TaskUpdate
from dragons.services.population import populate_task

logger = logging.getLogger(__name__)

router = CustomAPIRouter()

# Fields that may be cleared by sending null
NULLABLE_TASK_FIELDS = {"description", "deadline", "submission_link"}


async def _get_task_or_404(task_repo: TaskRepository, task_id: str) -> Task:
    task = await task_repo.get_by_id(task_id)
    if task is None:
        raise NotFoundError("Task not found.")
    return task


async def _task_response(task: Task, db: AsyncIOMotorDatabase) -> dict:
    return {"success": True, "data": await populate_task(task, db)}


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create a task", responses={**RESP_AUTH_400_404})
async def create_task(
    task_in: TaskCreate,
    current_user: User = Depends(deps.RoleChecker(ROLE_MENTOR)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Create a task inside a project.

    Duplicate assignee ids are collapsed before the assignee cap is
    checked. The new task id is appended to the project's task list.
    """
    if not task_in.name or not task_in.name.strip() or not task_in.project_id:
        raise ValidationError("Task name and projectId are required.")

    project_repo = ProjectRepository(db)
    if not await project_repo.exists_by_id(task_in.project_id):
        raise NotFoundError("Project not found.")

    fields = task_in.model_dump(exclude_none=True)
    task = build_model(Task, **fields)

    await TaskRepository(db).create(task)
    await project_repo.add_task(task.project_id, task.id)

    logger.info(f"Task {task.id} created in project {task.project_id} by {current_user.id}")
    return await _task_response(task, db)


@router.get("/{task_id}", summary="Get a task", responses={**RESP_AUTH_404})
async def get_task(
    task_id: str,
    current_user: User = Depends(deps.get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    task = await _get_task_or_404(TaskRepository(db), task_id)
    return await _task_response(task, db)


@router.put("/{task_id}", summary="Update a task", responses={**RESP_AUTH_400_404})
async def update_task(
    task_id: str,
    task_in: TaskUpdate,
    current_user: User = Depends(deps.RoleChecker(ROLE_MENTOR)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Partial update. The merged task is validated as a whole before anything
    is written; a task never moves to another project.
    """
    task_repo = TaskRepository(db)
    task = await _get_task_or_404(task_repo, task_id)

    changes = {
        key: value
        for key, value in task_in.model_dump(exclude_unset=True).items()
        if value is not None or key in NULLABLE_TASK_FIELDS
    }
    if not changes:
        return await _task_response(task, db)

    merged = build_model(Task, **{**task.model_dump(), **changes})
    update_data = {key: getattr(merged, key) for key in changes}

    updated = await task_repo.update_fields(task.id, update_data)
    if updated is None:
        raise NotFoundError("Task not found.")

    logger.info(f"Task {task.id} updated by {current_user.id}: {sorted(update_data)}")
    return await _task_response(updated, db)


@router.delete("/{task_id}", summary="Delete a task", responses={**RESP_AUTH_404})
async def delete_task(
    task_id: str,
    current_user: User = Depends(deps.RoleChecker(ROLE_MENTOR)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    task_repo = TaskRepository(db)
    task = await _get_task_or_404(task_repo, task_id)

    await ProjectRepository(db).remove_task(task.project_id, task.id)
    await task_repo.delete(task.id)

    logger.info(f"Task {task.id} deleted by {current_user.id}")
    return {"success": True, "msg": "Task deleted successfully."}


@router.patch("/{task_id}/assign", summary="Assign a user", responses={**RESP_AUTH_400_404})
async def assign_task(
    task_id: str,
    assign_in: TaskAssign,
    current_user: User = Depends(deps.RoleChecker(ROLE_MENTOR)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    Add a user to the assignees. Assigning someone twice is a no-op; the
    assignee cap is enforced by the conditional update itself.
    """
    task_repo = TaskRepository(db)
    task = await _get_task_or_404(task_repo, task_id)

    if not await UserRepository(db).exists_by_id(assign_in.user_id):
        raise NotFoundError("User not found.")

    updated = await task_repo.add_assignee(task.id, assign_in.user_id)
    if updated is None:
        if not await task_repo.exists_by_id(task.id):
            raise NotFoundError("Task not found.")
        raise ValidationError(f"A task can have a maximum of {MAX_TASK_ASSIGNEES} assignees.")

    logger.info(f"User {assign_in.user_id} assigned to task {task.id}")
    return await _task_response(updated, db)


@router.patch("/{task_id}/unassign", summary="Unassign a user", responses={**RESP_AUTH_404})
async def unassign_task(
    task_id: str,
    assign_in: TaskAssign,
    current_user: User = Depends(deps.RoleChecker(ROLE_MENTOR)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    updated = await TaskRepository(db).remove_assignee(task_id, assign_in.user_id)
    if updated is None:
        raise NotFoundError("Task not found.")

    logger.info(f"User {assign_in.user_id} unassigned from task {task_id}")
    return await _task_response(updated, db)


@router.patch("/{task_id}/complete", summary="Mark a task completed", responses={**RESP_AUTH_404})
async def complete_task(
    task_id: str,
    current_user: User = Depends(deps.RoleChecker(ROLE_MENTOR, ROLE_COORDINATOR)),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    updated = await TaskRepository(db).update_fields(task_id, {"completion_status": STATUS_COMPLETED})
    if updated is None:
        raise NotFoundError("Task not found.")

    logger.info(f"Task {task_id} marked completed by {current_user.id}")
    return await _task_response(updated, db)


@router.patch("/{task_id}/submit", summary="Submit work for a task", responses={**RESP_AUTH_400_404})
async def submit_task(
    task_id: str,
    submit_in: TaskSubmit,
    current_user: User = Depends(deps.get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """
    An assignee hands in a submission link; the task then waits for grading.
    """
    task_repo = TaskRepository(db)
    task = await _get_task_or_404(task_repo, task_id)

    if current_user.id not in task.assignees:
        raise AuthorizationError("Only assignees can submit this task")

    link = submit_in.submission_link.strip()
    if not link:
        raise ValidationError("Submission link is required")

    updated = await task_repo.update_fields(
        task.id,
        {"submission_link": link, "completion_status": STATUS_WAITING_FOR_GRADING},
    )
    if updated is None:
        raise NotFoundError("Task not found.")

    logger.info(f"Task {task.id} submitted by {current_user.id}")
    return await _task_response(updated, db)
