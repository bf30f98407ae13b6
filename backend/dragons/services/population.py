"""
Read-path composition ("populate").

Stored documents only hold ids. These helpers resolve those ids into the
small embedded documents the client renders, one batched query per level,
so the cost of every read is visible at the call site.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from dragons.models.project import Project
from dragons.models.task import Task, compute_effective_status
from dragons.models.team import Team
from dragons.repositories import ProjectRepository, TaskRepository, UserRepository

# User projections for the different views
USER_CONTACT_FIELDS = {"_id": 1, "username": 1, "email": 1, "role": 1}
USER_HEALTH_FIELDS = {"_id": 1, "username": 1, "health": 1}
USER_NAME_FIELDS = {"_id": 1, "username": 1}

PROJECT_SUMMARY_FIELDS = {"_id": 1, "name": 1, "description": 1, "tasks": 1}
TASK_SUMMARY_FIELDS = {
    "_id": 1,
    "name": 1,
    "completion_status": 1,
    "assignees": 1,
    "deadline": 1,
    "difficulty": 1,
}


def _public(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Rename Mongo's _id to id."""
    doc = dict(doc)
    doc["id"] = doc.pop("_id")
    return doc


def _index(docs: Iterable[Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    return {doc["_id"]: _public(doc) for doc in docs}


def _resolve(ids: Iterable[Optional[str]], index: Dict[str, Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Keep the stored order; dangling ids are dropped."""
    return [index[i] for i in ids if i and i in index]


async def _users_by_id(
    db: AsyncIOMotorDatabase,
    user_ids: Iterable[Optional[str]],
    projection: Dict[str, int],
) -> Dict[str, Dict[str, Any]]:
    ids = sorted({i for i in user_ids if i})
    docs = await UserRepository(db).find_by_ids(ids, projection)
    return _index(docs)


def _task_summary(doc: Dict[str, Any], users: Dict[str, Dict[str, Any]], now: datetime) -> Dict[str, Any]:
    status = doc.get("completion_status")
    return {
        "id": doc["_id"],
        "name": doc.get("name"),
        "completion_status": status,
        "effective_status": compute_effective_status(status, doc.get("deadline"), now),
        "deadline": doc.get("deadline"),
        "difficulty": doc.get("difficulty"),
        "assignees": _resolve(doc.get("assignees", []), users),
    }


async def populate_task(task: Task, db: AsyncIOMotorDatabase) -> Dict[str, Any]:
    """Task with assignees resolved to {id, username}."""
    users = await _users_by_id(db, task.assignees, USER_NAME_FIELDS)
    data = task.model_dump()
    data["assignees"] = _resolve(task.assignees, users)
    data["effective_status"] = task.effective_status()
    return data


async def populate_project(project: Project, db: AsyncIOMotorDatabase) -> Dict[str, Any]:
    """Project with its tasks and their assignees resolved."""
    task_docs = await TaskRepository(db).find_raw_by_ids(project.tasks, TASK_SUMMARY_FIELDS)
    users = await _users_by_id(
        db,
        (uid for doc in task_docs for uid in doc.get("assignees", [])),
        USER_NAME_FIELDS,
    )
    now = datetime.now(timezone.utc)
    tasks_by_id = {doc["_id"]: _task_summary(doc, users, now) for doc in task_docs}

    data = project.model_dump()
    data["tasks"] = [tasks_by_id[t] for t in project.tasks if t in tasks_by_id]
    return data


async def populate_team(team: Team, db: AsyncIOMotorDatabase) -> Dict[str, Any]:
    """
    Team as shown to its members: members, lead, mentor and coordinator
    resolved to {id, username, email, role}; project to {id, name,
    description}.
    """
    users = await _users_by_id(
        db,
        [*team.members, team.team_lead_id, team.mentor_id, team.coordinator_id],
        USER_CONTACT_FIELDS,
    )
    project = None
    if team.project_id:
        project = await ProjectRepository(db).get_raw_by_id(
            team.project_id, {"_id": 1, "name": 1, "description": 1}
        )

    data = team.model_dump()
    data["members"] = _resolve(team.members, users)
    data["team_lead"] = users.get(team.team_lead_id)
    data["mentor"] = users.get(team.mentor_id) if team.mentor_id else None
    data["coordinator"] = users.get(team.coordinator_id) if team.coordinator_id else None
    data["project"] = _public(project) if project else None
    return data


async def populate_supervised_teams(teams: List[Team], db: AsyncIOMotorDatabase) -> List[Dict[str, Any]]:
    """
    Teams as shown on the mentor/coordinator dashboard.

    Four batched reads regardless of the number of teams: projects, tasks,
    then every user referenced by members, leads and assignees.
    """
    if not teams:
        return []

    project_ids = [t.project_id for t in teams if t.project_id]
    project_docs = await ProjectRepository(db).find_raw_by_ids(project_ids, PROJECT_SUMMARY_FIELDS)
    projects = {doc["_id"]: doc for doc in project_docs}

    task_ids = [tid for doc in project_docs for tid in doc.get("tasks", [])]
    task_docs = await TaskRepository(db).find_raw_by_ids(task_ids, TASK_SUMMARY_FIELDS)

    user_ids = [uid for t in teams for uid in [*t.members, t.team_lead_id]]
    user_ids += [uid for doc in task_docs for uid in doc.get("assignees", [])]
    users = await _users_by_id(db, user_ids, USER_HEALTH_FIELDS)
    # Assignees are rendered with the name view only
    assignee_view = {uid: {"id": u["id"], "username": u.get("username")} for uid, u in users.items()}

    now = datetime.now(timezone.utc)
    tasks = {doc["_id"]: _task_summary(doc, assignee_view, now) for doc in task_docs}

    result = []
    for team in teams:
        data = team.model_dump()
        data["members"] = _resolve(team.members, users)
        data["team_lead"] = users.get(team.team_lead_id)
        project_doc = projects.get(team.project_id) if team.project_id else None
        if project_doc is not None:
            project = _public(project_doc)
            project["tasks"] = [tasks[t] for t in project_doc.get("tasks", []) if t in tasks]
            data["project"] = project
        else:
            data["project"] = None
        result.append(data)
    return result
