import pytest

from mentorhub.core.exceptions import ForbiddenError, InvalidInputError, NotFoundError
from mentorhub.models.task import TaskStatus
from mentorhub.persistence import Entity
from mentorhub.services import projects, tasks
from mentorhub.services.members import add_member


@pytest.fixture
def assigned_task(store, team, mentor, student, as_identity):
    return tasks.create_task(
        store, as_identity(mentor), {"title": "Write tests", "project_id": team.id, "assigned_to_id": student.id}
    )


def test_assignee_updates_status_but_cannot_reassign(store, assigned_task, student, student2, as_identity):
    assert assigned_task.status == TaskStatus.TODO

    done = tasks.update_task(store, as_identity(student), assigned_task.id, {"status": "DONE"})
    assert done.status == TaskStatus.DONE

    with pytest.raises(ForbiddenError) as exc:
        tasks.update_task(store, as_identity(student), assigned_task.id, {"assigned_to_id": student2.id})
    assert exc.value.detail == "Only mentors can reassign tasks"
    assert store.get(Entity.TASK, assigned_task.id).assigned_to_id == student.id


def test_student_patch_is_limited_to_status(store, assigned_task, student, student2, as_identity):
    with pytest.raises(ForbiddenError):
        tasks.update_task(store, as_identity(student), assigned_task.id, {"title": "Renamed"})
    with pytest.raises(ForbiddenError):
        tasks.update_task(store, as_identity(student2), assigned_task.id, {"status": "DONE"})
    assert store.get(Entity.TASK, assigned_task.id).title == "Write tests"


def test_status_may_move_backwards(store, assigned_task, mentor, as_identity):
    tasks.update_task(store, as_identity(mentor), assigned_task.id, {"status": "DONE"})
    reopened = tasks.update_task(store, as_identity(mentor), assigned_task.id, {"status": "TODO"})
    assert reopened.status == TaskStatus.TODO


def test_invalid_patches(store, assigned_task, mentor, as_identity):
    with pytest.raises(InvalidInputError):
        tasks.update_task(store, as_identity(mentor), assigned_task.id, {"status": "BLOCKED"})
    with pytest.raises(InvalidInputError):
        tasks.update_task(store, as_identity(mentor), assigned_task.id, {"status": None})
    with pytest.raises(InvalidInputError):
        tasks.update_task(store, as_identity(mentor), assigned_task.id, {})
    with pytest.raises(NotFoundError):
        tasks.update_task(store, as_identity(mentor), "missing", {"status": "DONE"})


def test_create_task_requires_member_assignee(store, project, mentor, student, as_identity):
    owner = as_identity(mentor)

    with pytest.raises(InvalidInputError) as exc:
        tasks.create_task(store, owner, {"title": "T", "project_id": project.id, "assigned_to_id": student.id})
    assert "Sam" in exc.value.detail
    with pytest.raises(NotFoundError):
        tasks.create_task(store, owner, {"title": "T", "project_id": project.id, "assigned_to_id": "ghost"})
    assert store.count(Entity.TASK) == 0

    unassigned = tasks.create_task(store, owner, {"title": "T", "project_id": project.id})
    assert unassigned.assigned_to_id is None


def test_create_task_rejections(store, project, mentor, other_mentor, student, as_identity):
    add_member(store, as_identity(mentor), project.id, student.id)

    with pytest.raises(ForbiddenError):
        tasks.create_task(store, as_identity(student), {"title": "T", "project_id": project.id})
    with pytest.raises(ForbiddenError):
        tasks.create_task(store, as_identity(other_mentor), {"title": "T", "project_id": project.id})
    with pytest.raises(InvalidInputError):
        tasks.create_task(store, as_identity(mentor), {"title": " ", "project_id": project.id})
    with pytest.raises(NotFoundError):
        tasks.create_task(store, as_identity(mentor), {"title": "T", "project_id": "missing"})


def test_mentor_reassignment_checks_membership(store, assigned_task, mentor, student2, outsider, as_identity):
    owner = as_identity(mentor)

    moved = tasks.update_task(store, owner, assigned_task.id, {"assigned_to_id": student2.id})
    assert moved.assigned_to_id == student2.id

    with pytest.raises(InvalidInputError):
        tasks.update_task(store, owner, assigned_task.id, {"assigned_to_id": outsider.id})

    cleared = tasks.update_task(store, owner, assigned_task.id, {"assigned_to_id": None})
    assert cleared.assigned_to_id is None


def test_assignees_are_always_members(store, assigned_task, team, mentor, as_identity):
    for task in store.find(Entity.TASK):
        if task.assigned_to_id is not None:
            assert store.exists(Entity.PROJECT_MEMBER, {"user_id": task.assigned_to_id, "project_id": task.project_id})


def test_get_task_visibility(store, assigned_task, mentor, other_mentor, student, student2, as_identity):
    assert tasks.get_task(store, as_identity(mentor), assigned_task.id).id == assigned_task.id
    assert tasks.get_task(store, as_identity(student), assigned_task.id).id == assigned_task.id

    with pytest.raises(ForbiddenError):
        tasks.get_task(store, as_identity(student2), assigned_task.id)
    with pytest.raises(ForbiddenError):
        tasks.get_task(store, as_identity(other_mentor), assigned_task.id)


def test_list_tasks(store, team, mentor, student, student2, as_identity):
    owner = as_identity(mentor)
    tasks.create_task(store, owner, {"title": "Mine", "project_id": team.id, "assigned_to_id": student.id})
    tasks.create_task(store, owner, {"title": "Theirs", "project_id": team.id, "assigned_to_id": student2.id})
    tasks.create_task(store, owner, {"title": "Nobody", "project_id": team.id})

    assert {t.title for t in tasks.list_tasks(store, owner, team.id)} == {"Mine", "Theirs", "Nobody"}
    assert [t.title for t in tasks.list_tasks(store, as_identity(student))] == ["Mine"]
    assert [t.title for t in tasks.list_tasks(store, as_identity(student), team.id)] == ["Mine"]

    with pytest.raises(InvalidInputError):
        tasks.list_tasks(store, owner)


def test_list_tasks_of_foreign_project(store, team, other_mentor, as_identity):
    other_project = projects.create_project(store, as_identity(other_mentor), {"title": "Other"})
    assert tasks.list_tasks(store, as_identity(other_mentor), other_project.id) == []

    with pytest.raises(ForbiddenError):
        tasks.list_tasks(store, as_identity(other_mentor), team.id)


def test_delete_task(store, assigned_task, mentor, student, as_identity):
    with pytest.raises(ForbiddenError):
        tasks.delete_task(store, as_identity(student), assigned_task.id)

    tasks.delete_task(store, as_identity(mentor), assigned_task.id)
    assert store.get(Entity.TASK, assigned_task.id) is None
