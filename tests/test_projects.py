import pytest

from mentorhub.core.exceptions import ForbiddenError, InternalError, InvalidInputError, NotFoundError
from mentorhub.persistence import Entity
from mentorhub.services import feedback, projects, tasks
from mentorhub.services.members import add_member, remove_member


def _counts(store, project_id):
    return {
        "members": store.count(Entity.PROJECT_MEMBER, {"project_id": project_id}),
        "tasks": store.count(Entity.TASK, {"project_id": project_id}),
        "feedback": store.count(Entity.PEER_FEEDBACK, {"project_id": project_id}),
        "project": store.count(Entity.PROJECT, {"id": project_id}),
    }


def _populate(store, owner, member, project_id):
    """Three tasks and four feedback rows between the two members."""
    for title in ("Design", "Build", "Ship"):
        tasks.create_task(store, owner, {"title": title, "project_id": project_id})
    ratings = [(member, owner, 5), (member, owner, 4), (owner, member, 3), (owner, member, 5)]
    for sender, recipient, rating in ratings:
        feedback.submit_feedback(
            store, sender, {"project_id": project_id, "to_user_id": recipient.user_id, "rating": rating}
        )


def test_create_project_enrols_owner(store, mentor, as_identity):
    project = projects.create_project(store, as_identity(mentor), {"title": "  Alpha  "})

    assert project.title == "Alpha"
    assert project.mentor_id == mentor.id
    members = store.find(Entity.PROJECT_MEMBER, {"project_id": project.id})
    assert [member.user_id for member in members] == [mentor.id]

    logs = store.find(Entity.ENGAGEMENT_LOG, {"user_id": mentor.id, "action_type": "create-project"})
    assert len(logs) == 1
    assert logs[0].details == "Created project: Alpha"


def test_create_project_requires_mentor_and_title(store, mentor, student, as_identity):
    with pytest.raises(ForbiddenError):
        projects.create_project(store, as_identity(student), {"title": "Mine"})

    with pytest.raises(InvalidInputError):
        projects.create_project(store, as_identity(mentor), {"title": "   "})

    assert store.count(Entity.PROJECT) == 0


def test_create_project_is_atomic(store, mentor, as_identity, monkeypatch):
    original_create = store.create

    def failing_create(entity, data):
        if entity is Entity.PROJECT_MEMBER:
            raise InternalError("Database write failed")
        return original_create(entity, data)

    monkeypatch.setattr(store, "create", failing_create)

    with pytest.raises(InternalError):
        projects.create_project(store, as_identity(mentor), {"title": "Alpha"})

    assert store.count(Entity.PROJECT) == 0
    assert store.count(Entity.PROJECT_MEMBER) == 0


def test_get_project_only_for_owner_or_members(store, project, mentor, other_mentor, student, as_identity):
    assert projects.get_project(store, as_identity(mentor), project.id).id == project.id

    with pytest.raises(ForbiddenError):
        projects.get_project(store, as_identity(other_mentor), project.id)
    with pytest.raises(ForbiddenError):
        projects.get_project(store, as_identity(student), project.id)

    add_member(store, as_identity(mentor), project.id, student.id)
    assert projects.get_project(store, as_identity(student), project.id).id == project.id


def test_get_missing_project(store, mentor, as_identity):
    with pytest.raises(NotFoundError):
        projects.get_project(store, as_identity(mentor), "missing")


def test_list_projects_is_filtered_by_membership(store, mentor, other_mentor, student, as_identity):
    owner = as_identity(mentor)
    alpha = projects.create_project(store, owner, {"title": "Alpha"})
    beta = projects.create_project(store, owner, {"title": "Beta"})
    gamma = projects.create_project(store, owner, {"title": "Gamma"})
    projects.create_project(store, as_identity(other_mentor), {"title": "Elsewhere"})
    add_member(store, owner, alpha.id, student.id)
    add_member(store, owner, beta.id, student.id)

    listed = projects.list_projects(store, as_identity(student))
    assert {p.id for p in listed} == {alpha.id, beta.id}

    # Membership changes on another project leave the result alone
    add_member(store, owner, gamma.id, student.id)
    remove_member(store, owner, gamma.id, student.id)
    assert {p.id for p in projects.list_projects(store, as_identity(student))} == {alpha.id, beta.id}

    assert {p.title for p in projects.list_projects(store, as_identity(mentor))} == {"Alpha", "Beta", "Gamma"}


def test_update_project(store, project, mentor, other_mentor, as_identity):
    updated = projects.update_project(store, as_identity(mentor), project.id, {"title": "Alpha v2"})
    assert updated.title == "Alpha v2"

    with pytest.raises(ForbiddenError):
        projects.update_project(store, as_identity(other_mentor), project.id, {"title": "Taken"})
    with pytest.raises(InvalidInputError):
        projects.update_project(store, as_identity(mentor), project.id, {"title": ""})


def test_list_members_includes_user_details(store, project, mentor, student, as_identity):
    add_member(store, as_identity(mentor), project.id, student.id)

    members = projects.list_members(store, as_identity(student), project.id)

    assert {m.user.name for m in members} == {"Mona", "Sam"}
    assert {m.user.email for m in members} == {"mona@example.com", "sam@example.com"}


def test_delete_project_cascades(store, project, mentor, student, as_identity):
    owner = as_identity(mentor)
    add_member(store, owner, project.id, student.id)
    _populate(store, owner, as_identity(student), project.id)
    assert _counts(store, project.id) == {"members": 2, "tasks": 3, "feedback": 4, "project": 1}

    projects.delete_project(store, owner, project.id)

    assert _counts(store, project.id) == {"members": 0, "tasks": 0, "feedback": 0, "project": 0}
    assert store.exists(Entity.ENGAGEMENT_LOG, {"user_id": mentor.id, "action_type": "project-deleted"})


def test_delete_project_rolls_back_when_a_delete_fails(store, project, mentor, student, as_identity, monkeypatch):
    owner = as_identity(mentor)
    add_member(store, owner, project.id, student.id)
    _populate(store, owner, as_identity(student), project.id)
    original_delete = store.delete

    def failing_delete(entity, filters):
        if entity is Entity.TASK:
            raise InternalError("Database write failed")
        return original_delete(entity, filters)

    monkeypatch.setattr(store, "delete", failing_delete)

    with pytest.raises(InternalError):
        projects.delete_project(store, owner, project.id)

    assert _counts(store, project.id) == {"members": 2, "tasks": 3, "feedback": 4, "project": 1}
    assert not store.exists(Entity.ENGAGEMENT_LOG, {"action_type": "project-deleted"})


def test_delete_project_requires_owner(store, project, other_mentor, student, as_identity):
    with pytest.raises(ForbiddenError):
        projects.delete_project(store, as_identity(other_mentor), project.id)
    with pytest.raises(ForbiddenError):
        projects.delete_project(store, as_identity(student), project.id)
    assert store.exists(Entity.PROJECT, {"id": project.id})
