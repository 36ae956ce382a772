import logging

import pytest

from mentorhub.core.exceptions import InternalError, InvalidInputError, InvalidRoleError
from mentorhub.core.identity import Identity
from mentorhub.models.engagement_log import ActionType
from mentorhub.persistence import Entity
from mentorhub.services.activity import ActivityLog, log_engagement, record_activity
from mentorhub.services.members import add_member


def _fail_log_writes(store, monkeypatch):
    original_create = store.create

    def failing_create(entity, data):
        if entity is Entity.ENGAGEMENT_LOG:
            raise InternalError("Database write failed")
        return original_create(entity, data)

    monkeypatch.setattr(store, "create", failing_create)


def test_record_activity(store, student):
    entry = record_activity(store, student.id, ActionType.LOGIN, "Signed in")

    assert entry.user_id == student.id
    assert entry.action_type == "login"
    assert entry.details == "Signed in"


def test_record_swallows_failures(store, student, monkeypatch, caplog):
    _fail_log_writes(store, monkeypatch)

    with caplog.at_level(logging.ERROR):
        assert ActivityLog(store).record(student.id, ActionType.VIEW_DASHBOARD) is None
    assert "Failed to record view-dashboard activity" in caplog.text


def test_workflow_survives_log_failure(store, project, mentor, student, as_identity, monkeypatch):
    _fail_log_writes(store, monkeypatch)

    member = add_member(store, as_identity(mentor), project.id, student.id)

    assert member.user_id == student.id
    assert store.exists(Entity.PROJECT_MEMBER, {"user_id": student.id, "project_id": project.id})
    assert not store.exists(Entity.ENGAGEMENT_LOG, {"action_type": "member-added"})


def test_log_engagement(store, student, as_identity):
    entry = log_engagement(store, as_identity(student), {"action_type": "view-dashboard", "details": "home"})

    assert entry.user_id == student.id
    assert entry.action_type == "view-dashboard"
    assert store.count(Entity.ENGAGEMENT_LOG, {"user_id": student.id}) == 1


def test_log_engagement_rejections(store, student, as_identity):
    with pytest.raises(InvalidInputError):
        log_engagement(store, as_identity(student), {"action_type": "dance"})
    with pytest.raises(InvalidRoleError):
        log_engagement(store, Identity(user_id=student.id, role="ADMIN"), {"action_type": "login"})
    assert store.count(Entity.ENGAGEMENT_LOG) == 0


def test_record_accepts_plain_action_names(store, student, monkeypatch, caplog):
    entry = record_activity(store, student.id, "login")
    assert entry.action_type == "login"

    _fail_log_writes(store, monkeypatch)
    with caplog.at_level(logging.ERROR):
        assert record_activity(store, student.id, "view-dashboard") is None
    assert "Failed to record view-dashboard activity" in caplog.text
