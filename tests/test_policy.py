import pytest

from tests.conftest import caller
from contesthub.services.contest.policy import ContestAction, authorize, is_allowed
from contesthub.utils.errors import Forbidden

OWNER = "owner@example.com"


def contest(status="pending", owner=OWNER):
    return {"creatorEmail": owner, "status": status}


@pytest.mark.parametrize("action, who, status, allowed", [
    (ContestAction.CREATE, caller(OWNER, "creator"), None, True),
    (ContestAction.CREATE, caller(OWNER, "user"), None, False),
    (ContestAction.CREATE, caller(OWNER, "admin"), None, False),
    (ContestAction.EDIT, caller(OWNER, "creator"), "pending", True),
    (ContestAction.EDIT, caller(OWNER, "creator"), "confirmed", False),
    (ContestAction.EDIT, caller("x@example.com", "creator"), "pending", False),
    (ContestAction.EDIT, caller(OWNER, "admin"), "pending", False),
    (ContestAction.UPDATE_FIELDS, caller(OWNER, "creator"), "confirmed", True),
    (ContestAction.UPDATE_FIELDS, caller(OWNER, "creator"), "rejected", True),
    (ContestAction.UPDATE_FIELDS, caller("x@example.com", "creator"), "pending", False),
    (ContestAction.DELETE, caller(OWNER, "creator"), "pending", True),
    (ContestAction.DELETE, caller(OWNER, "creator"), "rejected", False),
    (ContestAction.DELETE, caller("x@example.com", "creator"), "pending", False),
    (ContestAction.DELETE, caller("x@example.com", "admin"), "confirmed", True),
    (ContestAction.DELETE, caller(OWNER, "user"), "pending", False),
    (ContestAction.SET_STATUS, caller("x@example.com", "admin"), "pending", True),
    (ContestAction.SET_STATUS, caller(OWNER, "creator"), "pending", False),
    (ContestAction.DECLARE_WINNER, caller(OWNER, "creator"), "confirmed", True),
    (ContestAction.DECLARE_WINNER, caller("x@example.com", "creator"), "confirmed", False),
    (ContestAction.DECLARE_WINNER, caller(OWNER, "admin"), "confirmed", False),
    (ContestAction.LIST_SUBMISSIONS, caller(OWNER, "creator"), "pending", True),
    (ContestAction.LIST_SUBMISSIONS, caller("x@example.com", "creator"), "pending", False),
])
def test_contest_policy(action, who, status, allowed):
    target = contest(status) if status else None

    assert is_allowed(action, who, target) is allowed


def test_ownership_rules_need_a_contest():
    assert is_allowed(ContestAction.EDIT, caller(OWNER, "creator"), None) is False


def test_authorize_raises_forbidden_with_message():
    with pytest.raises(Forbidden) as exc:
        authorize(ContestAction.SET_STATUS, caller(OWNER, "creator"), message="Admin only")

    assert exc.value.message == "Admin only"
    assert exc.value.status_code == 403
