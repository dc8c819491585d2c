"""
Contest access policy.

Each contest action maps to the rules that may allow it. A rule names the
roles it applies to and, optionally, a predicate over the loaded contest
document. An action is allowed when any of its rules accepts the caller.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, FrozenSet, List, Optional

from contesthub.models.auth.token import TokenData
from contesthub.models.auth.user import Role
from contesthub.models.contest.contest import ContestStatus
from contesthub.utils.errors import Forbidden


class ContestAction(str, Enum):
    CREATE = "create"
    EDIT = "edit"
    UPDATE_FIELDS = "update_fields"
    DELETE = "delete"
    SET_STATUS = "set_status"
    DECLARE_WINNER = "declare_winner"
    LIST_SUBMISSIONS = "list_submissions"


def owns(caller: TokenData, contest: Dict) -> bool:
    return contest.get("creatorEmail") == caller.email


def owns_pending(caller: TokenData, contest: Dict) -> bool:
    return owns(caller, contest) and contest.get("status") == ContestStatus.PENDING.value


@dataclass(frozen=True)
class Rule:
    roles: FrozenSet[Role]
    check: Optional[Callable[[TokenData, Dict], bool]] = None
    
    def allows(self, caller: TokenData, contest: Optional[Dict]) -> bool:
        if caller.role not in self.roles:
            return False
        if self.check is None:
            return True
        return contest is not None and self.check(caller, contest)


ADMIN_ONLY = frozenset({Role.ADMIN})
CREATOR_ONLY = frozenset({Role.CREATOR})

CONTEST_POLICY: Dict[ContestAction, List[Rule]] = {
    ContestAction.CREATE: [Rule(CREATOR_ONLY)],
    ContestAction.EDIT: [Rule(CREATOR_ONLY, owns_pending)],
    ContestAction.UPDATE_FIELDS: [Rule(CREATOR_ONLY, owns)],
    ContestAction.DELETE: [Rule(ADMIN_ONLY), Rule(CREATOR_ONLY, owns_pending)],
    ContestAction.SET_STATUS: [Rule(ADMIN_ONLY)],
    ContestAction.DECLARE_WINNER: [Rule(CREATOR_ONLY, owns)],
    ContestAction.LIST_SUBMISSIONS: [Rule(CREATOR_ONLY, owns)],
}


def is_allowed(action: ContestAction, caller: TokenData, contest: Optional[Dict] = None) -> bool:
    return any(rule.allows(caller, contest) for rule in CONTEST_POLICY[action])


def authorize(
    action: ContestAction,
    caller: TokenData,
    contest: Optional[Dict] = None,
    message: str = "Not allowed"
):
    """Raise Forbidden unless the caller may perform `action` on `contest`"""
    if not is_allowed(action, caller, contest):
        raise Forbidden(message)
