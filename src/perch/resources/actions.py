"""The fixed action set and its HTTP verb table.

Declaration order of :class:`Action` is the registration order, so the
emitted route table is the same whatever order a controller lists its
handlers in. ``new`` precedes ``show`` so that ``/photos/new`` is
matched before ``/photos/:photo``.
"""

from enum import StrEnum
from types import MappingProxyType

from perch.routing.route import ANY_METHOD


class Action(StrEnum):
    ALL = "all"
    INDEX = "index"
    NEW = "new"
    CREATE = "create"
    SHOW = "show"
    EDIT = "edit"
    UPDATE = "update"
    DESTROY = "destroy"


VERBS: MappingProxyType[Action, str] = MappingProxyType(
    {
        Action.ALL: ANY_METHOD,
        Action.INDEX: "GET",
        Action.NEW: "GET",
        Action.CREATE: "POST",
        Action.SHOW: "GET",
        Action.EDIT: "GET",
        Action.UPDATE: "PUT",
        Action.DESTROY: "DELETE",
    }
)

# Actions whose path carries the member id segment
MEMBER_ACTIONS = frozenset({Action.ALL, Action.SHOW, Action.EDIT, Action.UPDATE, Action.DESTROY})

# Actions that append their own name as a literal segment
FORM_ACTIONS = frozenset({Action.NEW, Action.EDIT})

# Keys a controller may use to override the derived resource settings
OVERRIDE_KEYS = frozenset({"name", "id", "root"})


def parse_action(key: str) -> Action | None:
    """Return the Action named by *key*, or ``None`` for any other key."""
    try:
        return Action(key)
    except ValueError:
        return None
