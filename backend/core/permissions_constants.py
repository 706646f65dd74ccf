"""
Permissions Constants — **Single Source of Truth**

Every permission referenced in code (policies, ``setup_rbac``, model
``Meta.permissions``) MUST be built from the catalogue defined here.

Organisation
------------
- ``Entity`` enumerates every resource kind the policy layer knows about.
- ``Action`` enumerates every verb a policy can be asked about.  Members
  carry the camelCase action name used by callers (``viewAny``) and
  expose the snake-case ``codename`` used in permission strings
  (``view_any``).
- ``Ability`` is an ``(entity, action)`` pair.  Its ``codename`` is the
  dotted ``"<entity>.<action>"`` permission name stored in Django's
  ``auth_permission.codename`` column (e.g. ``criminal.view_any``).
- ``PERMISSION_CATALOGUE`` lists, per entity, the actions that are backed
  by a permission row.  Role-gated entities (``role``, ``user``,
  ``access_grant``) have no permission rows at all.

Adding a new permission requires:
    1. Add the action to the entity's tuple in ``PERMISSION_CATALOGUE``.
    2. Run ``makemigrations`` + ``migrate`` (the owning model's
       ``Meta.permissions`` is generated from this catalogue).
    3. Add the ability to the appropriate role lists in ``setup_rbac``.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, NamedTuple


class Entity(str, Enum):
    """Resource kinds known to the policy evaluator."""

    ACCESS_GRANT = "access_grant"
    BACKUP = "backup"
    CRIMINAL = "criminal"
    DEPARTMENT = "department"
    DISTRICT = "district"
    INCIDENT = "incident"
    INCIDENT_CATEGORY = "incident_category"
    INCIDENT_REPORT = "incident_report"
    INFO = "info"
    INFO_CATEGORY = "info_category"
    INFO_TYPE = "info_type"
    MEETING = "meeting"
    MEETING_MESSAGE = "meeting_message"
    MEETING_SESSION = "meeting_session"
    NATIONAL_INSIGHT_CENTER_INFO = "national_insight_center_info"
    NATIONAL_INSIGHT_CENTER_INFO_ITEM = "national_insight_center_info_item"
    PROVINCE = "province"
    REPORT = "report"
    REPORT_STAT = "report_stat"
    ROLE = "role"
    STAT_CATEGORY = "stat_category"
    STAT_CATEGORY_ITEM = "stat_category_item"
    TRANSLATION = "translation"
    USER = "user"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")

    @classmethod
    def parse(cls, value: Any) -> Entity | None:
        """Return the member for ``value`` or ``None`` if it is unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class Action(str, Enum):
    """Verbs a policy can decide on."""

    VIEW_ANY = "viewAny"
    VIEW = "view"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    RESTORE = "restore"
    FORCE_DELETE = "forceDelete"
    CONFIRM = "confirm"
    PRINT = "print"
    PRINT_DATES = "printDates"
    UPDATE_STATS = "updateStats"
    MANAGE = "manage"
    DOWNLOAD = "download"
    JOIN = "join"
    INCIDENTS = "incidents"

    @property
    def codename(self) -> str:
        """Snake-case form used inside permission names."""
        return re.sub(r"(?<!^)(?=[A-Z])", "_", self.value).lower()

    @classmethod
    def parse(cls, value: Any) -> Action | None:
        """
        Accept an ``Action`` member, its camelCase value (``forceDelete``)
        or its snake-case codename (``force_delete``).  Anything else
        resolves to ``None``.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        for member in cls:
            if value == member.value or value == member.codename:
                return member
        return None


class Ability(NamedTuple):
    """A single ``(entity, action)`` capability."""

    entity: Entity
    action: Action

    @property
    def codename(self) -> str:
        return f"{self.entity.value}.{self.action.codename}"

    @property
    def description(self) -> str:
        return f"Can {self.action.codename.replace('_', ' ')} {self.entity.label}"

    def __str__(self) -> str:
        return self.codename


class RoleName:
    """Reserved role names."""

    USER = "user"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"

    RESERVED = frozenset({ADMIN, SUPERADMIN})


# ════════════════════════════════════════════════════════════════════
#  Action groups
# ════════════════════════════════════════════════════════════════════

CRUD_ACTIONS: tuple[Action, ...] = (
    Action.VIEW_ANY,
    Action.VIEW,
    Action.CREATE,
    Action.UPDATE,
    Action.DELETE,
    Action.RESTORE,
    Action.FORCE_DELETE,
)

# Actions frozen by a confirmation lock.
LOCKED_ACTIONS = frozenset({
    Action.UPDATE,
    Action.DELETE,
    Action.RESTORE,
    Action.FORCE_DELETE,
})

# Actions that only a superadmin may perform on role-gated entities.
DESTRUCTIVE_ACTIONS = frozenset({
    Action.DELETE,
    Action.RESTORE,
    Action.FORCE_DELETE,
})


# ════════════════════════════════════════════════════════════════════
#  Permission catalogue
# ════════════════════════════════════════════════════════════════════

PERMISSION_CATALOGUE: dict[Entity, tuple[Action, ...]] = {
    Entity.BACKUP: (Action.MANAGE,),
    Entity.CRIMINAL: CRUD_ACTIONS,
    Entity.DEPARTMENT: CRUD_ACTIONS,
    Entity.DISTRICT: CRUD_ACTIONS,
    Entity.INCIDENT: CRUD_ACTIONS + (Action.CONFIRM,),
    Entity.INCIDENT_CATEGORY: CRUD_ACTIONS,
    Entity.INCIDENT_REPORT: CRUD_ACTIONS,
    Entity.INFO: CRUD_ACTIONS + (Action.CONFIRM,),
    Entity.INFO_CATEGORY: CRUD_ACTIONS + (Action.CONFIRM,),
    Entity.INFO_TYPE: CRUD_ACTIONS + (Action.CONFIRM,),
    Entity.MEETING: CRUD_ACTIONS + (Action.JOIN,),
    Entity.MEETING_MESSAGE: CRUD_ACTIONS,
    Entity.MEETING_SESSION: CRUD_ACTIONS,
    Entity.NATIONAL_INSIGHT_CENTER_INFO: CRUD_ACTIONS + (
        Action.CONFIRM,
        Action.PRINT,
        Action.PRINT_DATES,
    ),
    Entity.NATIONAL_INSIGHT_CENTER_INFO_ITEM: CRUD_ACTIONS + (Action.CONFIRM,),
    Entity.PROVINCE: CRUD_ACTIONS,
    Entity.REPORT: CRUD_ACTIONS,
    Entity.REPORT_STAT: CRUD_ACTIONS,
    Entity.STAT_CATEGORY: CRUD_ACTIONS,
    Entity.STAT_CATEGORY_ITEM: CRUD_ACTIONS,
    Entity.TRANSLATION: CRUD_ACTIONS,
}


def abilities_for(entity: Entity) -> list[Ability]:
    """Every catalogued ability of ``entity`` (empty for role-gated ones)."""
    return [Ability(entity, action) for action in PERMISSION_CATALOGUE.get(entity, ())]


def permission_choices(*entities: Entity) -> list[tuple[str, str]]:
    """``Meta.permissions`` entries for the given entities."""
    return [
        (ability.codename, ability.description)
        for entity in entities
        for ability in abilities_for(entity)
    ]


def all_abilities() -> list[Ability]:
    return [ability for entity in PERMISSION_CATALOGUE for ability in abilities_for(entity)]


def is_catalogued(codename: str) -> bool:
    return any(ability.codename == codename for ability in all_abilities())
