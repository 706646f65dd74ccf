"""
Info policies.

``Info`` does not follow the permission pattern for most actions; its
rules are ownership / assignment based:

    view         creator, assignee, confirmer, or anyone once confirmed
    update       creator, or the assignee when one is set
    confirm      ``info.confirm`` and NOT the creator (no self-confirmation)
    delete       creator
    restore      creator
    forceDelete  nobody

Update / delete / restore / forceDelete on a confirmed Info are refused
by the evaluator's confirmation lock before these rules run.
"""

from access.services import AccessGrantRegistry
from core.domain.access import has_role
from core.domain.policy import EntityPolicy, permitted, register
from core.domain.predicates import actor_id, is_confirmed, is_owned_by
from core.permissions_constants import CRUD_ACTIONS, Action, Entity, RoleName

from .models import Info, InfoCategory, InfoType

# ── Info ────────────────────────────────────────────────────────────


def _is_assignee(info, actor):
    uid = actor_id(actor)
    return uid is not None and info.user_id is not None and info.user_id == uid


def _view_info(actor, info, parent):
    uid = actor_id(actor)
    return (
        is_owned_by(info, actor)
        or _is_assignee(info, actor)
        or (uid is not None and info.confirmed_by_id == uid)
        or is_confirmed(info)
    )


def _update_info(actor, info, parent):
    return is_owned_by(info, actor) or _is_assignee(info, actor)


def _confirm_info(actor, info, parent):
    return (
        permitted(actor, Entity.INFO, Action.CONFIRM)
        and not is_owned_by(info, actor)
        and not is_confirmed(info)
    )


def _creator_only(actor, info, parent):
    return is_owned_by(info, actor)


def _never(actor, info, parent):
    # TODO: confirm with product whether permanent deletion of Info should exist at all.
    return False


register(EntityPolicy(
    entity=Entity.INFO,
    model=Info,
    actions=CRUD_ACTIONS + (Action.CONFIRM,),
    confirmable=True,
    overrides={
        Action.VIEW: _view_info,
        Action.UPDATE: _update_info,
        Action.CONFIRM: _confirm_info,
        Action.DELETE: _creator_only,
        Action.RESTORE: _creator_only,
        Action.FORCE_DELETE: _never,
    },
))


# ── InfoCategory ────────────────────────────────────────────────────


def _delete_info_category(actor, category, parent):
    return (
        permitted(actor, Entity.INFO_CATEGORY, Action.DELETE)
        or has_role(actor, RoleName.ADMIN)
    )


register(EntityPolicy(
    entity=Entity.INFO_CATEGORY,
    model=InfoCategory,
    actions=CRUD_ACTIONS + (Action.CONFIRM,),
    dependents=("infos",),
    overrides={Action.DELETE: _delete_info_category},
))


# ── InfoType ────────────────────────────────────────────────────────


def _view_info_type(actor, info_type, parent):
    return permitted(actor, Entity.INFO_TYPE, Action.VIEW) and (
        is_owned_by(info_type, actor)
        or AccessGrantRegistry.has_access(actor, info_type)
    )


def _print_info_type(actor, info_type, parent):
    return is_owned_by(info_type, actor)


def _owner_or_admin(action):
    def rule(actor, info_type, parent):
        return (
            permitted(actor, Entity.INFO_TYPE, action) and is_owned_by(info_type, actor)
        ) or has_role(actor, RoleName.ADMIN)
    return rule


register(EntityPolicy(
    entity=Entity.INFO_TYPE,
    model=InfoType,
    actions=CRUD_ACTIONS + (Action.CONFIRM, Action.PRINT),
    owner_locked_actions={Action.UPDATE, Action.RESTORE},
    dependents=("infos",),
    overrides={
        Action.VIEW: _view_info_type,
        Action.PRINT: _print_info_type,
        Action.DELETE: _owner_or_admin(Action.DELETE),
        Action.FORCE_DELETE: _owner_or_admin(Action.FORCE_DELETE),
    },
))
