"""
National Insight Center policies.

Parent record (``NationalInsightCenterInfo``)
---------------------------------------------
    view         permission AND (creator OR effective access grant)
    update / delete / restore / forceDelete
                 permission AND creator AND not confirmed
    confirm      permission AND creator AND not yet confirmed
    print        creator OR permission (no grant check)
    printDates   list level: permission
                 record level: permission AND (creator OR grant)

Child item (``NationalInsightCenterInfoItem``)
----------------------------------------------
"Parent access" means: creator of the parent, or an effective grant on
the parent.  A confirmed parent refuses every write to its items,
including ``create`` and ``confirm``.

    view         permission AND (creator OR parent access)
    create       parent open AND (no parent OR parent access) AND permission
    update / confirm / delete / restore / forceDelete
                 parent open AND item open AND permission
                 AND (creator OR parent access)
    updateStats  parent open AND ``…item.update`` AND (creator OR parent access)

``updateStats`` intentionally ignores the item's own ``confirmed`` flag:
statistics may still be attached to a confirmed item while its parent
record is open.
"""

from access.services import AccessGrantRegistry
from core.domain.policy import EntityPolicy, permitted, register
from core.domain.predicates import is_confirmed, is_owned_by, parent_blocks_write
from core.permissions_constants import CRUD_ACTIONS, Action, Entity

from .models import NationalInsightCenterInfo, NationalInsightCenterInfoItem

INFO = Entity.NATIONAL_INSIGHT_CENTER_INFO
ITEM = Entity.NATIONAL_INSIGHT_CENTER_INFO_ITEM


def has_record_access(actor, info):
    """Creator of ``info`` or holder of an effective grant on it."""
    return is_owned_by(info, actor) or AccessGrantRegistry.has_access(actor, info)


# ── Parent record ───────────────────────────────────────────────────


def _view_info(actor, info, parent):
    return permitted(actor, INFO, Action.VIEW) and has_record_access(actor, info)


def _confirm_info(actor, info, parent):
    return (
        permitted(actor, INFO, Action.CONFIRM)
        and is_owned_by(info, actor)
        and not is_confirmed(info)
    )


def _print_info(actor, info, parent):
    return is_owned_by(info, actor) or permitted(actor, INFO, Action.PRINT)


def _print_dates(actor, info, parent):
    if not permitted(actor, INFO, Action.PRINT_DATES):
        return False
    if info is None:
        return True
    return has_record_access(actor, info)


register(EntityPolicy(
    entity=INFO,
    model=NationalInsightCenterInfo,
    actions=CRUD_ACTIONS + (Action.CONFIRM, Action.PRINT, Action.PRINT_DATES),
    optional_resource_actions={Action.PRINT_DATES},
    owner_locked_actions={
        Action.UPDATE,
        Action.DELETE,
        Action.RESTORE,
        Action.FORCE_DELETE,
    },
    confirmable=True,
    overrides={
        Action.VIEW: _view_info,
        Action.CONFIRM: _confirm_info,
        Action.PRINT: _print_info,
        Action.PRINT_DATES: _print_dates,
    },
))


# ── Child item ──────────────────────────────────────────────────────


def _item_access(actor, item):
    return is_owned_by(item, actor) or has_record_access(actor, item.info)


def _view_item(actor, item, parent):
    return permitted(actor, ITEM, Action.VIEW) and _item_access(actor, item)


def _create_item(actor, item, parent):
    if parent is not None:
        if not isinstance(parent, NationalInsightCenterInfo):
            return False
        if is_confirmed(parent) or not has_record_access(actor, parent):
            return False
    return permitted(actor, ITEM, Action.CREATE)


def _write_item(action):
    def rule(actor, item, parent):
        if parent_blocks_write(item) or is_confirmed(item):
            return False
        return permitted(actor, ITEM, action) and _item_access(actor, item)
    return rule


def _update_item_stats(actor, item, parent):
    if parent_blocks_write(item):
        return False
    return permitted(actor, ITEM, Action.UPDATE) and _item_access(actor, item)


register(EntityPolicy(
    entity=ITEM,
    model=NationalInsightCenterInfoItem,
    actions=CRUD_ACTIONS + (Action.CONFIRM, Action.UPDATE_STATS),
    confirmable=True,
    overrides={
        Action.VIEW: _view_item,
        Action.CREATE: _create_item,
        Action.UPDATE: _write_item(Action.UPDATE),
        Action.CONFIRM: _write_item(Action.CONFIRM),
        Action.DELETE: _write_item(Action.DELETE),
        Action.RESTORE: _write_item(Action.RESTORE),
        Action.FORCE_DELETE: _write_item(Action.FORCE_DELETE),
        Action.UPDATE_STATS: _update_item_stats,
    },
))
