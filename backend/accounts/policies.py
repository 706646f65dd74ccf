"""
Policies for the role-gated admin entities (Role, User), Department,
and the model-less Backup capability.
"""

from core.domain.access import has_role, is_reserved_role_name
from core.domain.policy import EntityPolicy, permitted, register
from core.permissions_constants import DESTRUCTIVE_ACTIONS, Action, Entity, RoleName

from .models import Department, Role, User


def _superadmin_on_unreserved_role(actor, role, parent):
    return has_role(actor, RoleName.SUPERADMIN) and not is_reserved_role_name(role.name)


register(EntityPolicy(
    entity=Entity.ROLE,
    model=Role,
    role_gated=True,
    overrides={action: _superadmin_on_unreserved_role for action in DESTRUCTIVE_ACTIONS},
))

register(EntityPolicy(
    entity=Entity.USER,
    model=User,
    role_gated=True,
))

register(EntityPolicy(
    entity=Entity.DEPARTMENT,
    model=Department,
    dependents=("infos",),
))

BACKUP_ACTIONS = frozenset({
    Action.VIEW_ANY,
    Action.VIEW,
    Action.CREATE,
    Action.DOWNLOAD,
    Action.DELETE,
    Action.MANAGE,
})


def _manages_backups(actor, target, parent):
    return permitted(actor, Entity.BACKUP, Action.MANAGE)


# Backups are files, not records: every verb is list-level and hangs off
# the single ``backup.manage`` permission.
register(EntityPolicy(
    entity=Entity.BACKUP,
    actions=BACKUP_ACTIONS,
    resourceless_actions=BACKUP_ACTIONS,
    overrides={action: _manages_backups for action in BACKUP_ACTIONS},
))
