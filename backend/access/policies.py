from core.domain.access import has_role
from core.domain.policy import EntityPolicy, register
from core.permissions_constants import CRUD_ACTIONS, Entity, RoleName

from .models import AccessGrant


def _superadmin(actor, grant, parent):
    return has_role(actor, RoleName.SUPERADMIN)


# Grant management is reserved to superadmins, whatever the action.
register(EntityPolicy(
    entity=Entity.ACCESS_GRANT,
    model=AccessGrant,
    role_gated=True,
    overrides={action: _superadmin for action in CRUD_ACTIONS},
))
