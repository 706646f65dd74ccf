"""Translation strings: plain permission checks for every CRUD action."""

from core.domain.policy import EntityPolicy, register
from core.permissions_constants import CRUD_ACTIONS, Entity

from .models import Translation

register(EntityPolicy(
    entity=Entity.TRANSLATION,
    model=Translation,
    actions=CRUD_ACTIONS,
))
