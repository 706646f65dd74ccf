from core.domain.policy import EntityPolicy, register
from core.permissions_constants import Entity

from .models import District, Province

register(EntityPolicy(entity=Entity.PROVINCE, model=Province))
register(EntityPolicy(entity=Entity.DISTRICT, model=District))
