from core.domain.policy import EntityPolicy, register
from core.permissions_constants import Entity

from .models import Criminal

register(EntityPolicy(entity=Entity.CRIMINAL, model=Criminal))
