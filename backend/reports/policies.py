from core.domain.policy import EntityPolicy, register
from core.permissions_constants import Entity

from .models import Report, ReportStat, StatCategory, StatCategoryItem

register(EntityPolicy(entity=Entity.STAT_CATEGORY, model=StatCategory))
register(EntityPolicy(entity=Entity.STAT_CATEGORY_ITEM, model=StatCategoryItem))
register(EntityPolicy(entity=Entity.REPORT, model=Report))
register(EntityPolicy(entity=Entity.REPORT_STAT, model=ReportStat))
