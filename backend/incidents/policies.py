"""
Incident policies.

Incident reports are doubly gated: the ``incident_report.*`` permission
AND an incident-report capability (admin role or an effective access
grant, see ``access.services.IncidentReportAccess``).  The two checks
are combined with AND, never OR.
"""

from access.services import IncidentReportAccess
from core.domain.policy import EntityPolicy, permitted, register
from core.domain.predicates import is_owned_by
from core.permissions_constants import CRUD_ACTIONS, Action, Entity

from .models import Incident, IncidentCategory, IncidentReport


def _view_any_reports(actor, target, parent):
    return (
        permitted(actor, Entity.INCIDENT_REPORT, Action.VIEW_ANY)
        and IncidentReportAccess.can_view_incident_reports(actor)
    )


def _view_report(actor, report, parent):
    return (
        permitted(actor, Entity.INCIDENT_REPORT, Action.VIEW)
        and IncidentReportAccess.can_view_incident_report(actor, report)
    )


def _report_incidents(actor, report, parent):
    return (
        permitted(actor, Entity.INCIDENT_REPORT, Action.VIEW)
        and IncidentReportAccess.can_access_incidents_for_report(actor, report)
    )


def _confirm_incident(actor, incident, parent):
    return (
        permitted(actor, Entity.INCIDENT, Action.CONFIRM)
        and is_owned_by(incident.report, actor)
    )


register(EntityPolicy(entity=Entity.INCIDENT_CATEGORY, model=IncidentCategory))

register(EntityPolicy(
    entity=Entity.INCIDENT_REPORT,
    model=IncidentReport,
    actions=CRUD_ACTIONS + (Action.INCIDENTS,),
    owner_locked_actions={
        Action.UPDATE,
        Action.DELETE,
        Action.RESTORE,
        Action.FORCE_DELETE,
    },
    overrides={
        Action.VIEW_ANY: _view_any_reports,
        Action.VIEW: _view_report,
        Action.INCIDENTS: _report_incidents,
    },
))

register(EntityPolicy(
    entity=Entity.INCIDENT,
    model=Incident,
    actions=CRUD_ACTIONS + (Action.CONFIRM,),
    overrides={Action.CONFIRM: _confirm_incident},
))
