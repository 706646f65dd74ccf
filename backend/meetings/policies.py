"""
Meeting policies.

Meetings are owner-locked: the ``meeting.*`` permission is necessary but
not sufficient for view / update / delete / restore / forceDelete, which
also require the actor to have created the meeting.  ``join`` is open
to the creator and to listed participants.
"""

from core.domain.policy import EntityPolicy, permitted, register
from core.domain.predicates import is_owned_by
from core.permissions_constants import CRUD_ACTIONS, Action, Entity

from .models import Meeting, MeetingMessage, MeetingSession


def _join(actor, meeting, parent):
    return permitted(actor, Entity.MEETING, Action.JOIN) and (
        is_owned_by(meeting, actor) or meeting.has_participant(actor)
    )


register(EntityPolicy(
    entity=Entity.MEETING,
    model=Meeting,
    actions=CRUD_ACTIONS + (Action.JOIN,),
    owner_locked_actions={
        Action.VIEW,
        Action.UPDATE,
        Action.DELETE,
        Action.RESTORE,
        Action.FORCE_DELETE,
    },
    overrides={Action.JOIN: _join},
))

register(EntityPolicy(entity=Entity.MEETING_SESSION, model=MeetingSession))
register(EntityPolicy(entity=Entity.MEETING_MESSAGE, model=MeetingMessage))
