"""
Behavioural guarantees of the decision layer.

Each test pins one rule that must hold across every entity it applies
to: confirmation locks, parent locks on insight items, statistics on
confirmed items, no self-confirmation, role deletion, dependents locks,
expired grants, the incident-report AND gate, and the grant / revoke
round trip.
"""

from __future__ import annotations

from datetime import timedelta

from django.test import TestCase
from django.utils import timezone

from access.models import AccessGrant, AccessType
from access.services import AccessGrantRegistry
from accounts.models import Department, Role
from core.domain.policy import decide
from core.permissions_constants import Entity
from insights.models import NationalInsightCenterInfoItem

from .factories import (
    make_incident_report,
    make_info,
    make_insight,
    make_insight_item,
    make_user,
)

INSIGHT_PERMISSIONS = [
    "national_insight_center_info.view",
    "national_insight_center_info.update",
    "national_insight_center_info.delete",
    "national_insight_center_info.restore",
    "national_insight_center_info.force_delete",
    "national_insight_center_info.confirm",
    "national_insight_center_info_item.view",
    "national_insight_center_info_item.create",
    "national_insight_center_info_item.update",
    "national_insight_center_info_item.delete",
    "national_insight_center_info_item.restore",
    "national_insight_center_info_item.force_delete",
    "national_insight_center_info_item.confirm",
]


class TestConfirmationLock(TestCase):
    """Confirmed records refuse update and delete, even for their creator."""

    @classmethod
    def setUpTestData(cls):
        cls.owner = make_user(username="lock_owner", permissions=INSIGHT_PERMISSIONS)

    def test_insight_record(self):
        open_record = make_insight(self.owner)
        confirmed = make_insight(self.owner, confirmed=True)
        for action in ("update", "delete", "restore", "forceDelete"):
            self.assertTrue(decide(self.owner, action, open_record), action)
            self.assertFalse(decide(self.owner, action, confirmed), action)

    def test_insight_item(self):
        parent = make_insight(self.owner)
        item = make_insight_item(parent, self.owner)
        confirmed_item = make_insight_item(parent, self.owner, confirmed=True)
        for action in ("update", "delete"):
            self.assertTrue(decide(self.owner, action, item), action)
            self.assertFalse(decide(self.owner, action, confirmed_item), action)

    def test_info(self):
        info = make_info(self.owner)
        confirmed = make_info(self.owner, confirmed=True)
        for action in ("update", "delete"):
            self.assertTrue(decide(self.owner, action, info), action)
            self.assertFalse(decide(self.owner, action, confirmed), action)


class TestParentLock(TestCase):
    """A confirmed insight record freezes every write to its items."""

    @classmethod
    def setUpTestData(cls):
        cls.owner = make_user(username="parent_owner", permissions=INSIGHT_PERMISSIONS)
        cls.parent = make_insight(cls.owner, confirmed=True)
        cls.item = make_insight_item(cls.parent, cls.owner)

    def test_create_is_refused(self):
        self.assertFalse(
            decide(self.owner, "create", NationalInsightCenterInfoItem, parent=self.parent)
        )
        open_parent = make_insight(self.owner)
        self.assertTrue(
            decide(self.owner, "create", NationalInsightCenterInfoItem, parent=open_parent)
        )

    def test_writes_are_refused(self):
        for action in ("update", "delete", "restore", "forceDelete", "confirm", "updateStats"):
            self.assertFalse(decide(self.owner, action, self.item), action)

    def test_view_is_still_allowed(self):
        self.assertTrue(decide(self.owner, "view", self.item))


class TestStatsOnConfirmedItem(TestCase):
    """Statistics may be attached to a confirmed item while its parent is open."""

    @classmethod
    def setUpTestData(cls):
        cls.owner = make_user(username="stats_owner", permissions=INSIGHT_PERMISSIONS)
        cls.other = make_user(username="stats_other", permissions=INSIGHT_PERMISSIONS)
        cls.parent = make_insight(cls.owner)
        cls.item = make_insight_item(cls.parent, cls.owner, confirmed=True)

    def test_creator_may_update_stats(self):
        self.assertTrue(decide(self.owner, "updateStats", self.item))
        self.assertFalse(decide(self.owner, "update", self.item))

    def test_stranger_may_not(self):
        self.assertFalse(decide(self.other, "updateStats", self.item))

    def test_requires_item_update_permission(self):
        bare = make_user(username="stats_bare")
        parent = make_insight(bare)
        item = make_insight_item(parent, bare, confirmed=True)
        self.assertFalse(decide(bare, "updateStats", item))


class TestNoSelfConfirmation(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.author = make_user(username="info_author", permissions=["info.confirm"])
        cls.reviewer = make_user(username="info_reviewer", permissions=["info.confirm"])
        cls.info = make_info(cls.author)

    def test_creator_cannot_confirm_own_info(self):
        self.assertFalse(decide(self.author, "confirm", self.info))

    def test_another_holder_can(self):
        self.assertTrue(decide(self.reviewer, "confirm", self.info))

    def test_already_confirmed_cannot_be_confirmed_again(self):
        info = make_info(self.author, confirmed=True)
        self.assertFalse(decide(self.reviewer, "confirm", info))


class TestRoleDeletion(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.superadmin = make_user(username="role_super", roles=["superadmin"])
        cls.admin = make_user(username="role_admin", roles=["admin"])
        cls.custom = Role.objects.create(name="auditor")

    def test_only_superadmin_deletes_custom_roles(self):
        self.assertTrue(decide(self.superadmin, "delete", self.custom))
        self.assertFalse(decide(self.admin, "delete", self.custom))

    def test_reserved_roles_are_never_deletable(self):
        for name in ("admin", "superadmin"):
            role = Role.objects.get(name=name)
            for action in ("delete", "restore", "forceDelete"):
                self.assertFalse(decide(self.superadmin, action, role), f"{name}.{action}")

    def test_admin_may_view_and_update(self):
        self.assertTrue(decide(self.admin, "view", self.custom))
        self.assertTrue(decide(self.admin, "update", self.custom))


class TestDependentsLock(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.manager = make_user(
            username="dept_manager",
            permissions=["department.delete", "department.force_delete"],
        )
        cls.department = Department.objects.create(name="Field Office")

    def test_delete_blocked_until_dependents_are_gone(self):
        info = make_info(self.manager, department=self.department)
        self.assertFalse(decide(self.manager, "delete", self.department))
        self.assertFalse(decide(self.manager, "forceDelete", self.department))

        info.delete()
        self.assertTrue(decide(self.manager, "delete", self.department))
        self.assertTrue(decide(self.manager, "forceDelete", self.department))


class TestExpiredGrant(TestCase):
    """An expired grant is indistinguishable from no grant."""

    @classmethod
    def setUpTestData(cls):
        cls.viewer = make_user(
            username="grant_viewer",
            permissions=["incident_report.view"],
        )
        cls.report = make_incident_report()

    def test_expired_record_grant(self):
        grant = AccessGrantRegistry.grant(
            user=self.viewer,
            scope=Entity.INCIDENT_REPORT,
            resource=self.report,
            expires_at=timezone.now() + timedelta(days=1),
        )
        self.assertTrue(decide(self.viewer, "view", self.report))

        AccessGrant.objects.filter(pk=grant.pk).update(
            expires_at=timezone.now() - timedelta(minutes=1)
        )
        self.assertFalse(decide(self.viewer, "view", self.report))
        self.assertIsNone(
            AccessGrantRegistry.effective_grant(self.viewer, Entity.INCIDENT_REPORT, self.report)
        )


class TestIncidentReportGate(TestCase):
    """``viewAny`` on incident reports needs the permission AND the capability."""

    @classmethod
    def setUpTestData(cls):
        cls.holder = make_user(
            username="ir_holder",
            permissions=["incident_report.view_any"],
        )
        cls.grantee = make_user(username="ir_grantee")

    def test_permission_alone_is_not_enough(self):
        self.assertFalse(decide(self.holder, "viewAny", entity=Entity.INCIDENT_REPORT))

    def test_capability_alone_is_not_enough(self):
        AccessGrantRegistry.grant(user=self.grantee, scope=Entity.INCIDENT_REPORT)
        self.assertFalse(decide(self.grantee, "viewAny", entity=Entity.INCIDENT_REPORT))

    def test_both_together(self):
        AccessGrantRegistry.grant(user=self.holder, scope=Entity.INCIDENT_REPORT)
        self.assertTrue(decide(self.holder, "viewAny", entity=Entity.INCIDENT_REPORT))

    def test_incidents_only_grant_does_not_confer_read(self):
        AccessGrantRegistry.grant(
            user=self.holder,
            scope=Entity.INCIDENT_REPORT,
            access_type=AccessType.INCIDENTS_ONLY,
        )
        self.assertFalse(decide(self.holder, "viewAny", entity=Entity.INCIDENT_REPORT))


class TestGrantRoundTrip(TestCase):
    """Granting and then revoking leaves the user where they started."""

    @classmethod
    def setUpTestData(cls):
        cls.analyst = make_user(
            username="rt_analyst",
            permissions=["national_insight_center_info.view"],
        )
        cls.owner = make_user(username="rt_owner")
        cls.record = make_insight(cls.owner)

    def test_grant_then_revoke(self):
        before = decide(self.analyst, "view", self.record)
        self.assertFalse(before)

        grant = AccessGrantRegistry.grant(
            user=self.analyst,
            scope=Entity.NATIONAL_INSIGHT_CENTER_INFO,
            resource=self.record,
        )
        self.assertTrue(decide(self.analyst, "view", self.record))

        AccessGrantRegistry.revoke(grant)
        self.assertEqual(decide(self.analyst, "view", self.record), before)
