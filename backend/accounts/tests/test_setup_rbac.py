"""
Tests for the ``setup_rbac`` management command.
"""

from __future__ import annotations

from io import StringIO

from django.core.management import call_command
from django.test import TestCase

from accounts.models import Role, User
from core.domain.policy import decide
from core.permissions_constants import Entity, all_abilities

from tests.factories import make_user


class TestSetupRbac(TestCase):
    def _run(self) -> str:
        out = StringIO()
        call_command("setup_rbac", stdout=out)
        return out.getvalue()

    def _codenames(self, name):
        return set(Role.objects.get(name=name).permissions.values_list("codename", flat=True))

    def test_seeds_three_roles(self):
        output = self._run()
        self.assertEqual(
            set(Role.objects.values_list("name", flat=True)),
            {"user", "admin", "superadmin"},
        )
        self.assertIn("3 role(s) created", output)
        self.assertNotIn("warning", output)

    def test_role_permission_sets(self):
        self._run()
        everything = {ability.codename for ability in all_abilities()}

        self.assertEqual(self._codenames("superadmin"), everything)
        self.assertEqual(self._codenames("admin"), everything - {"backup.manage"})

        user_perms = self._codenames("user")
        self.assertIn("criminal.view_any", user_perms)
        self.assertIn("meeting.join", user_perms)
        self.assertIn("meeting_message.create", user_perms)
        self.assertNotIn("criminal.create", user_perms)
        self.assertNotIn("backup.manage", user_perms)

    def test_idempotent(self):
        self._run()
        Role.objects.get(name="admin").permissions.clear()
        output = self._run()
        self.assertIn("0 role(s) created, 3 role(s) updated", output)
        self.assertEqual(Role.objects.count(), 3)
        self.assertTrue(self._codenames("admin"))

    def test_seeded_roles_drive_decisions(self):
        self._run()
        superadmin = make_user(username="seed_super", roles=["superadmin"])
        plain = make_user(username="seed_plain", roles=["user"])
        plain = User.objects.get(pk=plain.pk)

        self.assertTrue(decide(superadmin, "manage", entity=Entity.BACKUP))
        self.assertFalse(decide(plain, "manage", entity=Entity.BACKUP))
        self.assertTrue(decide(plain, "viewAny", entity=Entity.CRIMINAL))
        self.assertFalse(decide(plain, "create", entity=Entity.CRIMINAL))
