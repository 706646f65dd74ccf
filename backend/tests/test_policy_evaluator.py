"""
Unit tests — Policy Evaluator (``core.domain.policy``).

Covers the generic pipeline: action parsing, entity resolution,
totality of ``decide``, the raising ``authorize`` guard, the registry,
and the ability maps the front end consumes.
"""

from __future__ import annotations

from unittest import mock

from django.contrib.auth.models import AnonymousUser
from django.core.exceptions import ImproperlyConfigured
from django.test import TestCase

from accounts.models import Department
from core.domain.exceptions import PermissionDenied, ResourceRequired
from core.domain.policy import (
    EntityPolicy,
    PolicyRegistry,
    abilities,
    authorize,
    decide,
    list_abilities,
    registry,
)
from core.permissions_constants import Action, Entity, PERMISSION_CATALOGUE
from criminals.models import Criminal

from .factories import make_insight, make_user


class TestDecide(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.clerk = make_user(
            username="clerk",
            permissions=[
                "criminal.view_any",
                "criminal.view",
                "criminal.update",
                "backup.manage",
            ],
        )
        cls.outsider = make_user(username="outsider")
        cls.criminal = Criminal.objects.create(name="John Doe", created_by=cls.outsider)

    def test_plain_permission_entity(self):
        self.assertTrue(decide(self.clerk, "viewAny", Criminal))
        self.assertTrue(decide(self.clerk, "view", self.criminal))
        self.assertTrue(decide(self.clerk, "update", self.criminal))
        self.assertFalse(decide(self.clerk, "delete", self.criminal))
        self.assertFalse(decide(self.clerk, "create", Criminal))

    def test_action_accepts_camel_snake_and_enum(self):
        self.assertTrue(decide(self.clerk, "viewAny", Criminal))
        self.assertTrue(decide(self.clerk, "view_any", Criminal))
        self.assertTrue(decide(self.clerk, Action.VIEW_ANY, Criminal))

    def test_unknown_action_is_denied(self):
        self.assertFalse(decide(self.clerk, "explode", self.criminal))
        self.assertFalse(decide(self.clerk, None, self.criminal))
        self.assertFalse(decide(self.clerk, 42, self.criminal))

    def test_unsupported_action_is_denied(self):
        # ``confirm`` exists but criminals are not confirmable.
        self.assertFalse(decide(self.clerk, "confirm", self.criminal))

    def test_unknown_entity_is_denied(self):
        self.assertFalse(decide(self.clerk, "viewAny", entity="spaceship"))
        self.assertFalse(decide(self.clerk, "viewAny"))
        self.assertFalse(decide(self.clerk, "view", object()))

    def test_entity_keyword_for_list_level_actions(self):
        self.assertTrue(decide(self.clerk, "viewAny", entity=Entity.CRIMINAL))
        self.assertTrue(decide(self.clerk, "viewAny", entity="criminal"))

    def test_missing_resource_is_denied(self):
        self.assertFalse(decide(self.clerk, "view", entity=Entity.CRIMINAL))
        self.assertFalse(decide(self.clerk, "update", Criminal))

    def test_wrong_resource_type_is_denied(self):
        insight = make_insight(self.clerk)
        self.assertFalse(decide(self.clerk, "view", insight, entity=Entity.CRIMINAL))

    def test_anonymous_and_missing_actor_are_denied(self):
        self.assertFalse(decide(None, "viewAny", Criminal))
        self.assertFalse(decide(AnonymousUser(), "viewAny", Criminal))
        self.assertFalse(decide(self.outsider, "viewAny", Criminal))

    def test_resourceless_capability(self):
        self.assertTrue(decide(self.clerk, "manage", entity=Entity.BACKUP))
        self.assertFalse(decide(self.outsider, "manage", entity=Entity.BACKUP))
        self.assertFalse(decide(self.clerk, "update", entity=Entity.BACKUP))

    def test_decide_is_total_when_a_rule_fails(self):
        def broken(actor, target, parent):
            raise AttributeError("missing relation")

        patched = EntityPolicy(
            entity=Entity.CRIMINAL,
            model=Criminal,
            overrides={Action.VIEW: broken},
        )
        with mock.patch.dict(registry._policies, {Entity.CRIMINAL: patched}):
            self.assertFalse(decide(self.clerk, "view", self.criminal))


class TestAuthorize(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.clerk = make_user(username="auth_clerk", permissions=["criminal.view_any"])
        cls.criminal = Criminal.objects.create(name="Jane Roe")

    def test_allows_silently(self):
        self.assertIsNone(authorize(self.clerk, "viewAny", Criminal))

    def test_denial_raises_permission_denied(self):
        with self.assertRaises(PermissionDenied):
            authorize(self.clerk, "view", self.criminal)

    def test_missing_target_raises_resource_required(self):
        with self.assertRaises(ResourceRequired):
            authorize(self.clerk, "view", entity=Entity.CRIMINAL)
        with self.assertRaises(ResourceRequired):
            authorize(self.clerk, "update", Criminal)

    def test_custom_message(self):
        with self.assertRaisesMessage(PermissionDenied, "No criminals for you."):
            authorize(self.clerk, "create", Criminal, message="No criminals for you.")


class TestRegistry(TestCase):
    def test_every_catalogued_entity_has_a_policy(self):
        for entity in PERMISSION_CATALOGUE:
            self.assertIn(entity, registry, entity.value)
        for entity in (Entity.ROLE, Entity.USER, Entity.ACCESS_GRANT):
            self.assertIn(entity, registry)

    def test_lookup_by_model(self):
        self.assertEqual(registry.for_model(Criminal).entity, Entity.CRIMINAL)
        self.assertEqual(registry.for_model(Department).entity, Entity.DEPARTMENT)
        self.assertIsNone(registry.for_model(object))

    def test_duplicate_registration_is_rejected(self):
        local = PolicyRegistry()
        local.register(EntityPolicy(entity=Entity.CRIMINAL, model=Criminal))
        with self.assertRaises(ImproperlyConfigured):
            local.register(EntityPolicy(entity=Entity.CRIMINAL, model=Criminal))

    def test_override_for_unsupported_action_is_rejected(self):
        with self.assertRaises(ImproperlyConfigured):
            EntityPolicy(
                entity=Entity.CRIMINAL,
                overrides={Action.JOIN: lambda actor, target, parent: True},
            )


class TestAbilityMaps(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.clerk = make_user(
            username="ability_clerk",
            permissions=["criminal.view_any", "criminal.view", "criminal.delete"],
        )
        cls.criminal = Criminal.objects.create(name="Max Mustermann")

    def test_record_abilities(self):
        result = abilities(self.clerk, self.criminal)
        self.assertEqual(
            result,
            {
                "view": True,
                "update": False,
                "delete": True,
                "restore": False,
                "forceDelete": False,
            },
        )

    def test_list_abilities(self):
        self.assertEqual(
            list_abilities(self.clerk, "criminal"),
            {"viewAny": True, "create": False},
        )

    def test_unknown_target_yields_empty_maps(self):
        self.assertEqual(abilities(self.clerk, object()), {})
        self.assertEqual(list_abilities(self.clerk, "spaceship"), {})

    def test_list_abilities_include_optional_resource_actions(self):
        result = list_abilities(self.clerk, Entity.NATIONAL_INSIGHT_CENTER_INFO)
        self.assertEqual(set(result), {"viewAny", "create", "printDates"})
        self.assertFalse(any(result.values()))
