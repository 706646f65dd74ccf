"""
Core app models.

Provides abstract base models shared by every domain app, plus the
``Translation`` catalogue.

* ``TimeStampedModel``  — ``created_at`` / ``updated_at``.
* ``OwnedModel``        — ``created_by`` owner reference consulted by the
                          policy layer for owner-locked actions.
* ``ConfirmableModel``  — one-way ``confirmed`` flag plus the confirming
                          user and timestamp.
"""

from django.conf import settings
from django.db import models

from core.permissions_constants import Entity, permission_choices


class TimeStampedModel(models.Model):
    """
    Abstract base model that provides self-updating ``created_at`` and
    ``updated_at`` timestamp fields for every concrete child model.
    """

    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name="Created At",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name="Updated At",
    )

    class Meta:
        abstract = True


class OwnedModel(models.Model):
    """
    Abstract model carrying the ``created_by`` owner reference.

    The reverse accessor is disabled (``related_name="+"``) because
    almost every domain model inherits from this class.
    """

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        verbose_name="Created By",
    )

    class Meta:
        abstract = True

    def is_owned_by(self, user) -> bool:
        user_id = getattr(user, "pk", None)
        return user_id is not None and self.created_by_id == user_id


class ConfirmableModel(models.Model):
    """
    Abstract model for records that can be confirmed exactly once.

    Confirmation is a terminal lock: the policy layer refuses update,
    delete, restore and force-delete on confirmed rows.  The transition
    itself is performed by ``core.domain.transactions.atomic_confirm``.
    """

    confirmed = models.BooleanField(
        default=False,
        verbose_name="Confirmed",
        db_index=True,
    )
    confirmed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        verbose_name="Confirmed By",
    )
    confirmed_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name="Confirmed At",
    )

    class Meta:
        abstract = True


class Translation(TimeStampedModel, OwnedModel):
    """A single UI string translated into one language."""

    language = models.CharField(
        max_length=10,
        verbose_name="Language Code",
        db_index=True,
    )
    key = models.CharField(max_length=255, verbose_name="Key")
    value = models.TextField(verbose_name="Value")

    class Meta:
        verbose_name = "Translation"
        verbose_name_plural = "Translations"
        ordering = ["language", "key"]
        default_permissions = ()
        permissions = permission_choices(Entity.TRANSLATION)
        constraints = [
            models.UniqueConstraint(
                fields=["language", "key"],
                name="unique_translation_language_key",
            ),
        ]

    def __str__(self):
        return f"[{self.language}] {self.key}"
