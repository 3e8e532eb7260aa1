"""
Accounts app models.

Defines the staff ``User`` model used by the relational store.  Every
field aligns with the welfare-office staff profile: a unique username,
a salted password hash, the display name used on notes and case
records, the staff member's position and office, and one of two roles.
"""

from django.contrib.auth.models import AbstractUser
from django.db import models


class UserRole(models.TextChoices):
    """Staff roles.  Administrators additionally see the reports module."""

    ADMINISTRATOR = "administrator", "Administrator"
    EDITOR = "editor", "Editor"


class User(AbstractUser):
    """
    Staff member of the social-welfare office.

    ``username`` is immutable after creation; the password is stored by
    Django's password hashers and never leaves the server.  ``full_name``
    is what other records snapshot (``Case.encoder_name``) or resolve
    (note authors) for display.
    """

    full_name = models.CharField(
        max_length=255,
        verbose_name="Full Name",
    )
    position = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        verbose_name="Position",
    )
    office = models.CharField(
        max_length=255,
        null=True,
        blank=True,
        verbose_name="Office",
    )
    role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        default=UserRole.EDITOR,
        verbose_name="Role",
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name="Created At",
    )

    # Fields required when creating a superuser via CLI
    REQUIRED_FIELDS = ["full_name"]

    class Meta:
        db_table = "users"
        verbose_name = "User"
        verbose_name_plural = "Users"

    def __str__(self):
        return f"{self.username} ({self.full_name}) - {self.get_role_display()}"
