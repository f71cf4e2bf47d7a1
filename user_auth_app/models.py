import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """
    The platform's user account, used as `AUTH_USER_MODEL`.

    Extends Django's `AbstractUser` with the role and account status the API authorizes against.
    Users log in with their e-mail address, which is therefore unique.

    Attributes:
        id (UUIDField): Primary key, generated on creation.
        name (CharField): The display name shown next to reviews and establishments.
        email (EmailField): Unique login identifier.
        role (CharField): USER, OWNER or ADMIN. Only OWNER and ADMIN may register establishments;
            ADMIN may change any establishment or review.
        status (CharField): ACTIVE, PENDING_VERIFICATION or BANNED. Only ACTIVE accounts can
            authenticate.
        avatar_url (URLField): Optional picture URL.
    """
    class Role(models.TextChoices):
        USER = 'USER', 'User'
        OWNER = 'OWNER', 'Owner'
        ADMIN = 'ADMIN', 'Admin'

    class Status(models.TextChoices):
        ACTIVE = 'ACTIVE', 'Active'
        PENDING_VERIFICATION = 'PENDING_VERIFICATION', 'Pending verification'
        BANNED = 'BANNED', 'Banned'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, blank=True, default='')
    email = models.EmailField(unique=True)
    role = models.CharField(max_length=10, choices=Role.choices, default=Role.USER)
    status = models.CharField(max_length=25, choices=Status.choices, default=Status.ACTIVE)
    avatar_url = models.URLField(blank=True, null=True)
    updated_at = models.DateTimeField(auto_now=True)

    # Log in with the e-mail address; username stays required for the admin site.
    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username']

    class Meta:
        ordering = ['-date_joined']
        verbose_name = "User"
        verbose_name_plural = "Users"

    def __str__(self):
        return f"{self.name or self.username} <{self.email}> ({self.role})"

    @property
    def is_active_account(self):
        return self.status == self.Status.ACTIVE
