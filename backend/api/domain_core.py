"""Domain Core Models
Account-level data attached to Django's auth User: the school role and the
approval state used by the admin dashboard.
"""
from django.contrib.auth.models import User
from django.db import models

__all__ = [
    'Role', 'AccountStatus', 'UserProfile', 'get_user_role', 'ADMIN_ROLES',
]


class Role(models.TextChoices):
    STUDENT = 'student', 'Student'
    TEACHER = 'teacher', 'Teacher'
    ADMIN = 'admin', 'Admin'
    PRINCIPAL = 'principal', 'Principal'
    VICE_PRINCIPAL = 'vice-principal', 'Vice Principal'
    SUPPORT_STAFF = 'support-staff', 'Support Staff'


# Roles that may be assigned from the admin-staff import sheet
ADMIN_ROLES = (Role.ADMIN, Role.PRINCIPAL, Role.VICE_PRINCIPAL)


class AccountStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    ON_HOLD = 'on hold', 'On Hold'
    INACTIVE = 'inactive', 'Inactive'


class UserProfile(models.Model):
    user = models.OneToOneField(
        User,
        on_delete=models.CASCADE,
        related_name='profile',
    )
    role = models.CharField(max_length=20, choices=Role.choices, db_index=True)
    middle_name = models.CharField(max_length=100, blank=True, default='')
    is_approved = models.BooleanField(default=False)
    status = models.CharField(max_length=20, choices=AccountStatus.choices, default=AccountStatus.ON_HOLD)
    approved_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='approved_profiles',
    )
    approved_at = models.DateTimeField(null=True, blank=True)
    is_system_account = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'user_profiles'

    def __str__(self):
        return f"{self.user.username} ({self.role})"


def get_user_role(user):
    """Return the school role for ``user`` (superusers act as admin)."""
    if user is None or not getattr(user, 'is_authenticated', False):
        return None
    try:
        return user.profile.role
    except UserProfile.DoesNotExist:
        pass
    if user.is_superuser:
        return Role.ADMIN
    return None
