"""Domain Upload Models
One ImportHistory row per completed bulk import run.
"""
from django.contrib.auth.models import User
from django.db import models

__all__ = ['UploadUserType', 'ImportStatus', 'ImportHistory']


class UploadUserType(models.TextChoices):
    STUDENT = 'student', 'Student'
    TEACHER = 'teacher', 'Teacher'
    ADMIN_STAFF = 'admin-staff', 'Admin Staff'
    SUPPORT_STAFF = 'support-staff', 'Support Staff'


class ImportStatus(models.TextChoices):
    SUCCESS = 'success', 'Success'
    PARTIAL = 'partial', 'Partial'
    FAILED = 'failed', 'Failed'


class ImportHistory(models.Model):
    id = models.BigAutoField(primary_key=True)
    user_type = models.CharField(max_length=20, choices=UploadUserType.choices)
    filename = models.CharField(max_length=255)
    original_filename = models.CharField(max_length=255)
    uploaded_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='import_histories',
    )
    status = models.CharField(max_length=10, choices=ImportStatus.choices)
    total_records = models.PositiveIntegerField(default=0)
    success_count = models.PositiveIntegerField(default=0)
    error_count = models.PositiveIntegerField(default=0)
    errors = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'import_history'
        ordering = ['-created_at', '-id']
        verbose_name_plural = 'import histories'

    def __str__(self):
        return f"{self.user_type} import {self.original_filename} ({self.status})"

    def save(self, *args, **kwargs):
        # history rows are written once and never edited
        if self.pk is not None and not self._state.adding:
            raise ValueError("ImportHistory records are immutable")
        super().save(*args, **kwargs)
