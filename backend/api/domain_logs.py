from django.db import models
from django.contrib.auth.models import User
from django.utils import timezone

__all__ = ['UserActivityLog', 'ErrorLog']


class UserActivityLog(models.Model):
    """Audit row for a mutating API call (uploads, fee edits, cleanups)."""
    id = models.BigAutoField(primary_key=True)
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    view_name = models.CharField(max_length=200, blank=True, default='')
    path = models.CharField(max_length=1000)
    method = models.CharField(max_length=10)
    status_code = models.IntegerField(null=True, blank=True)
    note = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'user_activity_log'
        ordering = ['-created_at']

    def __str__(self):
        who = self.user.username if self.user else 'Anonymous'
        return f"{who} {self.method} {self.path} -> {self.status_code}"


class ErrorLog(models.Model):
    """Unhandled server exception captured by the middleware."""
    id = models.BigAutoField(primary_key=True)
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    path = models.CharField(max_length=1000, blank=True, default='')
    method = models.CharField(max_length=10, blank=True, default='')
    message = models.TextField(blank=True, default='')
    stack = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'error_log'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.message[:60]} on {self.path or 'unknown'}"
