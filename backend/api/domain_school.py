"""Domain School Models
Attendance, notices, meetings and notifications shown on the dashboards.
"""
from django.contrib.auth.models import User
from django.db import models
from django.utils import timezone

__all__ = [
    'AttendanceStatus', 'Attendance', 'Audience', 'Notice', 'Meeting',
    'Notification', 'audience_for_role',
]


class AttendanceStatus(models.TextChoices):
    PRESENT = 'present', 'Present'
    ABSENT = 'absent', 'Absent'
    LATE = 'late', 'Late'
    LEAVE = 'leave', 'Leave'


class Attendance(models.Model):
    USER_TYPES = [
        ('student', 'Student'),
        ('teacher', 'Teacher'),
        ('staff', 'Staff'),
    ]

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='attendance')
    user_type = models.CharField(max_length=10, choices=USER_TYPES)
    date = models.DateField(default=timezone.localdate, db_index=True)
    status = models.CharField(max_length=10, choices=AttendanceStatus.choices)
    marked_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='marked_attendance',
    )

    class Meta:
        db_table = 'attendance'
        ordering = ['-date']
        constraints = [
            models.UniqueConstraint(fields=['user', 'date'], name='uniq_attendance_user_date'),
        ]

    def __str__(self):
        return f"{self.user.username} {self.date} {self.status}"


class Audience(models.TextChoices):
    ALL = 'all', 'All'
    STUDENTS = 'students', 'Students'
    TEACHERS = 'teachers', 'Teachers'
    STAFF = 'staff', 'Staff'


def audience_for_role(role):
    if role == 'student':
        return Audience.STUDENTS
    if role == 'teacher':
        return Audience.TEACHERS
    return Audience.STAFF


class Notice(models.Model):
    title = models.CharField(max_length=255)
    content = models.TextField(blank=True, default='')
    audience = models.CharField(max_length=10, choices=Audience.choices, default=Audience.ALL)
    is_active = models.BooleanField(default=True)
    created_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='notices')
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'notices'
        ordering = ['-created_at']

    def __str__(self):
        return self.title


class Meeting(models.Model):
    title = models.CharField(max_length=255)
    agenda = models.TextField(blank=True, default='')
    date = models.DateTimeField()
    audience = models.CharField(max_length=10, choices=Audience.choices, default=Audience.ALL)
    organizer = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='organized_meetings')
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = 'meetings'
        ordering = ['date']

    def __str__(self):
        return f"{self.title} @ {self.date}"


class Notification(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='notifications')
    message = models.TextField()
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = 'notifications'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.user.username}: {self.message[:40]}"
