"""Domain People Models
Student, Teacher, AdminStaff and SupportStaff profiles. Each profile hangs off
one auth User (one-to-one) and shares the personal/address block defined on
``PersonProfile``.
"""
from decimal import Decimal

from django.contrib.auth.models import User
from django.db import models

__all__ = [
    'Gender', 'SupportPosition', 'PersonProfile',
    'Student', 'Teacher', 'AdminStaff', 'SupportStaff',
]


class Gender(models.TextChoices):
    MALE = 'male', 'Male'
    FEMALE = 'female', 'Female'
    OTHER = 'other', 'Other'


class SupportPosition(models.TextChoices):
    JANITOR = 'janitor', 'Janitor'
    SECURITY = 'security', 'Security'
    GARDENER = 'gardener', 'Gardener'
    DRIVER = 'driver', 'Driver'
    CLEANER = 'cleaner', 'Cleaner'
    COOK = 'cook', 'Cook'
    OTHER = 'other', 'Other'


class PersonProfile(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='%(class)s_profile')
    date_of_birth = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=10, choices=Gender.choices)

    # address
    street = models.CharField(max_length=255, blank=True, default='')
    city = models.CharField(max_length=100, blank=True, default='')
    state = models.CharField(max_length=100, blank=True, default='')
    zip_code = models.CharField(max_length=20, blank=True, default='')
    country = models.CharField(max_length=100, blank=True, default='')

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    @property
    def full_name(self):
        return self.user.get_full_name() or self.user.username


class Student(PersonProfile):
    roll_number = models.CharField(max_length=50, unique=True)
    student_class = models.CharField(max_length=20, db_column='class')
    section = models.CharField(max_length=20)

    # parent info
    father_name = models.CharField(max_length=150)
    mother_name = models.CharField(max_length=150)
    guardian_name = models.CharField(max_length=150, blank=True, default='')
    contact_number = models.CharField(max_length=30)
    parent_email = models.CharField(max_length=254, blank=True, default='')
    occupation = models.CharField(max_length=150, blank=True, default='')

    admission_date = models.DateField(null=True, blank=True)
    monthly_fee = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))

    class Meta:
        db_table = 'students'
        ordering = ['student_class', 'section', 'roll_number']
        indexes = [
            models.Index(fields=['student_class', 'section'], name='students_class_sect_idx'),
        ]

    def __str__(self):
        return f"{self.roll_number} - {self.full_name}"


class Teacher(PersonProfile):
    employee_id = models.CharField(max_length=30, unique=True)
    phone_number = models.CharField(max_length=30)
    qualification = models.CharField(max_length=255)
    experience = models.PositiveIntegerField(default=0)
    subjects = models.JSONField(default=list, blank=True)
    classes = models.JSONField(default=list, blank=True)
    salary = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    joining_date = models.DateField(null=True, blank=True)

    class Meta:
        db_table = 'teachers'
        ordering = ['employee_id']

    def __str__(self):
        return f"{self.employee_id} - {self.full_name}"


class AdminStaff(PersonProfile):
    employee_id = models.CharField(max_length=30, unique=True)
    phone_number = models.CharField(max_length=30)
    qualification = models.CharField(max_length=255)
    experience = models.PositiveIntegerField(default=0)
    position = models.CharField(max_length=100)
    department = models.CharField(max_length=100)
    salary = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    responsibilities = models.JSONField(default=list, blank=True)
    joining_date = models.DateField(null=True, blank=True)

    class Meta:
        db_table = 'admin_staff'
        ordering = ['employee_id']
        verbose_name_plural = 'admin staff'

    def __str__(self):
        return f"{self.employee_id} - {self.full_name}"


class SupportStaff(PersonProfile):
    employee_id = models.CharField(max_length=30, unique=True)
    position = models.CharField(max_length=20, choices=SupportPosition.choices)
    phone_number = models.CharField(max_length=30)
    experience = models.PositiveIntegerField(default=0)
    salary = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))

    # working hours
    start_time = models.CharField(max_length=10, blank=True, default='')
    end_time = models.CharField(max_length=10, blank=True, default='')
    days_of_week = models.JSONField(default=list, blank=True)

    # emergency contact
    emergency_name = models.CharField(max_length=150, blank=True, default='')
    emergency_relationship = models.CharField(max_length=100, blank=True, default='')
    emergency_phone = models.CharField(max_length=30, blank=True, default='')

    joining_date = models.DateField(null=True, blank=True)

    class Meta:
        db_table = 'support_staff'
        ordering = ['employee_id']
        verbose_name_plural = 'support staff'

    def __str__(self):
        return f"{self.employee_id} - {self.full_name}"
