"""Small object builders shared by the api test modules."""
from decimal import Decimal

from django.contrib.auth.models import User

from ..domain_core import AccountStatus, Role, UserProfile
from ..domain_people import Student, Teacher


def make_user(username, role=Role.ADMIN, **extra):
    user = User.objects.create_user(username=username, password='pass12345', email=f'{username}@example.com', **extra)
    UserProfile.objects.create(user=user, role=role, is_approved=True, status=AccountStatus.ACTIVE)
    return user


def make_student(roll_number, monthly_fee=Decimal('1000'), student_class='9', section='A', is_active=True, user=None):
    user = user or make_user(f'student{roll_number}', role=Role.STUDENT)
    return Student.objects.create(
        user=user,
        roll_number=roll_number,
        student_class=student_class,
        section=section,
        gender='female',
        father_name='Father',
        mother_name='Mother',
        contact_number='5550100',
        monthly_fee=monthly_fee,
        is_active=is_active,
    )


def make_teacher(employee_id, classes=None, user=None):
    user = user or make_user(f'teacher{employee_id.lower()}', role=Role.TEACHER)
    return Teacher.objects.create(
        user=user,
        employee_id=employee_id,
        gender='male',
        phone_number='5550101',
        qualification='MSc',
        experience=3,
        subjects=['Math'],
        classes=classes or [],
    )


def student_row(**overrides):
    row = {
        'firstName': 'Sean',
        'lastName': "O'Brien-Smith",
        'rollNumber': '101',
        'class': '9',
        'section': 'A',
        'gender': 'male',
        'monthlyFee': '1500',
        'fatherName': 'Patrick',
        'motherName': 'Mary',
        'contactNumber': '5550123',
    }
    row.update(overrides)
    return row
