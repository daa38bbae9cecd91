"""Import descriptors for the four roster types.

Each descriptor tells the pipeline which columns are required, how the
login email is obtained, which column is the natural key and how a row maps
onto the profile model.
"""
from django.utils import timezone

from ..domain_core import ADMIN_ROLES, Role
from ..domain_people import AdminStaff, Student, SupportStaff, Teacher
from ..domain_uploads import UploadUserType
from ..fee_engine import create_initial_fee_record
from .helpers import cell_text, parse_excel_date, parse_int, parse_number, split_list
from .pipeline import (
    EMAIL_ALWAYS_GENERATE,
    EMAIL_GENERATE_UNLESS_SYNTHETIC,
    EMAIL_REQUIRED,
    ImportRole,
    RowRejected,
)

ADDRESS_HEADERS = (
    'street (Optional)',
    'city (Optional)',
    'state (Optional)',
    'zipCode (Optional)',
    'country (Optional)',
)


def _date_or_today(val):
    return parse_excel_date(val) or timezone.localdate()


def _person_fields(row):
    return {
        'date_of_birth': _date_or_today(row.get('dateOfBirth')),
        'gender': cell_text(row.get('gender')).lower(),
        'street': cell_text(row.get('street')),
        'city': cell_text(row.get('city')),
        'state': cell_text(row.get('state')),
        'zip_code': cell_text(row.get('zipCode')),
        'country': cell_text(row.get('country')),
        'is_active': True,
    }


# --- students ---

def build_student(row, user, roll_number):
    return Student(
        user=user,
        roll_number=roll_number,
        student_class=cell_text(row.get('class')),
        section=cell_text(row.get('section')),
        father_name=cell_text(row.get('fatherName')),
        mother_name=cell_text(row.get('motherName')),
        guardian_name=cell_text(row.get('guardianName')),
        contact_number=cell_text(row.get('contactNumber')),
        parent_email=cell_text(row.get('parentEmail')),
        occupation=cell_text(row.get('occupation')),
        admission_date=_date_or_today(row.get('admissionDate')),
        monthly_fee=parse_number(row.get('monthlyFee')),
        **_person_fields(row),
    )


def seed_student_fee(student, uploader):
    if student.monthly_fee and student.monthly_fee > 0:
        create_initial_fee_record(student.pk, uploader.pk, student.monthly_fee)


STUDENT_ROLE = ImportRole(
    user_type=UploadUserType.STUDENT,
    profile_model=Student,
    required_fields=(
        'firstName', 'lastName', 'rollNumber', 'class', 'section', 'gender',
        'monthlyFee', 'fatherName', 'motherName', 'contactNumber',
    ),
    email_policy=EMAIL_GENERATE_UNLESS_SYNTHETIC,
    email_prefix='std',
    natural_key='rollNumber',
    natural_key_field='roll_number',
    natural_key_label='Roll number',
    build_profile=build_student,
    account_role=lambda row: Role.STUDENT,
    after_create=seed_student_fee,
    template_headers=(
        'firstName (REQUIRED)',
        'middleName (Optional)',
        'lastName (REQUIRED)',
        'email (Optional, generated when not std...@school)',
        'rollNumber (REQUIRED, must be unique)',
        'class (REQUIRED)',
        'section (REQUIRED)',
        'gender (REQUIRED: male/female/other)',
        'dateOfBirth (YYYY-MM-DD)',
        'monthlyFee (REQUIRED)',
        'fatherName (REQUIRED)',
        'motherName (REQUIRED)',
        'guardianName (Optional)',
        'contactNumber (REQUIRED)',
        'parentEmail (Optional)',
        'occupation (Optional)',
    ) + ADDRESS_HEADERS + ('admissionDate (YYYY-MM-DD, Optional)',),
)


# --- teachers ---

def next_teacher_employee_id(today=None):
    """``TCH<yy><seq>``; starts at teacher count + 1 and skips ids already taken."""
    today = today or timezone.localdate()
    year = today.strftime('%y')
    seq = Teacher.objects.count() + 1
    candidate = f"TCH{year}{seq:04d}"
    while Teacher.objects.filter(employee_id=candidate).exists():
        seq += 1
        candidate = f"TCH{year}{seq:04d}"
    return candidate


def build_teacher(row, user, employee_id):
    return Teacher(
        user=user,
        employee_id=employee_id,
        phone_number=cell_text(row.get('phoneNumber')),
        qualification=cell_text(row.get('qualification')),
        experience=parse_int(row.get('experience')),
        subjects=split_list(row.get('subjects')),
        classes=split_list(row.get('classes')),
        salary=parse_number(row.get('salary')),
        joining_date=_date_or_today(row.get('joiningDate')),
        **_person_fields(row),
    )


TEACHER_ROLE = ImportRole(
    user_type=UploadUserType.TEACHER,
    profile_model=Teacher,
    required_fields=(
        'firstName', 'lastName', 'phoneNumber', 'qualification', 'experience',
        'subjects', 'gender', 'salary',
    ),
    email_policy=EMAIL_ALWAYS_GENERATE,
    email_prefix='tch',
    natural_key_field='employee_id',
    natural_key_label='Employee ID',
    generate_natural_key=next_teacher_employee_id,
    build_profile=build_teacher,
    account_role=lambda row: Role.TEACHER,
    template_headers=(
        'firstName (Required)',
        'middleName (Optional)',
        'lastName (Required)',
        'phoneNumber (Required)',
        'qualification (Required)',
        'experience (Required, in years)',
        'subjects (Required, comma-separated)',
        'classes (Optional, comma-separated)',
        'gender (Required: male/female/other)',
        'dateOfBirth (YYYY-MM-DD)',
        'salary (Required)',
    ) + ADDRESS_HEADERS + ('joiningDate (YYYY-MM-DD, Optional)',),
)


# --- admin staff ---

def admin_staff_role(row):
    role = cell_text(row.get('role')).lower() or Role.ADMIN
    if role not in ADMIN_ROLES:
        allowed = ', '.join(str(r) for r in ADMIN_ROLES)
        raise RowRejected(f"Invalid role '{role}'. Allowed roles: {allowed}")
    return role


def build_admin_staff(row, user, employee_id):
    return AdminStaff(
        user=user,
        employee_id=employee_id,
        phone_number=cell_text(row.get('phoneNumber')),
        qualification=cell_text(row.get('qualification')),
        experience=parse_int(row.get('experience')),
        position=cell_text(row.get('position')),
        department=cell_text(row.get('department')),
        salary=parse_number(row.get('salary')),
        responsibilities=split_list(row.get('responsibilities')),
        joining_date=_date_or_today(row.get('joiningDate')),
        **_person_fields(row),
    )


ADMIN_STAFF_ROLE = ImportRole(
    user_type=UploadUserType.ADMIN_STAFF,
    profile_model=AdminStaff,
    required_fields=(
        'firstName', 'lastName', 'email', 'employeeId', 'phoneNumber',
        'qualification', 'experience', 'position', 'department', 'gender', 'salary',
    ),
    email_policy=EMAIL_REQUIRED,
    natural_key='employeeId',
    natural_key_field='employee_id',
    natural_key_label='Employee ID',
    build_profile=build_admin_staff,
    account_role=admin_staff_role,
    template_headers=(
        'firstName (Required)',
        'middleName (Optional)',
        'lastName (Required)',
        'email (Required, must be unique)',
        'employeeId (Required, must be unique)',
        'phoneNumber (Required)',
        'qualification (Required)',
        'experience (Required, in years)',
        'position (Required)',
        'department (Required)',
        'gender (Required: male/female/other)',
        'dateOfBirth (YYYY-MM-DD)',
        'salary (Required)',
        'responsibilities (Optional, comma-separated)',
    ) + ADDRESS_HEADERS + (
        'joiningDate (YYYY-MM-DD, Optional)',
        'role (Optional: admin/principal/vice-principal, defaults to admin)',
    ),
)


# --- support staff ---

def build_support_staff(row, user, employee_id):
    return SupportStaff(
        user=user,
        employee_id=employee_id,
        position=cell_text(row.get('position')).lower(),
        phone_number=cell_text(row.get('phoneNumber')),
        experience=parse_int(row.get('experience')),
        salary=parse_number(row.get('salary')),
        start_time=cell_text(row.get('startTime')),
        end_time=cell_text(row.get('endTime')),
        days_of_week=split_list(row.get('daysOfWeek')),
        emergency_name=cell_text(row.get('emergencyName')),
        emergency_relationship=cell_text(row.get('emergencyRelationship')),
        emergency_phone=cell_text(row.get('emergencyPhone')),
        joining_date=_date_or_today(row.get('joiningDate')),
        **_person_fields(row),
    )


SUPPORT_STAFF_ROLE = ImportRole(
    user_type=UploadUserType.SUPPORT_STAFF,
    profile_model=SupportStaff,
    required_fields=(
        'firstName', 'lastName', 'email', 'employeeId', 'phoneNumber',
        'position', 'experience', 'gender', 'salary',
    ),
    email_policy=EMAIL_REQUIRED,
    natural_key='employeeId',
    natural_key_field='employee_id',
    natural_key_label='Employee ID',
    build_profile=build_support_staff,
    account_role=lambda row: Role.SUPPORT_STAFF,
    template_headers=(
        'firstName (Required)',
        'middleName (Optional)',
        'lastName (Required)',
        'email (Required, must be unique)',
        'employeeId (Required, must be unique)',
        'phoneNumber (Required)',
        'position (Required: janitor/security/gardener/driver/cleaner/cook/other)',
        'experience (Required, in years)',
        'gender (Required: male/female/other)',
        'dateOfBirth (YYYY-MM-DD)',
        'salary (Required)',
        'startTime (Optional, HH:MM)',
        'endTime (Optional, HH:MM)',
        'daysOfWeek (Optional, comma-separated)',
        'emergencyName (Optional)',
        'emergencyRelationship (Optional)',
        'emergencyPhone (Optional)',
    ) + ADDRESS_HEADERS + ('joiningDate (YYYY-MM-DD, Optional)',),
)


IMPORT_ROLES = {
    role.user_type: role
    for role in (STUDENT_ROLE, TEACHER_ROLE, ADMIN_STAFF_ROLE, SUPPORT_STAFF_ROLE)
}


# upload URLs use the plural collection names
ROUTE_ALIASES = {'students': 'student', 'teachers': 'teacher'}


def get_import_role(user_type):
    return IMPORT_ROLES.get(ROUTE_ALIASES.get(user_type, user_type))
