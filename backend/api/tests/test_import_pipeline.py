import os
import shutil
import tempfile
from decimal import Decimal

from django.contrib.auth.models import User
from django.test import TestCase, override_settings
from django.utils import timezone

from ..domain_core import Role, UserProfile
from ..domain_fees import Fee, FeeStatus, FeeType
from ..domain_people import AdminStaff, Student, SupportStaff, Teacher
from ..domain_uploads import ImportHistory, ImportStatus
from ..excel_import.parser import ImportFileError
from ..excel_import.pipeline import generate_email, import_file, import_rows
from ..excel_import.roles import (
    ADMIN_STAFF_ROLE,
    STUDENT_ROLE,
    SUPPORT_STAFF_ROLE,
    TEACHER_ROLE,
    get_import_role,
)
from .factories import make_teacher, make_user, student_row


def teacher_row(**overrides):
    row = {
        'firstName': 'Jane',
        'lastName': 'Doe',
        'phoneNumber': '5550111',
        'qualification': 'MSc Physics',
        'experience': '4',
        'subjects': 'Math, Physics',
        'classes': '9, 10',
        'gender': 'female',
        'salary': '42000',
    }
    row.update(overrides)
    return row


def admin_row(**overrides):
    row = {
        'firstName': 'Alan',
        'lastName': 'Turing',
        'email': 'alan.turing@example.com',
        'employeeId': 'ADM001',
        'phoneNumber': '5550122',
        'qualification': 'PhD',
        'experience': '10',
        'position': 'Registrar',
        'department': 'Administration',
        'gender': 'male',
        'salary': '60000',
    }
    row.update(overrides)
    return row


def support_row(**overrides):
    row = {
        'firstName': 'Sam',
        'lastName': 'Porter',
        'email': 'sam.porter@example.com',
        'employeeId': 'SUP001',
        'phoneNumber': '5550133',
        'position': 'Driver',
        'experience': '2',
        'gender': 'male',
        'salary': '18000',
        'daysOfWeek': 'Mon, Tue, Wed',
    }
    row.update(overrides)
    return row


@override_settings(SCHOOL_EMAIL_DOMAIN='schoolms.com')
class StudentImportTests(TestCase):
    def setUp(self):
        self.uploader = make_user('registrar', role=Role.ADMIN)

    def test_creates_account_profile_and_fee(self):
        result = import_rows(STUDENT_ROLE, [student_row()], self.uploader)

        self.assertEqual((result.total_records, result.success_count, result.error_count), (1, 1, 0))
        self.assertEqual(result.status, ImportStatus.SUCCESS)
        student = Student.objects.get(roll_number='101')
        self.assertEqual(student.user.email, 'stdseanobriensmith@schoolms.com')
        self.assertEqual(student.user.username, student.user.email)
        self.assertTrue(student.user.has_usable_password())
        profile = student.user.profile
        self.assertEqual(profile.role, Role.STUDENT)
        self.assertTrue(profile.is_approved)
        self.assertEqual(profile.approved_by, self.uploader)
        # missing dates default to the import day
        self.assertEqual(student.admission_date, timezone.localdate())

        fee = Fee.objects.get(student=student)
        self.assertEqual(fee.fee_type, FeeType.TUITION)
        self.assertEqual(fee.amount, Decimal('1500'))
        self.assertEqual(fee.status, FeeStatus.UNPAID)
        self.assertEqual(fee.remaining_amount, Decimal('1500'))
        self.assertEqual(fee.recorded_by, self.uploader)

    def test_generated_email_gets_numeric_suffix_on_collision(self):
        rows = [student_row(rollNumber='101'), student_row(rollNumber='102')]
        import_rows(STUDENT_ROLE, rows, self.uploader)

        emails = set(User.objects.filter(student_profile__isnull=False).values_list('email', flat=True))
        self.assertEqual(emails, {'stdseanobriensmith@schoolms.com', 'stdseanobriensmith1@schoolms.com'})
        self.assertEqual(generate_email('std', 'Sean', "O'Brien-Smith"), 'stdseanobriensmith2@schoolms.com')

    def test_supplied_email_kept_only_when_it_looks_generated(self):
        rows = [
            student_row(rollNumber='201', email='stdcustom@schoolms.com'),
            student_row(rollNumber='202', firstName='Ann', lastName='Lee', email='ann@gmail.com'),
        ]
        import_rows(STUDENT_ROLE, rows, self.uploader)

        self.assertEqual(Student.objects.get(roll_number='201').user.email, 'stdcustom@schoolms.com')
        self.assertEqual(Student.objects.get(roll_number='202').user.email, 'stdannlee@schoolms.com')

    def test_duplicate_roll_number_fails_only_that_row(self):
        rows = [
            student_row(rollNumber='101'),
            student_row(rollNumber='101', firstName='Other'),
            student_row(rollNumber='102', firstName='Third'),
        ]
        result = import_rows(STUDENT_ROLE, rows, self.uploader)

        self.assertEqual((result.total_records, result.success_count, result.error_count), (3, 2, 1))
        self.assertEqual(result.errors, [{'row': 3, 'message': 'Roll number already exists'}])
        self.assertEqual(result.status, ImportStatus.PARTIAL)
        self.assertEqual(Student.objects.count(), 2)

    def test_missing_required_fields_are_listed(self):
        row = student_row()
        del row['fatherName']
        row['contactNumber'] = '  '
        result = import_rows(STUDENT_ROLE, [row], self.uploader)

        self.assertEqual(result.errors[0]['message'], 'Missing required fields: fatherName, contactNumber')
        self.assertEqual(result.status, ImportStatus.FAILED)
        self.assertFalse(User.objects.filter(email__startswith='std').exists())

    def test_names_that_read_like_missing_values_are_kept(self):
        rows = [
            student_row(firstName='Li', lastName='Nan'),
            student_row(rollNumber='102', fatherName='None'),
        ]
        result = import_rows(STUDENT_ROLE, rows, self.uploader)

        self.assertEqual(result.errors, [])
        first = Student.objects.get(roll_number='101')
        self.assertEqual(first.user.last_name, 'Nan')
        self.assertEqual(first.user.email, 'stdlinan@schoolms.com')
        self.assertEqual(Student.objects.get(roll_number='102').father_name, 'None')

    def test_zero_monthly_fee_creates_no_fee(self):
        import_rows(STUDENT_ROLE, [student_row(monthlyFee='0')], self.uploader)
        self.assertEqual(Student.objects.count(), 1)
        self.assertFalse(Fee.objects.exists())

    def test_invalid_profile_leaves_no_account_behind(self):
        result = import_rows(STUDENT_ROLE, [student_row(gender='unknown')], self.uploader)

        self.assertEqual(result.error_count, 1)
        self.assertIn('gender', result.errors[0]['message'])
        self.assertFalse(User.objects.filter(email='stdseanobriensmith@schoolms.com').exists())
        self.assertEqual(UserProfile.objects.filter(role=Role.STUDENT).count(), 0)

    def test_counts_always_add_up(self):
        rows = [
            student_row(rollNumber='1'),
            student_row(rollNumber='1'),
            student_row(rollNumber='2', gender='x'),
            student_row(rollNumber='3', section=''),
            student_row(rollNumber='4'),
        ]
        result = import_rows(STUDENT_ROLE, rows, self.uploader)
        self.assertEqual(result.total_records, len(rows))
        self.assertEqual(result.success_count + result.error_count, result.total_records)
        self.assertEqual(len(result.errors), result.error_count)
        self.assertEqual([e['row'] for e in result.errors], [3, 4, 5])


@override_settings(SCHOOL_EMAIL_DOMAIN='schoolms.com')
class StaffImportTests(TestCase):
    def setUp(self):
        self.uploader = make_user('principal', role=Role.PRINCIPAL)

    def test_teacher_gets_generated_email_and_employee_id(self):
        result = import_rows(TEACHER_ROLE, [teacher_row(email='ignored@example.com')], self.uploader)

        self.assertEqual(result.success_count, 1)
        teacher = Teacher.objects.get()
        year = timezone.localdate().strftime('%y')
        self.assertEqual(teacher.employee_id, f'TCH{year}0001')
        self.assertEqual(teacher.user.email, 'tchjanedoe@schoolms.com')
        self.assertEqual(teacher.subjects, ['Math', 'Physics'])
        self.assertEqual(teacher.classes, ['9', '10'])
        self.assertEqual(teacher.user.profile.role, Role.TEACHER)

    def test_teacher_employee_id_skips_taken_ids(self):
        year = timezone.localdate().strftime('%y')
        make_teacher(f'TCH{year}0002')
        import_rows(TEACHER_ROLE, [teacher_row()], self.uploader)
        self.assertTrue(Teacher.objects.filter(employee_id=f'TCH{year}0003').exists())

    def test_admin_staff_role_column(self):
        rows = [
            admin_row(role='Principal'),
            admin_row(email='bad@example.com', employeeId='ADM002', role='janitor'),
        ]
        result = import_rows(ADMIN_STAFF_ROLE, rows, self.uploader)

        self.assertEqual(result.success_count, 1)
        self.assertEqual(AdminStaff.objects.get().user.profile.role, Role.PRINCIPAL)
        self.assertEqual(
            result.errors[0]['message'],
            "Invalid role 'janitor'. Allowed roles: admin, principal, vice-principal",
        )

    def test_admin_staff_defaults_to_admin_role(self):
        import_rows(ADMIN_STAFF_ROLE, [admin_row()], self.uploader)
        self.assertEqual(AdminStaff.objects.get().user.profile.role, Role.ADMIN)

    def test_admin_staff_email_checks(self):
        taken = make_user('taken', role=Role.TEACHER)
        taken.email = 'alan.turing@example.com'
        taken.save()
        rows = [
            admin_row(),
            admin_row(email='not-an-email', employeeId='ADM002'),
        ]
        result = import_rows(ADMIN_STAFF_ROLE, rows, self.uploader)

        self.assertEqual(
            [e['message'] for e in result.errors],
            ['Email already exists', 'Invalid email format'],
        )

    def test_admin_staff_duplicate_employee_id(self):
        rows = [admin_row(), admin_row(email='second@example.com')]
        result = import_rows(ADMIN_STAFF_ROLE, rows, self.uploader)
        self.assertEqual(result.errors, [{'row': 3, 'message': 'Employee ID already exists'}])

    def test_support_staff_position_is_normalised(self):
        result = import_rows(SUPPORT_STAFF_ROLE, [support_row()], self.uploader)

        self.assertEqual(result.success_count, 1)
        staff = SupportStaff.objects.get()
        self.assertEqual(staff.position, 'driver')
        self.assertEqual(staff.days_of_week, ['Mon', 'Tue', 'Wed'])
        self.assertEqual(staff.user.profile.role, Role.SUPPORT_STAFF)

    def test_support_staff_unknown_position_rejected(self):
        result = import_rows(SUPPORT_STAFF_ROLE, [support_row(position='pilot')], self.uploader)
        self.assertEqual(result.error_count, 1)
        self.assertIn('position', result.errors[0]['message'])
        self.assertFalse(User.objects.filter(email='sam.porter@example.com').exists())

    def test_route_aliases(self):
        self.assertIs(get_import_role('students'), STUDENT_ROLE)
        self.assertIs(get_import_role('teacher'), TEACHER_ROLE)
        self.assertIs(get_import_role('admin-staff'), ADMIN_STAFF_ROLE)
        self.assertIsNone(get_import_role('parents'))


class ImportFileTests(TestCase):
    def setUp(self):
        self.uploader = make_user('registrar', role=Role.ADMIN)
        self.tmpdir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def _write(self, name, content):
        path = os.path.join(self.tmpdir, name)
        with open(path, 'w', encoding='utf-8') as fh:
            fh.write(content)
        return path

    def test_history_written_and_file_removed(self):
        path = self._write(
            'students.csv',
            'firstName,lastName,rollNumber,class,section,gender,monthlyFee,fatherName,motherName,contactNumber\n'
            'Ada,Lovelace,11,9,A,female,0,Byron,Anne,555\n'
            'Ada,Lovelace,11,9,A,female,0,Byron,Anne,555\n',
        )
        result, history = import_file(STUDENT_ROLE, path, 'students.csv', self.uploader)

        self.assertFalse(os.path.exists(path))
        self.assertEqual(result.as_dict(), {
            'totalRecords': 2,
            'successCount': 1,
            'errorCount': 1,
            'errors': [{'row': 3, 'message': 'Roll number already exists'}],
        })
        history.refresh_from_db()
        self.assertEqual(history.status, ImportStatus.PARTIAL)
        self.assertEqual(history.original_filename, 'students.csv')
        self.assertEqual(history.uploaded_by, self.uploader)
        self.assertEqual(history.errors, result.errors)

    def test_history_rows_are_immutable(self):
        path = self._write('t.csv', 'firstName,lastName\nA,B\n')
        _, history = import_file(STUDENT_ROLE, path, 't.csv', self.uploader)
        history.status = ImportStatus.SUCCESS
        with self.assertRaises(ValueError):
            history.save()

    def test_unreadable_file_removed_without_history(self):
        path = self._write('empty.csv', 'firstName,,lastName\nA,x,B\n')
        with self.assertRaises(ImportFileError):
            import_file(STUDENT_ROLE, path, 'empty.csv', self.uploader)
        self.assertFalse(os.path.exists(path))
        self.assertFalse(ImportHistory.objects.exists())
