from rest_framework import serializers

from .domain_people import AdminStaff, Student, SupportStaff, Teacher

ACCOUNT_FIELDS = ['id', 'user', 'email', 'first_name', 'last_name', 'full_name']
PERSON_FIELDS = [
    'date_of_birth', 'gender', 'street', 'city', 'state', 'zip_code', 'country',
    'is_active', 'created_at', 'updated_at',
]


class PersonSerializer(serializers.ModelSerializer):
    email = serializers.EmailField(source='user.email', read_only=True)
    first_name = serializers.CharField(source='user.first_name', read_only=True)
    last_name = serializers.CharField(source='user.last_name', read_only=True)
    full_name = serializers.CharField(read_only=True)


class StudentSerializer(PersonSerializer):
    class Meta:
        model = Student
        fields = ACCOUNT_FIELDS + [
            'roll_number', 'student_class', 'section', 'father_name', 'mother_name',
            'guardian_name', 'contact_number', 'parent_email', 'occupation',
            'admission_date', 'monthly_fee',
        ] + PERSON_FIELDS


class TeacherSerializer(PersonSerializer):
    class Meta:
        model = Teacher
        fields = ACCOUNT_FIELDS + [
            'employee_id', 'phone_number', 'qualification', 'experience',
            'subjects', 'classes', 'salary', 'joining_date',
        ] + PERSON_FIELDS


class AdminStaffSerializer(PersonSerializer):
    class Meta:
        model = AdminStaff
        fields = ACCOUNT_FIELDS + [
            'employee_id', 'phone_number', 'qualification', 'experience', 'position',
            'department', 'salary', 'responsibilities', 'joining_date',
        ] + PERSON_FIELDS


class SupportStaffSerializer(PersonSerializer):
    class Meta:
        model = SupportStaff
        fields = ACCOUNT_FIELDS + [
            'employee_id', 'position', 'phone_number', 'experience', 'salary',
            'start_time', 'end_time', 'days_of_week', 'emergency_name',
            'emergency_relationship', 'emergency_phone', 'joining_date',
        ] + PERSON_FIELDS
