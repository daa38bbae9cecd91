from decimal import Decimal

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


PERSON_FIELDS = [
    ('date_of_birth', models.DateField(blank=True, null=True)),
    ('gender', models.CharField(choices=[('male', 'Male'), ('female', 'Female'), ('other', 'Other')], max_length=10)),
    ('street', models.CharField(blank=True, default='', max_length=255)),
    ('city', models.CharField(blank=True, default='', max_length=100)),
    ('state', models.CharField(blank=True, default='', max_length=100)),
    ('zip_code', models.CharField(blank=True, default='', max_length=20)),
    ('country', models.CharField(blank=True, default='', max_length=100)),
    ('is_active', models.BooleanField(default=True)),
    ('created_at', models.DateTimeField(auto_now_add=True)),
    ('updated_at', models.DateTimeField(auto_now=True)),
]


def person_fields():
    # each CreateModel needs its own field instances
    return [(name, field.clone()) for name, field in PERSON_FIELDS]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='UserProfile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('role', models.CharField(choices=[('student', 'Student'), ('teacher', 'Teacher'), ('admin', 'Admin'), ('principal', 'Principal'), ('vice-principal', 'Vice Principal'), ('support-staff', 'Support Staff')], db_index=True, max_length=20)),
                ('middle_name', models.CharField(blank=True, default='', max_length=100)),
                ('is_approved', models.BooleanField(default=False)),
                ('status', models.CharField(choices=[('active', 'Active'), ('on hold', 'On Hold'), ('inactive', 'Inactive')], default='on hold', max_length=20)),
                ('approved_at', models.DateTimeField(blank=True, null=True)),
                ('is_system_account', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('approved_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='approved_profiles', to=settings.AUTH_USER_MODEL)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='profile', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'user_profiles',
            },
        ),
        migrations.CreateModel(
            name='Student',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *person_fields(),
                ('roll_number', models.CharField(max_length=50, unique=True)),
                ('student_class', models.CharField(db_column='class', max_length=20)),
                ('section', models.CharField(max_length=20)),
                ('father_name', models.CharField(max_length=150)),
                ('mother_name', models.CharField(max_length=150)),
                ('guardian_name', models.CharField(blank=True, default='', max_length=150)),
                ('contact_number', models.CharField(max_length=30)),
                ('parent_email', models.CharField(blank=True, default='', max_length=254)),
                ('occupation', models.CharField(blank=True, default='', max_length=150)),
                ('admission_date', models.DateField(blank=True, null=True)),
                ('monthly_fee', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='student_profile', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'students',
                'ordering': ['student_class', 'section', 'roll_number'],
                'indexes': [models.Index(fields=['student_class', 'section'], name='students_class_sect_idx')],
            },
        ),
        migrations.CreateModel(
            name='Teacher',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *person_fields(),
                ('employee_id', models.CharField(max_length=30, unique=True)),
                ('phone_number', models.CharField(max_length=30)),
                ('qualification', models.CharField(max_length=255)),
                ('experience', models.PositiveIntegerField(default=0)),
                ('subjects', models.JSONField(blank=True, default=list)),
                ('classes', models.JSONField(blank=True, default=list)),
                ('salary', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12)),
                ('joining_date', models.DateField(blank=True, null=True)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='teacher_profile', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'teachers',
                'ordering': ['employee_id'],
            },
        ),
        migrations.CreateModel(
            name='AdminStaff',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *person_fields(),
                ('employee_id', models.CharField(max_length=30, unique=True)),
                ('phone_number', models.CharField(max_length=30)),
                ('qualification', models.CharField(max_length=255)),
                ('experience', models.PositiveIntegerField(default=0)),
                ('position', models.CharField(max_length=100)),
                ('department', models.CharField(max_length=100)),
                ('salary', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12)),
                ('responsibilities', models.JSONField(blank=True, default=list)),
                ('joining_date', models.DateField(blank=True, null=True)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='adminstaff_profile', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'admin_staff',
                'ordering': ['employee_id'],
                'verbose_name_plural': 'admin staff',
            },
        ),
        migrations.CreateModel(
            name='SupportStaff',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                *person_fields(),
                ('employee_id', models.CharField(max_length=30, unique=True)),
                ('position', models.CharField(choices=[('janitor', 'Janitor'), ('security', 'Security'), ('gardener', 'Gardener'), ('driver', 'Driver'), ('cleaner', 'Cleaner'), ('cook', 'Cook'), ('other', 'Other')], max_length=20)),
                ('phone_number', models.CharField(max_length=30)),
                ('experience', models.PositiveIntegerField(default=0)),
                ('salary', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12)),
                ('start_time', models.CharField(blank=True, default='', max_length=10)),
                ('end_time', models.CharField(blank=True, default='', max_length=10)),
                ('days_of_week', models.JSONField(blank=True, default=list)),
                ('emergency_name', models.CharField(blank=True, default='', max_length=150)),
                ('emergency_relationship', models.CharField(blank=True, default='', max_length=100)),
                ('emergency_phone', models.CharField(blank=True, default='', max_length=30)),
                ('joining_date', models.DateField(blank=True, null=True)),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='supportstaff_profile', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'support_staff',
                'ordering': ['employee_id'],
                'verbose_name_plural': 'support staff',
            },
        ),
        migrations.CreateModel(
            name='Fee',
            fields=[
                ('id', models.BigAutoField(primary_key=True, serialize=False)),
                ('fee_type', models.CharField(choices=[('tuition', 'Tuition'), ('exam', 'Exam'), ('transport', 'Transport'), ('library', 'Library'), ('laboratory', 'Laboratory'), ('other', 'Other')], max_length=20)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12)),
                ('due_date', models.DateField(db_index=True)),
                ('payment_date', models.DateTimeField(blank=True, null=True)),
                ('payment_method', models.CharField(blank=True, choices=[('cash', 'Cash'), ('check', 'Check'), ('online', 'Online'), ('bank transfer', 'Bank Transfer'), ('other', 'Other')], default='', max_length=20)),
                ('transaction_id', models.CharField(blank=True, default='', max_length=100)),
                ('status', models.CharField(choices=[('unpaid', 'Unpaid'), ('partial', 'Partial'), ('paid', 'Paid'), ('overdue', 'Overdue')], db_index=True, default='unpaid', max_length=10)),
                ('paid_amount', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12)),
                ('remaining_amount', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('arrears', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=12)),
                ('receipt_number', models.CharField(blank=True, default='', max_length=50)),
                ('remarks', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('recorded_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='recorded_fees', to=settings.AUTH_USER_MODEL)),
                ('student', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='fees', to='api.student')),
            ],
            options={
                'db_table': 'fees',
                'ordering': ['-due_date', '-id'],
                'indexes': [models.Index(fields=['student', 'fee_type', 'due_date'], name='fees_student_type_due_idx')],
            },
        ),
        migrations.CreateModel(
            name='ImportHistory',
            fields=[
                ('id', models.BigAutoField(primary_key=True, serialize=False)),
                ('user_type', models.CharField(choices=[('student', 'Student'), ('teacher', 'Teacher'), ('admin-staff', 'Admin Staff'), ('support-staff', 'Support Staff')], max_length=20)),
                ('filename', models.CharField(max_length=255)),
                ('original_filename', models.CharField(max_length=255)),
                ('status', models.CharField(choices=[('success', 'Success'), ('partial', 'Partial'), ('failed', 'Failed')], max_length=10)),
                ('total_records', models.PositiveIntegerField(default=0)),
                ('success_count', models.PositiveIntegerField(default=0)),
                ('error_count', models.PositiveIntegerField(default=0)),
                ('errors', models.JSONField(blank=True, default=list)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('uploaded_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='import_histories', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'import_history',
                'ordering': ['-created_at', '-id'],
                'verbose_name_plural': 'import histories',
            },
        ),
        migrations.CreateModel(
            name='Attendance',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('user_type', models.CharField(choices=[('student', 'Student'), ('teacher', 'Teacher'), ('staff', 'Staff')], max_length=10)),
                ('date', models.DateField(db_index=True, default=django.utils.timezone.localdate)),
                ('status', models.CharField(choices=[('present', 'Present'), ('absent', 'Absent'), ('late', 'Late'), ('leave', 'Leave')], max_length=10)),
                ('marked_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='marked_attendance', to=settings.AUTH_USER_MODEL)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='attendance', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'attendance',
                'ordering': ['-date'],
                'constraints': [models.UniqueConstraint(fields=('user', 'date'), name='uniq_attendance_user_date')],
            },
        ),
        migrations.CreateModel(
            name='Notice',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('content', models.TextField(blank=True, default='')),
                ('audience', models.CharField(choices=[('all', 'All'), ('students', 'Students'), ('teachers', 'Teachers'), ('staff', 'Staff')], default='all', max_length=10)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='notices', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'notices',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Meeting',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('agenda', models.TextField(blank=True, default='')),
                ('date', models.DateTimeField()),
                ('audience', models.CharField(choices=[('all', 'All'), ('students', 'Students'), ('teachers', 'Teachers'), ('staff', 'Staff')], default='all', max_length=10)),
                ('is_active', models.BooleanField(default=True)),
                ('organizer', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='organized_meetings', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'meetings',
                'ordering': ['date'],
            },
        ),
        migrations.CreateModel(
            name='Notification',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('message', models.TextField()),
                ('is_read', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='notifications', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'notifications',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='UserActivityLog',
            fields=[
                ('id', models.BigAutoField(primary_key=True, serialize=False)),
                ('view_name', models.CharField(blank=True, default='', max_length=200)),
                ('path', models.CharField(max_length=1000)),
                ('method', models.CharField(max_length=10)),
                ('status_code', models.IntegerField(blank=True, null=True)),
                ('note', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'user_activity_log',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='ErrorLog',
            fields=[
                ('id', models.BigAutoField(primary_key=True, serialize=False)),
                ('path', models.CharField(blank=True, default='', max_length=1000)),
                ('method', models.CharField(blank=True, default='', max_length=10)),
                ('message', models.TextField(blank=True, default='')),
                ('stack', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'error_log',
                'ordering': ['-created_at'],
            },
        ),
    ]
