from django.contrib import admin

from .domain_core import UserProfile
from .domain_fees import Fee
from .domain_logs import ErrorLog, UserActivityLog
from .domain_people import AdminStaff, Student, SupportStaff, Teacher
from .domain_school import Attendance, Meeting, Notice, Notification
from .domain_uploads import ImportHistory


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ('user', 'role', 'status', 'is_approved', 'approved_by', 'approved_at')
    search_fields = ('user__username', 'user__email', 'user__first_name', 'user__last_name')
    list_filter = ('role', 'status', 'is_approved')


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ('roll_number', 'full_name', 'student_class', 'section', 'monthly_fee', 'is_active')
    search_fields = ('roll_number', 'user__first_name', 'user__last_name', 'user__email', 'father_name')
    list_filter = ('student_class', 'section', 'gender', 'is_active')


@admin.register(Teacher)
class TeacherAdmin(admin.ModelAdmin):
    list_display = ('employee_id', 'full_name', 'qualification', 'experience', 'is_active')
    search_fields = ('employee_id', 'user__first_name', 'user__last_name', 'user__email')
    list_filter = ('gender', 'is_active')


@admin.register(AdminStaff)
class AdminStaffAdmin(admin.ModelAdmin):
    list_display = ('employee_id', 'full_name', 'position', 'department', 'is_active')
    search_fields = ('employee_id', 'user__first_name', 'user__last_name', 'user__email')
    list_filter = ('department', 'is_active')


@admin.register(SupportStaff)
class SupportStaffAdmin(admin.ModelAdmin):
    list_display = ('employee_id', 'full_name', 'position', 'start_time', 'end_time', 'is_active')
    search_fields = ('employee_id', 'user__first_name', 'user__last_name', 'user__email')
    list_filter = ('position', 'is_active')


@admin.register(Fee)
class FeeAdmin(admin.ModelAdmin):
    list_display = ('id', 'student', 'fee_type', 'amount', 'paid_amount', 'remaining_amount', 'arrears', 'status', 'due_date')
    search_fields = ('student__roll_number', 'receipt_number', 'transaction_id')
    list_filter = ('status', 'fee_type', 'payment_method')
    date_hierarchy = 'due_date'
    readonly_fields = ('remaining_amount', 'created_at', 'updated_at')


@admin.register(ImportHistory)
class ImportHistoryAdmin(admin.ModelAdmin):
    list_display = ('id', 'user_type', 'original_filename', 'status', 'total_records', 'success_count', 'error_count', 'uploaded_by', 'created_at')
    list_filter = ('user_type', 'status')

    def has_change_permission(self, request, obj=None):
        return False


admin.site.register(Attendance)
admin.site.register(Notice)
admin.site.register(Meeting)
admin.site.register(Notification)


@admin.register(UserActivityLog)
class UserActivityLogAdmin(admin.ModelAdmin):
    list_display = ('created_at', 'user', 'method', 'path', 'status_code')
    list_filter = ('method',)
    search_fields = ('path', 'user__username')


@admin.register(ErrorLog)
class ErrorLogAdmin(admin.ModelAdmin):
    list_display = ('created_at', 'user', 'method', 'path', 'message')
    search_fields = ('path', 'message')
