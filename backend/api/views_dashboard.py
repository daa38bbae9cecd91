"""Dashboard metric endpoints (general, admin and teacher views)."""
from django.utils import timezone
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .domain_core import AccountStatus, UserProfile, get_user_role
from .domain_fees import Fee, OUTSTANDING_STATUSES
from .domain_people import Student, Teacher
from .domain_school import (
    Attendance,
    AttendanceStatus,
    Audience,
    Meeting,
    Notice,
    Notification,
    audience_for_role,
)
from .fee_engine import month_bounds
from .permissions import IsAdminOrPrincipal, IsTeacher
from .serializers_dashboard import MeetingSerializer, NoticeSerializer

RECENT_NOTICES_LIMIT = 5
UPCOMING_MEETINGS_LIMIT = 3
UNASSIGNED_CLASS = 'Not assigned'


def _recent_notices(audience=None):
    queryset = Notice.objects.filter(is_active=True).select_related('created_by')
    if audience is not None:
        queryset = queryset.filter(audience__in=[Audience.ALL, audience])
    return NoticeSerializer(queryset.order_by('-created_at')[:RECENT_NOTICES_LIMIT], many=True).data


def _upcoming_meetings(audience=None):
    queryset = Meeting.objects.filter(is_active=True, date__gte=timezone.now()).select_related('organizer')
    if audience is not None:
        queryset = queryset.filter(audience__in=[Audience.ALL, audience])
    return MeetingSerializer(queryset.order_by('date')[:UPCOMING_MEETINGS_LIMIT], many=True).data


def _unread_notifications(user):
    return Notification.objects.filter(user=user, is_read=False).count()


def _fees_due_this_month():
    first, last = month_bounds(timezone.localdate())
    return Fee.objects.filter(
        due_date__gte=first,
        due_date__lte=last,
        status__in=OUTSTANDING_STATUSES,
    ).count()


class DashboardMetricsView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        today = timezone.localdate()
        audience = audience_for_role(get_user_role(request.user))
        data = {
            'totalStudents': Student.objects.filter(is_active=True).count(),
            'totalTeachers': Teacher.objects.filter(is_active=True).count(),
            'todayAttendance': Attendance.objects.filter(date=today, status=AttendanceStatus.PRESENT).count(),
            'feesDue': _fees_due_this_month(),
            'recentNotices': _recent_notices(audience),
            'upcomingMeetings': _upcoming_meetings(audience),
            'unreadNotificationsCount': _unread_notifications(request.user),
        }
        return Response({'success': True, 'data': data})


class AdminDashboardMetricsView(APIView):
    permission_classes = [IsAuthenticated, IsAdminOrPrincipal]

    def get(self, request):
        pending = UserProfile.objects.filter(
            is_approved=False,
            status=AccountStatus.ON_HOLD,
            is_system_account=False,
        ).count()
        data = {
            'totalStudents': Student.objects.filter(is_active=True).count(),
            'totalTeachers': Teacher.objects.filter(is_active=True).count(),
            'pendingApprovals': pending,
            'feesDue': _fees_due_this_month(),
            'recentNotices': _recent_notices(),
            'upcomingMeetings': _upcoming_meetings(),
            'unreadNotificationsCount': _unread_notifications(request.user),
        }
        return Response({'success': True, 'data': data})


class TeacherDashboardMetricsView(APIView):
    """Class-scoped counts; classes come from ``?classes=9,10`` or the teacher profile."""
    permission_classes = [IsAuthenticated, IsTeacher]

    def get(self, request):
        raw = (request.query_params.get('classes') or '').strip()
        if raw:
            classes = [c.strip() for c in raw.split(',') if c.strip() and c.strip() != UNASSIGNED_CLASS]
        else:
            teacher = Teacher.objects.filter(user=request.user).first()
            if teacher is None:
                return Response({
                    'success': True,
                    'message': 'No teacher profile found. Please update your profile.',
                    'data': {
                        'totalStudentsInClass': 0,
                        'attendanceToday': 0,
                        'recentNotices': [],
                        'classes': [],
                    },
                })
            classes = [c for c in (teacher.classes or []) if c != UNASSIGNED_CLASS]

        students = Student.objects.filter(student_class__in=classes, is_active=True)
        attendance_today = Attendance.objects.filter(
            date=timezone.localdate(),
            user_type='student',
            user_id__in=students.values('user_id'),
            status=AttendanceStatus.PRESENT,
        ).count()

        data = {
            'totalStudentsInClass': students.count(),
            'attendanceToday': attendance_today,
            'recentNotices': _recent_notices(Audience.TEACHERS),
            'classes': classes,
            'upcomingMeetings': _upcoming_meetings(Audience.TEACHERS),
            'unreadNotificationsCount': _unread_notifications(request.user),
        }
        response = {'success': True, 'data': data}
        if not classes:
            response['message'] = 'No classes assigned. Please update your profile with assigned classes.'
        return Response(response)
