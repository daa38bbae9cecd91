"""Read-only listings of imported people (students, teachers, staff)."""
from django.db.models import Q
from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from .domain_people import AdminStaff, Student, SupportStaff, Teacher
from .permissions import IsAdminOrPrincipal
from .serializers_people import (
    AdminStaffSerializer,
    StudentSerializer,
    SupportStaffSerializer,
    TeacherSerializer,
)


class PersonViewSet(viewsets.ReadOnlyModelViewSet):
    """
    ``?search=`` matches name, email and the role's identifier;
    ``?active=false`` lists deactivated profiles instead of active ones.
    """
    permission_classes = [IsAuthenticated, IsAdminOrPrincipal]
    identifier_field = 'employee_id'

    def get_queryset(self):
        queryset = self.queryset.select_related('user')
        params = self.request.query_params
        active = (params.get('active') or 'true').strip().lower()
        queryset = queryset.filter(is_active=active not in ('0', 'false', 'no'))
        search = (params.get('search') or '').strip()
        if search:
            queryset = queryset.filter(
                Q(user__first_name__icontains=search)
                | Q(user__last_name__icontains=search)
                | Q(user__email__icontains=search)
                | Q(**{f'{self.identifier_field}__icontains': search})
            )
        return queryset


class StudentViewSet(PersonViewSet):
    queryset = Student.objects.all()
    serializer_class = StudentSerializer
    identifier_field = 'roll_number'

    def get_queryset(self):
        queryset = super().get_queryset()
        params = self.request.query_params
        if params.get('class'):
            queryset = queryset.filter(student_class=params.get('class'))
        if params.get('section'):
            queryset = queryset.filter(section=params.get('section'))
        return queryset


class TeacherViewSet(PersonViewSet):
    queryset = Teacher.objects.all()
    serializer_class = TeacherSerializer


class AdminStaffViewSet(PersonViewSet):
    queryset = AdminStaff.objects.all()
    serializer_class = AdminStaffSerializer


class SupportStaffViewSet(PersonViewSet):
    queryset = SupportStaff.objects.all()
    serializer_class = SupportStaffSerializer
