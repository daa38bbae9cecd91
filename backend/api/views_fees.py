"""Views for fee records"""
import logging
from datetime import date

from django.core.paginator import Paginator
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .domain_core import Role, get_user_role
from .domain_fees import Fee, FeeType
from .domain_people import Student
from .fee_engine import calculate_student_arrears, cleanup_orphaned_fees, month_bounds, upsert_fee
from .permissions import IsAdminOrPrincipal
from .serializers_fees import FeeCreateSerializer, FeeSerializer

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 25

SORT_FIELDS = {
    'dueDate': 'due_date',
    'amount': 'amount',
    'status': 'status',
    'feeType': 'fee_type',
    'createdAt': 'created_at',
}


def _find_student(raw):
    try:
        return Student.objects.filter(pk=int(raw)).first()
    except (TypeError, ValueError):
        return None


def _sort_expression(raw):
    """``-dueDate`` / ``amount`` style sort keys to ORM order_by terms."""
    terms = []
    for part in (raw or '').split(','):
        part = part.strip()
        if not part:
            continue
        desc = part.startswith('-')
        key = part.lstrip('-')
        field = SORT_FIELDS.get(key, key if key in SORT_FIELDS.values() else None)
        if field:
            terms.append(f"-{field}" if desc else field)
    return terms or ['-due_date', '-id']


class FeeViewSet(viewsets.ModelViewSet):
    """
    Endpoints:
    - GET /api/fees/ - list (filters: month+year, studentId, student, status, feeType)
    - POST /api/fees/ - record a fee (upsert per student, fee type and month)
    - GET/PUT/PATCH/DELETE /api/fees/{id}/
    - GET /api/fees/arrears/{student_id}/
    - DELETE /api/fees/cleanup-orphaned/
    """
    serializer_class = FeeSerializer

    def get_permissions(self):
        if self.action in ('create', 'update', 'partial_update', 'destroy', 'cleanup_orphaned'):
            return [IsAuthenticated(), IsAdminOrPrincipal()]
        return [IsAuthenticated()]

    def get_queryset(self):
        queryset = Fee.objects.select_related('student', 'student__user', 'recorded_by')

        # students only ever see their own fee records
        if get_user_role(self.request.user) == Role.STUDENT:
            student = Student.objects.filter(user=self.request.user).first()
            if student is None:
                return queryset.none()
            queryset = queryset.filter(student=student)

        if self.action != 'list':
            return queryset
        params = self.request.query_params

        month = params.get('month')
        year = params.get('year')
        if month and year:
            try:
                first, last = month_bounds(date(int(year), int(month), 1))
            except ValueError:
                return queryset.none()
            queryset = queryset.filter(due_date__gte=first, due_date__lte=last)

        student_ids = [s for s in params.getlist('studentId') if s]
        if len(student_ids) == 1 and ',' in student_ids[0]:
            student_ids = [s.strip() for s in student_ids[0].split(',') if s.strip()]
        if student_ids:
            if not all(s.isdigit() for s in student_ids):
                return queryset.none()
            queryset = queryset.filter(student_id__in=student_ids)
        elif params.get('student'):
            student = _find_student(params.get('student'))
            queryset = queryset.filter(student=student) if student else queryset.none()

        if params.get('status'):
            queryset = queryset.filter(status=params.get('status'))
        if params.get('feeType'):
            queryset = queryset.filter(fee_type=params.get('feeType'))

        return queryset.order_by(*_sort_expression(params.get('sort')))

    def list(self, request, *args, **kwargs):
        queryset = self.get_queryset()
        try:
            page_size = max(1, int(request.query_params.get('limit', DEFAULT_PAGE_SIZE)))
            page = max(1, int(request.query_params.get('page', 1)))
        except ValueError:
            return Response({"success": False, "message": "page and limit must be integers"}, status=400)

        paginator = Paginator(queryset, page_size)
        page_obj = paginator.get_page(page)
        serializer = self.get_serializer(page_obj.object_list, many=True)

        pagination = {}
        if page_obj.has_next():
            pagination['next'] = {'page': page_obj.next_page_number(), 'limit': page_size}
        if page_obj.has_previous():
            pagination['prev'] = {'page': page_obj.previous_page_number(), 'limit': page_size}

        return Response({
            'success': True,
            'count': len(serializer.data),
            'total': paginator.count,
            'pagination': pagination,
            'data': serializer.data,
        })

    def retrieve(self, request, *args, **kwargs):
        fee = self.get_object()
        return Response({'success': True, 'data': self.get_serializer(fee).data})

    def create(self, request, *args, **kwargs):
        student_id = request.data.get('student') or request.data.get('studentId')
        student = _find_student(student_id)
        if student is None:
            return Response(
                {"success": False, "message": f"Student not found with id of {student_id}"},
                status=status.HTTP_404_NOT_FOUND,
            )

        payload = FeeCreateSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        values = dict(payload.validated_data)
        fee_type = values.pop('fee_type')
        due_date = values.pop('due_date')
        if 'arrears' not in values:
            values['arrears'] = calculate_student_arrears(student.pk)
        values['recorded_by'] = request.user

        fee_types = [FeeType.TUITION, FeeType.EXAM] if fee_type == 'all' else [fee_type]
        fees = []
        for ft in fee_types:
            fee, created = upsert_fee(student, ft, due_date, values)
            logger.info("%s %s fee %s for student %s", 'Recorded' if created else 'Updated', ft, fee.pk, student.pk)
            fees.append(fee)

        data = FeeSerializer(fees, many=True).data
        return Response(
            {
                'success': True,
                'message': 'Fee recorded successfully',
                'data': data if fee_type == 'all' else data[0],
            },
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        fee = serializer.save()
        return Response({
            'success': True,
            'message': 'Fee updated successfully',
            'data': self.get_serializer(fee).data,
        })

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        fee_id = instance.pk
        self.perform_destroy(instance)
        return Response({'success': True, 'message': f'Fee {fee_id} deleted successfully', 'data': {}})

    @action(detail=False, methods=['get'], url_path=r'arrears/(?P<student_id>[^/.]+)')
    def arrears(self, request, student_id=None):
        student = _find_student(student_id)
        if student is None:
            return Response(
                {"success": False, "message": f"Student not found with id of {student_id}"},
                status=status.HTTP_404_NOT_FOUND,
            )
        if get_user_role(request.user) == Role.STUDENT and student.user_id != request.user.pk:
            return Response({"success": False, "message": "Not authorized to view these arrears"}, status=403)
        amount = calculate_student_arrears(student.pk)
        return Response({'success': True, 'data': {'studentId': student.pk, 'arrears': str(amount)}})

    @action(detail=False, methods=['delete'], url_path='cleanup-orphaned')
    def cleanup_orphaned(self, request):
        deleted = cleanup_orphaned_fees()
        return Response({
            'success': True,
            'message': f'Removed {len(deleted)} orphaned fee records',
            'data': {'deletedCount': len(deleted), 'deletedIds': deleted},
        })
