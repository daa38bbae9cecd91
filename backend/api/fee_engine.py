"""Fee lifecycle operations.

Arrears carry-forward, the monthly tuition record seeded for each student,
the per-month upsert used by manual fee entry, and orphan cleanup. Status
derivation itself lives on the model (``domain_fees.apply_fee_transitions``).
"""
import calendar
import logging
from datetime import date
from decimal import Decimal

from django.conf import settings
from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from .domain_fees import Fee, FeeStatus, FeeType, OUTSTANDING_STATUSES
from .domain_people import Student

logger = logging.getLogger(__name__)


def month_bounds(day: date):
    """Return (first_day, last_day) of the month containing ``day``."""
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last)


def _tracking_start_month():
    raw = getattr(settings, 'FEE_TRACKING_START_MONTH', None)
    if not raw:
        return None
    try:
        year, month = str(raw).strip().split('-')[:2]
        return int(year), int(month)
    except ValueError:
        logger.warning("Ignoring malformed FEE_TRACKING_START_MONTH=%r (expected YYYY-MM)", raw)
        return None


def calculate_student_arrears(student_id, today: date | None = None) -> Decimal:
    """Outstanding balance from fee records due before the current month.

    Partial records contribute what is still owed, unpaid and overdue ones
    their full amount.
    """
    today = today or timezone.localdate()
    start = _tracking_start_month()
    if start is not None and (today.year, today.month) == start:
        return Decimal('0')

    month_start, _ = month_bounds(today)
    previous = Fee.objects.filter(
        student_id=student_id,
        due_date__lt=month_start,
        status__in=OUTSTANDING_STATUSES,
    ).only('status', 'amount', 'remaining_amount')

    total = Decimal('0')
    for fee in previous:
        if fee.status == FeeStatus.PARTIAL:
            total += fee.remaining_amount or Decimal('0')
        else:
            total += fee.amount
    return total


def find_monthly_fee(student_id, fee_type, due_date: date):
    first, last = month_bounds(due_date)
    return (
        Fee.objects.filter(
            student_id=student_id,
            fee_type=fee_type,
            due_date__gte=first,
            due_date__lte=last,
        )
        .order_by('id')
        .first()
    )


@transaction.atomic
def upsert_fee(student, fee_type, due_date: date, values: dict):
    """Create or update the ``fee_type`` record of ``student`` for the month of ``due_date``.

    Returns ``(fee, created)``. Updates go through ``Fee.save`` so the status
    is re-derived from what was changed.
    """
    existing = find_monthly_fee(student.pk, fee_type, due_date)
    if existing is None:
        fee = Fee(student=student, fee_type=fee_type, due_date=due_date, **values)
        fee.save()
        return fee, True

    for field, value in values.items():
        setattr(existing, field, value)
    existing.due_date = due_date
    existing.save()
    return existing, False


def create_initial_fee_record(student_id, recorded_by_id, monthly_fee_amount, today: date | None = None):
    """Seed (or refresh) the current month's tuition record for a student.

    Returns the Fee, or ``None`` when the student or recorder is missing.
    """
    if not student_id or not recorded_by_id:
        return None
    student = Student.objects.filter(pk=student_id).first()
    if student is None:
        return None

    today = today or timezone.localdate()
    _, due_date = month_bounds(today)
    amount = Decimal(str(monthly_fee_amount or 0))
    arrears = calculate_student_arrears(student_id, today=today)

    fee, created = upsert_fee(
        student,
        FeeType.TUITION,
        due_date,
        {
            'amount': amount,
            'arrears': arrears,
            'recorded_by_id': recorded_by_id,
            'remarks': f"Monthly tuition fee for {today.strftime('%B %Y')}",
        },
    )
    logger.info(
        "%s tuition fee %s for student %s (amount=%s, arrears=%s)",
        'Created' if created else 'Updated', fee.pk, student_id, amount, arrears,
    )
    return fee


def generate_monthly_fees(recorded_by, today: date | None = None):
    """Seed the current month's tuition record for every active fee-paying student."""
    today = today or timezone.localdate()
    results = {'processed': 0, 'failed': []}
    students = Student.objects.filter(is_active=True, monthly_fee__gt=0).order_by('pk')
    for student in students.iterator():
        try:
            create_initial_fee_record(student.pk, recorded_by.pk, student.monthly_fee, today=today)
            results['processed'] += 1
        except Exception as exc:
            logger.exception("Monthly fee generation failed for student %s", student.pk)
            results['failed'].append({'student': student.pk, 'error': str(exc)})
    return results


def orphaned_fees():
    return Fee.objects.filter(Q(student__isnull=True) | Q(student__is_active=False))


@transaction.atomic
def cleanup_orphaned_fees():
    """Delete fee records whose student is gone or inactive. Returns the deleted ids."""
    ids = list(orphaned_fees().values_list('id', flat=True))
    if ids:
        Fee.objects.filter(id__in=ids).delete()
        logger.info("Removed %d orphaned fee records", len(ids))
    return ids
