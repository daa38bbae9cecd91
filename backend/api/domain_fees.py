"""Domain Fees Models
Monthly fee records with a derived payment status.

Status is never stored as typed: every ``Fee.save()`` runs
``apply_fee_transitions`` which works out what changed since the row was
loaded and re-derives ``paid_amount`` / ``remaining_amount`` / ``status``.
"""
import enum
import logging
from decimal import Decimal

from django.contrib.auth.models import User
from django.db import models
from django.utils import timezone

from .domain_people import Student

__all__ = [
    'FeeType', 'PaymentMethod', 'FeeStatus', 'FeeTransition',
    'Fee', 'apply_fee_transitions', 'OUTSTANDING_STATUSES',
]

logger = logging.getLogger(__name__)


class FeeType(models.TextChoices):
    TUITION = 'tuition', 'Tuition'
    EXAM = 'exam', 'Exam'
    TRANSPORT = 'transport', 'Transport'
    LIBRARY = 'library', 'Library'
    LABORATORY = 'laboratory', 'Laboratory'
    OTHER = 'other', 'Other'


class PaymentMethod(models.TextChoices):
    CASH = 'cash', 'Cash'
    CHECK = 'check', 'Check'
    ONLINE = 'online', 'Online'
    BANK_TRANSFER = 'bank transfer', 'Bank Transfer'
    OTHER = 'other', 'Other'


class FeeStatus(models.TextChoices):
    UNPAID = 'unpaid', 'Unpaid'
    PARTIAL = 'partial', 'Partial'
    PAID = 'paid', 'Paid'
    OVERDUE = 'overdue', 'Overdue'


# Statuses that still carry an outstanding balance
OUTSTANDING_STATUSES = (FeeStatus.UNPAID, FeeStatus.PARTIAL, FeeStatus.OVERDUE)


class FeeTransition(enum.Enum):
    """What happened to a fee record since it was last persisted."""
    MANUAL_PAID = 'manual-paid'
    AMOUNTS_CHANGED = 'amounts-changed'


def apply_fee_transitions(fee, transitions, today=None, now=None):
    """Re-derive the payment fields of ``fee`` in place.

    ``MANUAL_PAID`` wins over ``AMOUNTS_CHANGED``. The overdue check runs
    afterwards regardless of which transition (if any) applied.
    """
    today = today or timezone.localdate()
    now = now or timezone.now()
    if FeeTransition.MANUAL_PAID in transitions:
        fee.paid_amount = fee.amount
        fee.remaining_amount = Decimal('0')
        fee.status = FeeStatus.PAID
        if not fee.payment_date:
            fee.payment_date = now
    elif FeeTransition.AMOUNTS_CHANGED in transitions:
        paid = fee.paid_amount or Decimal('0')
        fee.remaining_amount = fee.amount - paid
        if paid <= 0:
            fee.status = FeeStatus.UNPAID
        elif paid < fee.amount:
            fee.status = FeeStatus.PARTIAL
        else:
            fee.status = FeeStatus.PAID
            if not fee.payment_date:
                fee.payment_date = now

    if fee.status not in (FeeStatus.PAID, FeeStatus.OVERDUE) and fee.due_date and fee.due_date < today:
        fee.status = FeeStatus.OVERDUE
    return fee


class Fee(models.Model):
    id = models.BigAutoField(primary_key=True)
    # SET_NULL keeps the history when a student is removed; such rows are
    # picked up by the orphan cleanup.
    student = models.ForeignKey(
        Student,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='fees',
    )
    fee_type = models.CharField(max_length=20, choices=FeeType.choices)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    due_date = models.DateField(db_index=True)
    payment_date = models.DateTimeField(null=True, blank=True)
    payment_method = models.CharField(max_length=20, choices=PaymentMethod.choices, blank=True, default='')
    transaction_id = models.CharField(max_length=100, blank=True, default='')
    status = models.CharField(max_length=10, choices=FeeStatus.choices, default=FeeStatus.UNPAID, db_index=True)
    paid_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    remaining_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    arrears = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0'))
    receipt_number = models.CharField(max_length=50, blank=True, default='')
    remarks = models.TextField(blank=True, default='')
    recorded_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='recorded_fees',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'fees'
        ordering = ['-due_date', '-id']
        indexes = [
            models.Index(fields=['student', 'fee_type', 'due_date'], name='fees_student_type_due_idx'),
        ]

    def __str__(self):
        return f"{self.fee_type} {self.amount} due {self.due_date} ({self.status})"

    @classmethod
    def from_db(cls, db, field_names, values):
        instance = super().from_db(db, field_names, values)
        instance._loaded_values = dict(zip(field_names, values))
        return instance

    def _snapshot(self):
        self._loaded_values = {
            'status': self.status,
            'paid_amount': self.paid_amount,
            'amount': self.amount,
        }

    def pending_transitions(self):
        loaded = getattr(self, '_loaded_values', None)
        if self._state.adding or loaded is None:
            transitions = {FeeTransition.AMOUNTS_CHANGED}
            if self.status == FeeStatus.PAID:
                transitions.add(FeeTransition.MANUAL_PAID)
            return transitions

        transitions = set()
        if self.status == FeeStatus.PAID and loaded.get('status') != FeeStatus.PAID:
            transitions.add(FeeTransition.MANUAL_PAID)
        if Decimal(str(self.paid_amount or 0)) != Decimal(str(loaded.get('paid_amount') or 0)):
            transitions.add(FeeTransition.AMOUNTS_CHANGED)
        if Decimal(str(self.amount or 0)) != Decimal(str(loaded.get('amount') or 0)):
            transitions.add(FeeTransition.AMOUNTS_CHANGED)
        return transitions

    def save(self, *args, **kwargs):
        self.amount = Decimal(str(self.amount))
        self.paid_amount = Decimal(str(self.paid_amount or 0))
        if self.remaining_amount is None:
            self.remaining_amount = self.amount
        previous_status = self.status
        apply_fee_transitions(self, self.pending_transitions())
        if previous_status != self.status:
            logger.debug("Fee %s status %s -> %s", self.pk or 'new', previous_status, self.status)
        super().save(*args, **kwargs)
        self._snapshot()
