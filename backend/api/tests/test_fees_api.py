from datetime import timedelta
from decimal import Decimal

from django.utils import timezone
from rest_framework.test import APITestCase

from ..domain_core import Role
from ..domain_fees import Fee, FeeStatus, FeeType
from ..fee_engine import month_bounds
from .factories import make_student, make_user


class FeeApiTests(APITestCase):
    def setUp(self):
        self.admin = make_user('bursar', role=Role.ADMIN)
        self.student = make_student('R1')
        self.other = make_student('R2')
        self.today = timezone.localdate()
        self.month_start, self.month_end = month_bounds(self.today)
        self.client.force_authenticate(self.admin)

    def _create(self, **payload):
        data = {
            'student': self.student.pk,
            'fee_type': 'tuition',
            'amount': '1000',
            'due_date': self.month_end.isoformat(),
        }
        data.update(payload)
        return self.client.post('/api/fees/', data, format='json')

    def test_create_derives_partial_status(self):
        res = self._create(paid_amount='400')

        self.assertEqual(res.status_code, 201)
        data = res.json()['data']
        self.assertEqual(data['status'], FeeStatus.PARTIAL)
        self.assertEqual(Decimal(data['remaining_amount']), Decimal('600'))
        self.assertEqual(data['roll_number'], 'R1')
        self.assertEqual(data['recorded_by'], self.admin.pk)

    def test_create_is_an_upsert_per_month(self):
        self._create()
        res = self._create(amount='1100', paid_amount='1100')

        self.assertEqual(res.status_code, 201)
        self.assertEqual(Fee.objects.filter(student=self.student).count(), 1)
        fee = Fee.objects.get(student=self.student)
        self.assertEqual(fee.status, FeeStatus.PAID)
        self.assertEqual(fee.remaining_amount, Decimal('0'))

    def test_create_all_records_tuition_and_exam(self):
        res = self._create(fee_type='all')

        self.assertEqual(res.status_code, 201)
        self.assertEqual(len(res.json()['data']), 2)
        self.assertEqual(
            set(Fee.objects.filter(student=self.student).values_list('fee_type', flat=True)),
            {FeeType.TUITION, FeeType.EXAM},
        )

    def test_create_computes_arrears(self):
        Fee.objects.create(
            student=self.student, fee_type=FeeType.TUITION, amount=Decimal('350'),
            due_date=self.month_start - timedelta(days=3),
        )
        res = self._create(fee_type='exam')
        self.assertEqual(Decimal(res.json()['data']['arrears']), Decimal('350'))

    def test_create_unknown_student(self):
        res = self._create(student=9999)
        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.json()['message'], 'Student not found with id of 9999')

    def test_create_rejects_derived_status(self):
        res = self._create(status='overdue')
        self.assertEqual(res.status_code, 400)
        self.assertFalse(Fee.objects.exists())

    def test_create_accepts_explicit_paid(self):
        res = self._create(status='paid', payment_method='cash')
        data = res.json()['data']
        self.assertEqual(data['status'], FeeStatus.PAID)
        self.assertEqual(Decimal(data['paid_amount']), Decimal('1000'))

    def test_update_payment(self):
        fee = Fee.objects.create(student=self.student, fee_type=FeeType.TUITION, amount=Decimal('800'), due_date=self.month_end)

        res = self.client.patch(f'/api/fees/{fee.pk}/', {'paid_amount': '300'}, format='json')
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()['data']['status'], FeeStatus.PARTIAL)

        res = self.client.patch(f'/api/fees/{fee.pk}/', {'status': 'paid'}, format='json')
        data = res.json()['data']
        self.assertEqual(data['status'], FeeStatus.PAID)
        self.assertEqual(Decimal(data['remaining_amount']), Decimal('0'))

        res = self.client.patch(f'/api/fees/{fee.pk}/', {'status': 'unpaid'}, format='json')
        self.assertEqual(res.status_code, 400)

    def test_list_filters_and_pagination(self):
        for idx in range(3):
            Fee.objects.create(
                student=self.student, fee_type=FeeType.OTHER, amount=Decimal(100 + idx),
                due_date=self.month_end - timedelta(days=idx),
            )
        Fee.objects.create(student=self.other, fee_type=FeeType.TUITION, amount=Decimal('50'), due_date=self.month_end)
        Fee.objects.create(
            student=self.other, fee_type=FeeType.TUITION, amount=Decimal('50'),
            due_date=self.month_start - timedelta(days=40),
        )

        res = self.client.get('/api/fees/', {
            'month': self.today.month, 'year': self.today.year, 'studentId': self.student.pk, 'limit': 2,
        })
        body = res.json()
        self.assertEqual(body['total'], 3)
        self.assertEqual(body['count'], 2)
        self.assertEqual(body['pagination'], {'next': {'page': 2, 'limit': 2}})

        res = self.client.get('/api/fees/', {'studentId': f'{self.student.pk},{self.other.pk}', 'sort': 'amount'})
        amounts = [Decimal(row['amount']) for row in res.json()['data']]
        self.assertEqual(amounts, sorted(amounts))
        self.assertEqual(res.json()['total'], 5)

        res = self.client.get('/api/fees/', {'studentId': 'abc'})
        self.assertEqual(res.json()['total'], 0)

        res = self.client.get('/api/fees/', {'status': 'overdue', 'studentId': self.other.pk})
        self.assertEqual(res.json()['total'], 1)

    def test_delete(self):
        fee = Fee.objects.create(student=self.student, fee_type=FeeType.TUITION, amount=Decimal('1'), due_date=self.month_end)
        res = self.client.delete(f'/api/fees/{fee.pk}/')
        self.assertEqual(res.status_code, 200)
        self.assertFalse(Fee.objects.exists())

    def test_arrears_endpoint(self):
        Fee.objects.create(
            student=self.student, fee_type=FeeType.TUITION, amount=Decimal('120'),
            due_date=self.month_start - timedelta(days=1),
        )
        res = self.client.get(f'/api/fees/arrears/{self.student.pk}/')
        self.assertEqual(res.status_code, 200)
        self.assertEqual(Decimal(res.json()['data']['arrears']), Decimal('120'))

        res = self.client.get('/api/fees/arrears/9999/')
        self.assertEqual(res.status_code, 404)

    def test_cleanup_orphaned(self):
        inactive = make_student('R3', is_active=False)
        stale = Fee.objects.create(student=inactive, fee_type=FeeType.TUITION, amount=Decimal('1'), due_date=self.month_end)
        Fee.objects.create(student=self.student, fee_type=FeeType.TUITION, amount=Decimal('1'), due_date=self.month_end)

        res = self.client.delete('/api/fees/cleanup-orphaned/')

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.json()['data'], {'deletedCount': 1, 'deletedIds': [stale.pk]})
        self.assertEqual(Fee.objects.count(), 1)


class StudentFeeAccessTests(APITestCase):
    def setUp(self):
        self.student = make_student('R1')
        self.other = make_student('R2')
        _, month_end = month_bounds(timezone.localdate())
        self.own = Fee.objects.create(student=self.student, fee_type=FeeType.TUITION, amount=Decimal('10'), due_date=month_end)
        self.foreign = Fee.objects.create(student=self.other, fee_type=FeeType.TUITION, amount=Decimal('10'), due_date=month_end)
        self.client.force_authenticate(self.student.user)

    def test_student_sees_only_own_fees(self):
        res = self.client.get('/api/fees/', {'studentId': self.other.pk})
        self.assertEqual(res.json()['total'], 0)
        res = self.client.get('/api/fees/')
        self.assertEqual([row['id'] for row in res.json()['data']], [self.own.pk])

    def test_student_cannot_open_other_records(self):
        res = self.client.get(f'/api/fees/{self.foreign.pk}/')
        self.assertEqual(res.status_code, 404)
        res = self.client.get(f'/api/fees/arrears/{self.other.pk}/')
        self.assertEqual(res.status_code, 403)

    def test_student_cannot_write(self):
        res = self.client.post('/api/fees/', {
            'student': self.student.pk, 'fee_type': 'tuition', 'amount': '1', 'due_date': '2030-01-31',
        }, format='json')
        self.assertEqual(res.status_code, 403)
        res = self.client.delete('/api/fees/cleanup-orphaned/')
        self.assertEqual(res.status_code, 403)
