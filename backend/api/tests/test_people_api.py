from rest_framework.test import APITestCase

from ..domain_core import Role
from .factories import make_student, make_teacher, make_user


class PeopleApiTests(APITestCase):
    def setUp(self):
        self.client.force_authenticate(make_user('office', role=Role.PRINCIPAL))
        make_student('A-1', student_class='9', section='A')
        make_student('A-2', student_class='9', section='B')
        make_student('B-1', student_class='10', section='A', is_active=False)
        make_teacher('T100')

    def test_student_filters(self):
        res = self.client.get('/api/students/', {'class': '9'})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(sorted(s['roll_number'] for s in res.json()), ['A-1', 'A-2'])

        res = self.client.get('/api/students/', {'class': '9', 'section': 'B'})
        self.assertEqual([s['roll_number'] for s in res.json()], ['A-2'])

        res = self.client.get('/api/students/', {'active': 'false'})
        self.assertEqual([s['roll_number'] for s in res.json()], ['B-1'])

    def test_search(self):
        res = self.client.get('/api/students/', {'search': 'a-2'})
        self.assertEqual([s['roll_number'] for s in res.json()], ['A-2'])
        res = self.client.get('/api/teachers/', {'search': 't100'})
        self.assertEqual(len(res.json()), 1)

    def test_listings_are_read_only(self):
        res = self.client.post('/api/teachers/', {'employee_id': 'T200'}, format='json')
        self.assertEqual(res.status_code, 405)

    def test_requires_admin_or_principal(self):
        self.client.force_authenticate(make_user('someteacher', role=Role.TEACHER))
        res = self.client.get('/api/students/')
        self.assertEqual(res.status_code, 403)
