"""
Tests for the JSON API: routing, payload validation and status codes.
"""

from decimal import Decimal
import json

import pytest


def post(client, path, payload):
    return client.post(path, data=json.dumps(payload), content_type='application/json')


def patch(client, path, payload):
    return client.patch(path, data=json.dumps(payload), content_type='application/json')


@pytest.fixture
def api_member(client):
    user = post(client, '/api/register', {
        'username': 'siti', 'password': 'secret123',
        'full_name': 'Siti Rahma', 'email': 'siti@example.com',
    }).json()
    return post(client, '/api/members', {
        'user_id': user['id'], 'employee_id': 'EMP-001',
        'department': 'Finance', 'position': 'Accountant', 'status': 'active',
    }).json()


class TestAccountsApi:
    def test_register(self, client):
        response = post(client, '/api/register', {
            'username': 'budi', 'password': 'secret123',
            'full_name': 'Budi Santoso', 'email': 'budi@example.com',
        })
        assert response.status_code == 201
        body = response.json()
        assert body['username'] == 'budi'
        assert 'password' not in body

    def test_register_validation(self, client):
        response = post(client, '/api/register', {'username': 'budi', 'password': '1'})
        assert response.status_code == 400
        assert set(response.json()['errors']) >= {'password', 'full_name', 'email'}

    def test_invalid_json(self, client):
        response = client.post('/api/register', data='{not json', content_type='application/json')
        assert response.status_code == 400


class TestMembersApi:
    def test_create_and_list(self, client, api_member):
        assert api_member['employee_id'] == 'EMP-001'
        listing = client.get('/api/members').json()
        assert [m['id'] for m in listing] == [api_member['id']]
        assert client.get('/api/members/stats').json()['active'] == 1

    def test_patch(self, client, api_member):
        response = patch(client, f"/api/members/{api_member['id']}", {'status': 'on_leave'})
        assert response.status_code == 200
        assert response.json()['status'] == 'on_leave'
        assert response.json()['department'] == 'Finance'

    def test_unknown_user(self, client):
        response = post(client, '/api/members', {
            'user_id': 99, 'employee_id': 'EMP-9', 'department': 'Ops', 'position': 'Clerk',
        })
        assert response.status_code == 404

    def test_method_not_allowed(self, client):
        assert client.delete('/api/members').status_code == 405


class TestSavingsApi:
    def test_deposit_updates_savings(self, client, api_member):
        response = post(client, '/api/transactions', {
            'member_id': api_member['id'], 'type': 'deposit',
            'amount': 100000, 'status': 'completed',
        })
        assert response.status_code == 201
        assert response.json()['type'] == 'deposit'

        saving = client.get(f"/api/savings/member/{api_member['id']}").json()
        assert Decimal(saving['total_savings']) == Decimal('100000')
        assert Decimal(client.get('/api/savings/stats').json()['total_savings']) == Decimal('100000')

    def test_invalid_type(self, client, api_member):
        response = post(client, '/api/transactions', {
            'member_id': api_member['id'], 'type': 'transfer', 'amount': 10,
        })
        assert response.status_code == 400
        assert 'type' in response.json()['errors']

    def test_unknown_member(self, client):
        response = post(client, '/api/transactions', {'member_id': 5, 'type': 'deposit', 'amount': 10})
        assert response.status_code == 404

    def test_transaction_patch_is_validated(self, client, api_member):
        txn = post(client, '/api/transactions', {
            'member_id': api_member['id'], 'type': 'deposit', 'amount': 75,
        }).json()

        response = patch(client, f"/api/transactions/{txn['id']}", {'description': 5})
        assert response.status_code == 200
        assert response.json()['description'] == '5'

        response = patch(client, f"/api/transactions/{txn['id']}", {'status': 'reversed'})
        assert response.status_code == 400
        assert 'status' in response.json()['errors']

    def test_savings_not_found(self, client):
        assert client.get('/api/savings/member/42').status_code == 404

    def test_recent_limit(self, client, api_member):
        for _ in range(3):
            post(client, '/api/transactions', {'member_id': api_member['id'], 'type': 'deposit', 'amount': 5})
        assert len(client.get('/api/transactions?limit=2').json()) == 2
        assert client.get('/api/transactions?limit=-1').status_code == 400
        assert len(client.get(f"/api/transactions/member/{api_member['id']}").json()) == 3

    def test_complete_pending_transaction(self, client, api_member):
        txn = post(client, '/api/transactions', {
            'member_id': api_member['id'], 'type': 'deposit', 'amount': 75,
        }).json()
        response = patch(client, f"/api/transactions/{txn['id']}", {'status': 'completed'})
        assert response.status_code == 200
        saving = client.get(f"/api/savings/member/{api_member['id']}").json()
        assert Decimal(saving['total_savings']) == Decimal('75')
        assert patch(client, f"/api/transactions/{txn['id']}", {'status': 'failed'}).status_code == 400


class TestLoansApi:
    def _apply(self, client, member_id):
        return post(client, '/api/loans', {
            'member_id': member_id, 'amount': 1000000,
            'interest_rate': 12, 'term': 12, 'purpose': 'Motorbike',
        })

    def test_application_creates_task(self, client, api_member):
        response = self._apply(client, api_member['id'])
        assert response.status_code == 201
        assert response.json()['status'] == 'pending'

        tasks = client.get('/api/tasks/pending').json()
        assert [t['type'] for t in tasks] == ['loan_approval']
        assert len(client.get('/api/tasks/type/loan_approval').json()) == 1

    def test_approval_workflow(self, client, api_member):
        loan = self._apply(client, api_member['id']).json()

        response = patch(client, f"/api/loans/{loan['id']}", {'status': 'approved'})
        assert response.status_code == 200
        assert response.json()['approval_date'] is not None

        types = [t['type'] for t in client.get(f"/api/transactions/member/{api_member['id']}").json()]
        assert types == ['loan_disbursement']
        assert [item['id'] for item in client.get('/api/loans').json()] == [loan['id']]

    def test_illegal_transition(self, client, api_member):
        loan = self._apply(client, api_member['id']).json()
        response = patch(client, f"/api/loans/{loan['id']}", {'status': 'completed'})
        assert response.status_code == 400

    def test_status_filter(self, client, api_member):
        self._apply(client, api_member['id'])
        assert len(client.get('/api/loans?status=pending').json()) == 1
        assert client.get('/api/loans').json() == []
        assert client.get('/api/loans?status=overdue').status_code == 400

    @pytest.mark.parametrize('field', ['amount', 'interest_rate', 'term', 'purpose'])
    def test_required_terms_cannot_be_cleared(self, client, api_member, field):
        loan = self._apply(client, api_member['id']).json()
        response = patch(client, f"/api/loans/{loan['id']}", {field: None})
        assert response.status_code == 400
        assert client.get(f"/api/loans/{loan['id']}").json()[field] is not None

    def test_unknown_loan(self, client):
        assert patch(client, '/api/loans/9', {'status': 'approved'}).status_code == 404

    def test_stats(self, client, api_member):
        self._apply(client, api_member['id'])
        stats = client.get('/api/loans/stats').json()
        assert stats['pending_loans'] == 1
        assert len(stats['monthly_loans']) == 6


class TestDividendsApi:
    def test_latest_missing(self, client):
        assert client.get('/api/dividends/latest').status_code == 404

    def test_distribution_flow(self, client, api_member):
        dividend = post(client, '/api/dividends', {
            'year': 2026, 'month': 6, 'total_amount': 500,
            'distribution_date': '2026-06-30T09:00:00Z',
        })
        assert dividend.status_code == 201
        dividend_id = dividend.json()['id']

        response = post(client, '/api/dividend-distributions', {
            'dividend_id': dividend_id, 'member_id': api_member['id'],
            'amount': 500, 'status': 'completed',
        })
        assert response.status_code == 201

        saving = client.get(f"/api/savings/member/{api_member['id']}").json()
        assert Decimal(saving['total_savings']) == Decimal('500')
        assert client.get('/api/dividends/latest').json()['id'] == dividend_id
        assert len(client.get(f"/api/dividends/{dividend_id}/distributions").json()) == 1

    def test_invalid_month(self, client):
        response = post(client, '/api/dividends', {
            'year': 2026, 'month': 13, 'total_amount': 500,
            'distribution_date': '2026-06-30T09:00:00Z',
        })
        assert response.status_code == 400
        assert 'month' in response.json()['errors']


class TestCoreApi:
    def test_dashboard(self, client, api_member):
        body = client.get('/api/dashboard').json()
        assert body['member_stats']['total'] == 1
        assert body['latest_dividend'] is None
        assert set(body) >= {'savings_stats', 'loan_stats', 'pending_tasks', 'recent_transactions'}

    def test_task_workflow(self, client):
        task = post(client, '/api/tasks', {'title': 'Audit cash box', 'type': 'audit'})
        assert task.status_code == 201

        response = patch(client, f"/api/tasks/{task.json()['id']}", {'status': 'completed'})
        assert response.status_code == 200
        assert response.json()['status'] == 'completed'
        assert client.get('/api/tasks/pending').json() == []

    def test_unknown_task(self, client):
        assert patch(client, '/api/tasks/3', {'status': 'completed'}).status_code == 404
