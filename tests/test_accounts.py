"""
Tests for accounts.services.UserService
"""

import pytest

from accounts.services import UserService
from core.exceptions import InvalidArgument, NotFound


@pytest.fixture
def users(store):
    return UserService(store)


class TestUserService:
    def test_register_hashes_password(self, users):
        user = users.register_user('siti', 'secret123', 'Siti Rahma', 'siti@example.com')
        assert user.id == 1
        assert user.role == 'member'
        assert user.password != 'secret123'
        assert 'password' not in user.to_dict()

    def test_duplicate_username_rejected(self, users):
        users.register_user('siti', 'secret123', 'Siti Rahma', 'siti@example.com')
        with pytest.raises(InvalidArgument, match="already taken"):
            users.register_user('siti', 'other456', 'Siti R', 'other@example.com')

    def test_unknown_role_rejected(self, users):
        with pytest.raises(InvalidArgument, match="role"):
            users.register_user('budi', 'secret123', 'Budi', 'budi@example.com', role='owner')

    def test_authenticate(self, users):
        user = users.register_user('budi', 'secret123', 'Budi', 'budi@example.com', role='admin')
        assert users.authenticate('budi', 'secret123') == user
        assert users.authenticate('budi', 'wrong') is None
        assert users.authenticate('nobody', 'secret123') is None
        assert user.is_admin

    def test_update_rehashes_password(self, users):
        user = users.register_user('budi', 'secret123', 'Budi', 'budi@example.com')
        updated = users.update_user(user.id, password='newpass99', full_name='Budi Santoso')
        assert updated.full_name == 'Budi Santoso'
        assert users.authenticate('budi', 'newpass99') is not None
        assert users.authenticate('budi', 'secret123') is None

    def test_require_unknown_user(self, users):
        with pytest.raises(NotFound):
            users.require_user(5)
