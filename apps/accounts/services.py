# accounts/services.py

"""
Accounts Business Logic Services

- User registration with hashed credentials
- Profile and password updates
- Credential checks
"""

from django.contrib.auth.hashers import make_password, check_password
import logging

from core.exceptions import NotFound, InvalidArgument
from core.store import get_store
from utils.models import choice_values
from .models import User

logger = logging.getLogger(__name__)


class UserService:
    """Handle user registration and profile operations"""

    def __init__(self, store=None):
        self.store = store or get_store()

    def register_user(self, username, password, full_name, email, role='member', avatar=None):
        """
        Register a new user.

        Raises:
            InvalidArgument: username taken, empty password or unknown role
        """
        username = (username or '').strip()
        if not username:
            raise InvalidArgument('Username is required')
        if not password:
            raise InvalidArgument('Password is required')
        if role not in choice_values(User.ROLE_CHOICES):
            raise InvalidArgument(f"Unknown role: {role}")

        with self.store.atomic():
            if self.get_user_by_username(username):
                raise InvalidArgument(f"Username '{username}' is already taken")

            user = self.store.users.create(User(
                username=username,
                password=make_password(password),
                full_name=full_name,
                email=email,
                role=role,
                avatar=avatar,
            ))

        logger.info(f"Registered user {user.username} (#{user.id}) with role {user.role}")
        return user

    def get_user(self, user_id):
        return self.store.users.get(user_id)

    def get_user_by_username(self, username):
        return self.store.users.first(username=username)

    def require_user(self, user_id):
        user = self.get_user(user_id)
        if user is None:
            raise NotFound('User', user_id)
        return user

    def update_user(self, user_id, **changes):
        """
        Update profile fields. A new password is hashed before it is stored.

        Raises:
            NotFound: unknown user
            InvalidArgument: duplicate username or unknown role
        """
        if 'role' in changes and changes['role'] not in choice_values(User.ROLE_CHOICES):
            raise InvalidArgument(f"Unknown role: {changes['role']}")
        if 'password' in changes:
            if not changes['password']:
                raise InvalidArgument('Password cannot be empty')
            changes['password'] = make_password(changes['password'])

        with self.store.atomic():
            user = self.require_user(user_id)

            username = changes.get('username')
            if username and username != user.username:
                if self.get_user_by_username(username):
                    raise InvalidArgument(f"Username '{username}' is already taken")

            user = self.store.users.update(user_id, **changes)

        logger.info(f"Updated user #{user_id}: {', '.join(sorted(changes))}")
        return user

    def authenticate(self, username, password):
        """Return the user when the credentials match, otherwise None"""
        user = self.get_user_by_username(username)
        if user is None or not check_password(password, user.password):
            logger.info(f"Failed credential check for '{username}'")
            return None
        return user
