"""
Auth Service - user registration and credential checks.

Keeps DB logic out of the routes.
"""
from flask import current_app

from studyhub_app.models import User, db


class AuthService:
    """Service for authentication related operations."""

    @staticmethod
    def register_user(username, email, password):
        """
        Create and store a new user.

        Returns:
            The new User.
        """
        user = User(username=username, email=email)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()

        current_app.logger.info(f"User registered: {username} ({user.user_id})")
        return user

    @staticmethod
    def authenticate_user(username_or_email, password):
        """
        Verify credentials.

        Returns:
            User object if valid, None otherwise.
        """
        user = User.query.filter(
            (User.username == username_or_email) | (User.email == username_or_email)
        ).first()

        if user and user.check_password(password):
            return user

        return None
