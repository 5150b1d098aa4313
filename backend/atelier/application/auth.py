from typing import Any, Dict, Optional

from flask import current_app
from flask_jwt_extended import create_access_token
from werkzeug.exceptions import BadRequest, Conflict, NotFound, Unauthorized

from atelier.extensions import db
from atelier.models import User
from atelier.normalizers.user import normalize_user
from atelier.utils.transaction import transactional

DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "k4sla1!"
MIN_PASSWORD_LENGTH = 6


def authenticate(username: str, password: str) -> Optional[User]:
    user = User.query.filter_by(username=username).first()
    if user is None or not user.check_password(password):
        return None
    return user


def login(*, username: str, password: str) -> Dict[str, Any]:
    """
    Exchange credentials for an access token.

    Unknown usernames and wrong passwords produce the same 401.
    """
    user = authenticate(username, password)
    if user is None:
        current_app.logger.warning("Failed login attempt for %r", username)
        raise Unauthorized("Invalid credentials")

    access_token = create_access_token(
        identity=user.id,
        additional_claims={"username": user.username, "role": user.role},
    )

    current_app.logger.info("User %s logged in", user.username)
    return {
        "access_token": access_token,
        "user": normalize_user(user),
    }


def validate_token_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Resolve a decoded token to the current user.

    The user is read again on every request; tokens of deleted
    accounts are rejected with 401.
    """
    user = db.session.get(User, payload.get("sub"))
    if user is None:
        raise Unauthorized("User not found")
    return normalize_user(user)


def get_profile(user_id: str) -> Dict[str, Any]:
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    return normalize_user(user)


def update_credentials(
    *,
    user_id: str,
    current_password: str,
    username: Optional[str] = None,
    new_password: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Change the username and/or password of the signed-in user.

    Edge cases handled:
    - Neither field supplied (400)
    - User deleted since the token was issued (404)
    - Wrong current password (401)
    - Username taken by another account (409)
    - New password shorter than six characters (400)
    """
    if not username and not new_password:
        raise BadRequest("At least one of username or newPassword must be provided")

    user = db.session.get(User, user_id)
    if user is None:
        raise NotFound("User not found")

    if not user.check_password(current_password):
        raise Unauthorized("Current password is incorrect")

    if username and username != user.username:
        taken = User.query.filter(User.username == username, User.id != user.id).first()
        if taken:
            raise Conflict("Username is already taken")

    if new_password is not None and len(new_password) < MIN_PASSWORD_LENGTH:
        raise BadRequest(f"New password must be at least {MIN_PASSWORD_LENGTH} characters long")

    with transactional(conflict_message="Username is already taken"):
        if username:
            user.username = username
        if new_password:
            user.set_password(new_password)

    current_app.logger.info("Credentials updated for user %s", user.id)
    return normalize_user(user)


def ensure_admin_user(
    username: str = DEFAULT_ADMIN_USERNAME,
    password: str = DEFAULT_ADMIN_PASSWORD,
) -> bool:
    """Create the initial admin account; returns False when it already exists."""
    if User.query.filter_by(username=username).first():
        return False

    user = User(username=username, role="admin")
    user.set_password(password)

    with transactional():
        db.session.add(user)

    return True
