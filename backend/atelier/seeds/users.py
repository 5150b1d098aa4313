from flask import current_app

from atelier.application.auth import DEFAULT_ADMIN_USERNAME, ensure_admin_user


def seed_users() -> bool:
    created = ensure_admin_user()
    if created:
        current_app.logger.warning(
            "Created default user %r; change its password after the first login",
            DEFAULT_ADMIN_USERNAME,
        )
    else:
        current_app.logger.info("User %r already exists, skipping", DEFAULT_ADMIN_USERNAME)
    return created
