from contextlib import contextmanager
from typing import Optional

from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import Conflict

from atelier.extensions import db


@contextmanager
def transactional(*, conflict_message: Optional[str] = None):
    """
    Commit the session when the block succeeds, roll back otherwise.

    Unique-constraint races that slip past the explicit existence
    checks surface as 409 when ``conflict_message`` is given.
    """
    try:
        yield db.session
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        if conflict_message:
            raise Conflict(conflict_message) from exc
        raise
    except Exception:
        db.session.rollback()
        raise
