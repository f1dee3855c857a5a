from contextlib import contextmanager

from affiliate.extensions import db


@contextmanager
def transactional():
    """Commit the session on success, roll back and re-raise on any error."""
    try:
        yield db.session
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
