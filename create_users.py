import logging
import os
import sys
from lab_portal.config import settings
from lab_portal.database import Base, make_engine, make_session_factory
from lab_portal.models import Admin, User
from lab_portal.core.security import get_password_hash

logger = logging.getLogger("create_users")


def create_initial_users():
    """Create an initial admin and user when the database has no accounts"""
    engine = make_engine(settings.database_url)
    Base.metadata.create_all(bind=engine)
    db = make_session_factory(engine)()
    try:
        existing = db.query(User).count() + db.query(Admin).count()
        if existing > 0:
            logger.info("Database already has %s accounts", existing)
            return True

        admin_email = os.getenv("INITIAL_ADMIN_EMAIL", "admin@college.edu")
        admin_password = os.getenv("INITIAL_ADMIN_PASSWORD", "admin123")
        user_email = os.getenv("INITIAL_USER_EMAIL", "student1@college.edu")
        user_password = os.getenv("INITIAL_USER_PASSWORD", "student123")

        db.add(Admin(email=admin_email, password_hash=get_password_hash(admin_password)))
        db.add(User(email=user_email, password_hash=get_password_hash(user_password)))
        db.commit()

        logger.info("Created admin %s", admin_email)
        logger.info("Created user %s", user_email)
        return True
    except Exception:
        db.rollback()
        logger.exception("Error creating users")
        return False
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    success = create_initial_users()
    sys.exit(0 if success else 1)
