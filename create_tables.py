# create_tables.py
import logging
import os
import sys

from dotenv import load_dotenv

from app.config.settings import ConfigurationError, Settings
from app.database import Base, build_engine, build_session_factory
from app.models import User

logger = logging.getLogger("create_tables")


def create_tables(settings: Settings):
    """Create all tables and, when ADMIN_EMAIL/ADMIN_PASSWORD are set, an admin user"""
    engine = build_engine(settings)
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("All tables created successfully")
        create_default_admin(settings, engine)
    finally:
        engine.dispose()


def create_default_admin(settings: Settings, engine):
    email = os.getenv("ADMIN_EMAIL")
    password = os.getenv("ADMIN_PASSWORD")
    if not email or not password:
        logger.info("ADMIN_EMAIL/ADMIN_PASSWORD not set; skipping admin user")
        return

    db = build_session_factory(engine)()
    try:
        if db.query(User).filter(User.email == email.lower()).first():
            logger.info("Admin user %s already exists", email)
            return
        admin = User(name="Administrator", email=email.lower(), role="admin")
        admin.set_password(password, rounds=settings.bcrypt_rounds)
        db.add(admin)
        db.commit()
        logger.info("Admin user %s created", email)
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    # ADMIN_EMAIL/ADMIN_PASSWORD may live in .env alongside the settings
    load_dotenv()
    try:
        create_tables(Settings.from_env())
    except ConfigurationError as e:
        logger.critical("%s", e)
        sys.exit(1)
