"""
Seed the default administrator account.

Idempotent: does nothing when a user with the admin email already exists.

Usage:
    python -m scripts.create_admin                       # defaults from .env
    python -m scripts.create_admin --email root@x.com --password 'Secret@12'
"""

import argparse
import logging

from sqlmodel import Session

from storerating.config import (
    DEFAULT_ADMIN_ADDRESS,
    DEFAULT_ADMIN_EMAIL,
    DEFAULT_ADMIN_NAME,
    DEFAULT_ADMIN_PASSWORD,
)
from storerating.lib.db_con import engine, init_db
from storerating.api.core.security import exist_user, hash_password
from storerating.api.models import User, UserRoleEnum

logger = logging.getLogger(__name__)


def create_admin(session: Session, name: str, email: str, password: str, address: str):
    """Return (user, created)"""
    existing = exist_user(session, email)
    if existing:
        return existing, False

    admin = User(
        name=name,
        email=email,
        password=hash_password(password),
        address=address,
        role=UserRoleEnum.admin,
    )
    session.add(admin)
    session.commit()
    session.refresh(admin)
    return admin, True


def main():
    parser = argparse.ArgumentParser(description="Create the default administrator")
    parser.add_argument("--name", default=DEFAULT_ADMIN_NAME)
    parser.add_argument("--email", default=DEFAULT_ADMIN_EMAIL)
    parser.add_argument("--password", default=DEFAULT_ADMIN_PASSWORD)
    parser.add_argument("--address", default=DEFAULT_ADMIN_ADDRESS)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    init_db()
    with Session(engine) as session:
        admin, created = create_admin(
            session, args.name, args.email, args.password, args.address
        )

    if created:
        logger.info("Default admin user created: %s", admin.email)
    else:
        logger.info("Admin user already exists: %s", admin.email)


if __name__ == "__main__":
    main()
