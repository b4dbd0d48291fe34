from __future__ import annotations

import logging

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from app.models.user import BankUser
from app.services.user import UserService

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_USER_NAME = "admin"
DEFAULT_ADMIN_PASSWORD = "admin123"


def ensure_seed_data(db: Session) -> None:
    # Fail fast if database schema is behind code.
    engine = db.get_bind()
    inspector = inspect(engine)
    if not inspector.has_table("users"):
        raise RuntimeError("Database schema is missing. Run: alembic upgrade head")
    if inspector.has_table("transfers"):
        cols = {c.get("name") for c in inspector.get_columns("transfers")}
        if "reference_number" not in cols:
            raise RuntimeError(
                "Database schema is outdated (missing column transfers.reference_number). "
                "Run: alembic upgrade head"
            )

    # Create a default administrator when database is empty.
    if db.query(BankUser).first():
        return

    service = UserService(db)
    admin = service.register(
        user_name=DEFAULT_ADMIN_USER_NAME,
        email=None,
        password=DEFAULT_ADMIN_PASSWORD,
        full_name="Administrator",
    )
    service.add_to_role(admin, BankUser.ROLE_ADMIN)
    logger.warning("Created default administrator '%s'; change its password", DEFAULT_ADMIN_USER_NAME)
