import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, select, text
from sqlalchemy.orm import Session

from app.db.init_db import DEFAULT_ADMIN_USER_NAME, ensure_seed_data
from app.main import app
from app.models.user import BankUser


def test_missing_schema_fails_fast():
    engine = create_engine("sqlite://")
    with Session(bind=engine) as db:
        with pytest.raises(RuntimeError, match="schema is missing"):
            ensure_seed_data(db)


def test_missing_reference_number_column_fails_fast():
    engine = create_engine("sqlite://")
    with engine.begin() as conn:
        conn.execute(text("CREATE TABLE users (id VARCHAR(36) PRIMARY KEY, full_name VARCHAR(50))"))
        conn.execute(text("CREATE TABLE transfers (id VARCHAR(36) PRIMARY KEY, amount NUMERIC(18, 2))"))

    with Session(bind=engine) as db:
        with pytest.raises(RuntimeError, match="transfers.reference_number"):
            ensure_seed_data(db)


def test_empty_database_gets_an_administrator(db_session):
    ensure_seed_data(db_session)
    ensure_seed_data(db_session)

    admins = db_session.scalars(select(BankUser)).all()
    assert [a.user_name for a in admins] == [DEFAULT_ADMIN_USER_NAME]
    assert admins[0].has_role(BankUser.ROLE_ADMIN)


def test_startup_seeds_administrator(db_session):
    with TestClient(app) as client:
        response = client.post(
            "/api/auth/login", json={"username": DEFAULT_ADMIN_USER_NAME, "password": "admin123"}
        )

    assert response.status_code == 200
