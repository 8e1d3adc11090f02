"""Shared fixtures: an app over a throwaway SQLite file, an operator and data factories."""

from datetime import date

import pytest
from fastapi.testclient import TestClient

from src.auth.service import AdminAuthService
from src.auth.utils import get_password_hash
from src.database import StorageContext
from src.main import create_app
from src.models import AdminUser, Booking, Package


@pytest.fixture
def storage(tmp_path):
    storage = StorageContext(f"sqlite:///{tmp_path / 'test.db'}")
    storage.create_all()
    yield storage
    storage.dispose()


@pytest.fixture
def db(storage):
    with storage.session() as session:
        yield session


@pytest.fixture
def client(storage):
    app = create_app(storage)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def operator(db):
    admin = AdminUser(
        first_name="Olga",
        last_name="Operator",
        email="ops@example.com",
        password_hash=get_password_hash("s3cret-pass"),
        role="ADMIN",
        permissions=[],
        is_active=True,
        login_attempts=0
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin


@pytest.fixture
def auth_headers(operator):
    return {"Authorization": f"Bearer {AdminAuthService.issue_token(operator)}"}


@pytest.fixture
def make_package(db):
    counter = {"n": 0}

    def factory(**fields):
        counter["n"] += 1
        values = {
            "slug": f"package-{counter['n']}",
            "title": f"Package {counter['n']}",
            "description": "A tour",
            "currency": "NU",
            "price_cents": 90000,
            "price_nu": 900,
            "duration_days": 5,
            "duration_text": "5D/4N",
            "image": f"https://img.example.com/{counter['n']}.jpg",
            "includes": [],
            "price_details": [],
        }
        values.update(fields)
        package = Package(**values)
        db.add(package)
        db.commit()
        db.refresh(package)
        return package

    return factory


@pytest.fixture
def make_booking(db):
    def factory(package_id, status="CONFIRMED", travelers=1, total_group_cents=10000,
                currency="NU", updated_at=None):
        booking = Booking(
            package_id=package_id,
            package_title_snapshot="Snapshot",
            status=status,
            customer_first_name="Ada",
            customer_last_name="Lovelace",
            customer_email="ada@example.com",
            customer_phone="",
            travel_date=date(2024, 6, 1),
            travelers=travelers,
            special_requests="",
            currency=currency,
            package_price_cents=total_group_cents,
            sdf_fee_cents=0,
            total_per_person_cents=total_group_cents // max(travelers, 1),
            total_group_cents=total_group_cents,
            source="WEB_FORM",
        )
        if updated_at is not None:
            booking.updated_at = updated_at
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    return factory


@pytest.fixture
def booking_payload():
    def factory(package_slug, **changes):
        payload = {
            "package_slug": package_slug,
            "customer": {
                "firstName": "Ada",
                "lastName": "Lovelace",
                "email": "Ada@Example.com",
                "phone": "+975 1234",
            },
            "trip": {
                "travelDate": "2024-06-01",
                "travelers": 3,
                "specialRequests": "Vegetarian meals",
            },
        }
        payload.update(changes)
        return payload

    return factory
