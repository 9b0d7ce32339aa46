"""
Shared fixtures: a throwaway SQLite database per test and an app client bound to it.
"""
from datetime import date
import pytest
from fastapi.testclient import TestClient
from logistics.core.security import get_password_hash
from logistics.db.session import Database
from logistics.main import create_app
from logistics.models.passenger import Passenger
from logistics.models.trip import Trip
from logistics.models.user import User

PASSWORD = "testpassword123"


@pytest.fixture
def database(tmp_path):
    database = Database(f"sqlite:///{tmp_path / 'logistics.db'}")
    database.create_tables()
    yield database
    database.close()


@pytest.fixture
def db(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def client(database):
    with TestClient(create_app(database)) as client:
        yield client


@pytest.fixture
def create_user(db):
    def _create(email, is_admin=False, password=PASSWORD):
        user = User(
            email=email,
            hashed_password=get_password_hash(password),
            first_name="Test",
            last_name="User",
            is_admin=is_admin,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _create


@pytest.fixture
def login(client):
    def _login(email, password=PASSWORD):
        response = client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200
        return {"Authorization": f"Bearer {response.json()['access_token']}"}
    return _login


@pytest.fixture
def admin_headers(create_user, login):
    create_user("admin@example.com", is_admin=True)
    return login("admin@example.com")


@pytest.fixture
def user_headers(create_user, login):
    create_user("user@example.com")
    return login("user@example.com")


@pytest.fixture
def make_passenger(db):
    def _make(first_name="Ada", last_name="Lovelace", job_role=None):
        passenger = Passenger(first_name=first_name, last_name=last_name, job_role=job_role)
        db.add(passenger)
        db.commit()
        db.refresh(passenger)
        return passenger
    return _make


@pytest.fixture
def make_trip(db):
    def _make(passenger_id=1, number_of_passengers=1, **fields):
        trip = Trip(
            passenger_id=passenger_id,
            from_origin=fields.pop("from_origin", "Ogle"),
            to_destination=fields.pop("to_destination", "NTM"),
            trip_date=fields.pop("trip_date", date(2026, 11, 2)),
            number_of_passengers=number_of_passengers,
            **fields
        )
        db.add(trip)
        db.commit()
        db.refresh(trip)
        return trip
    return _make
