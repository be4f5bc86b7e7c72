from datetime import datetime, timedelta
from decimal import Decimal
from types import SimpleNamespace
import pytest
from fastapi.testclient import TestClient
from parkspot.database import DatabaseClient
from parkspot.main import create_app
from parkspot.models.property_model import ParkingProperty
from parkspot.models.user_model import User
from parkspot.services.booking_allocator import BookingAllocator

NOW = datetime(2030, 1, 1, 8, 0, 0)
BOOKING_DAY = datetime(2030, 1, 2, 0, 0, 0)


@pytest.fixture
def db_client(tmp_path):
    client = DatabaseClient(f"sqlite:///{tmp_path / 'parkspot_test.db'}")
    client.create_all()
    yield client
    client.dispose()


@pytest.fixture
def seed(db_client):
    with db_client.session_scope() as db:
        db.add_all([
            User(id="owner", first_name="Olivia", last_name="Owner", username="olivia", email="olivia@example.com"),
            User(id="renter", first_name="Ravi", last_name="Renter", username="ravi", email="ravi@example.com"),
            User(id="other-renter", first_name="Oscar", last_name="Other", username="oscar", email="oscar@example.com"),
        ])
        db.flush()
        db.add_all([
            ParkingProperty(
                id="spot-1",
                owner_id="owner",
                spot_title="Downtown Garage",
                spot_type="Garage",
                street_address="12 Main St",
                city="Springfield",
                state="IL",
                zip_code="62701",
                hourly_rate=Decimal("10.00"),
            ),
            ParkingProperty(
                id="spot-window",
                owner_id="owner",
                spot_title=None,
                spot_type="Driveway",
                street_address="4 Elm Ave",
                city="Springfield",
                state="IL",
                zip_code="62704",
                hourly_rate=Decimal("7.50"),
                starting_date=datetime(2030, 2, 1),
                ending_date=datetime(2030, 3, 1),
            ),
        ])
    return SimpleNamespace(
        owner_id="owner",
        renter_id="renter",
        other_renter_id="other-renter",
        property_id="spot-1",
        windowed_property_id="spot-window",
    )


@pytest.fixture
def at():
    """Timestamp on the booking day, a day after the frozen clock."""
    def _at(hours, minutes=0):
        return BOOKING_DAY + timedelta(hours=hours, minutes=minutes)
    return _at


@pytest.fixture
def allocator(db_client):
    return BookingAllocator(db_client, clock=lambda: NOW)


@pytest.fixture
def api(db_client, allocator, seed):
    app = create_app(db_client, allocator)
    with TestClient(app) as client:
        yield client
