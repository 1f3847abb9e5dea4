import os

# Keep the application engine off PostgreSQL while test modules import it
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENV", "test")

import pytest
from datetime import date, timedelta
from sqlalchemy import event
from sqlmodel import Session, SQLModel, create_engine
from sqlalchemy.pool import StaticPool
from cryptography.fernet import Fernet

# Import all models to ensure they're registered with SQLModel
from src.api.customers.models.customer import Customer
from src.api.services.models.service import Service
from src.api.locations.models.location import Location
from src.api.contracts.models import Contract, Booking, PackageReservation
from src.api.activity.models.activity_log import ActivityLog  # noqa: F401
from src.api.common.utils.datetime import get_current_datetime
from src.api.contracts.config import ArchiveConfig
from src.api.contracts.constants import CascadeMode
from src.api.contracts.services.contract_archive_service import ContractArchiveService

PARTNER_ONE = "0b5ef92c-ac1e-4f84-b082-e02b5daf282f"
PARTNER_TWO = "7d2a41f0-5c3e-4b8e-9a61-3f0c2de1b9a4"


@pytest.fixture(scope="session")
def test_encryption_key():
    """Provide a test encryption key for testing encrypted fields"""
    return Fernet.generate_key().decode()


@pytest.fixture(scope="session", autouse=True)
def setup_test_env(test_encryption_key):
    """Setup test environment variables"""
    os.environ["ENCRYPTION_KEY"] = test_encryption_key
    yield
    # Cleanup
    if "ENCRYPTION_KEY" in os.environ:
        del os.environ["ENCRYPTION_KEY"]


@pytest.fixture
def test_engine():
    """Create an in-memory SQLite database for testing"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Let SQLAlchemy drive transactions so SAVEPOINTs behave, and enforce
    # foreign keys like the production database does
    @event.listens_for(engine, "connect")
    def do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")

    SQLModel.metadata.create_all(engine)
    return engine


@pytest.fixture
def test_session(test_engine):
    """Create a test database session"""
    with Session(test_engine) as session:
        yield session


@pytest.fixture
def archive_config():
    """Archive settings independent from the environment"""
    return ArchiveConfig(
        cascade_mode=CascadeMode.BEST_EFFORT,
        cascade_max_attempts=3,
        purge_batch_size=500,
        retention_days=365,
        retain_archive_reason_on_restore=False
    )


@pytest.fixture
def archive_service(test_session, archive_config):
    return ContractArchiveService(test_session, archive_config)


@pytest.fixture
def captured_statements(test_engine):
    """Collect every SQL statement sent to the test database"""
    statements = []

    def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(test_engine, "before_cursor_execute", before_cursor_execute)
    yield statements
    event.remove(test_engine, "before_cursor_execute", before_cursor_execute)


def delete_targets(statements):
    """Table names of the DELETE statements, in execution order"""
    return [
        statement.split()[2]
        for statement in statements
        if statement.lstrip().upper().startswith("DELETE")
    ]


# Test data factories
class TestDataFactory:
    @staticmethod
    def create_customer(session: Session, **kwargs) -> Customer:
        """Create a test customer"""
        data = {
            "partner_uuid": PARTNER_ONE,
            "user_id": None,
            "first_name": "Giulia",
            "second_name": "Rossi",
            "company_name": None,
            "email": "giulia.rossi@example.com",
        }
        data.update(kwargs)
        email = data.pop("email")

        customer = Customer(**data)
        customer.email = email
        session.add(customer)
        session.commit()
        session.refresh(customer)
        return customer

    @staticmethod
    def create_service(session: Session, **kwargs) -> Service:
        """Create a test service"""
        data = {
            "partner_uuid": PARTNER_ONE,
            "service_name": "Hot desk monthly",
            "service_type": "abbonamento",
        }
        data.update(kwargs)

        service = Service(**data)
        session.add(service)
        session.commit()
        session.refresh(service)
        return service

    @staticmethod
    def create_location(session: Session, **kwargs) -> Location:
        """Create a test location"""
        data = {
            "partner_uuid": PARTNER_ONE,
            "location_name": "Milano Centrale",
        }
        data.update(kwargs)

        location = Location(**data)
        session.add(location)
        session.commit()
        session.refresh(location)
        return location

    @staticmethod
    def create_contract(session: Session, customer_id: int = None, **kwargs) -> Contract:
        """
        Create a test contract. Pass archived=True (optionally with
        archived_at, archived_by_user_id and archive_reason) for an archived one.
        """
        archived = kwargs.pop("archived", False)
        if customer_id is None:
            customer = TestDataFactory.create_customer(
                session, partner_uuid=kwargs.get("partner_uuid", PARTNER_ONE))
            customer_id = customer.id

        data = {
            "partner_uuid": PARTNER_ONE,
            "customer_id": customer_id,
            "contract_number": "CTR-2026-001",
            "service_name": "Hot desk monthly",
            "service_type": "abbonamento",
            "service_cost": 100.0,
            "start_date": date(2026, 1, 1),
            "end_date": date(2026, 12, 31),
        }
        if archived:
            data.update({
                "is_archived": True,
                "archived_at": get_current_datetime(),
                "archived_by_user_id": "admin-user",
                "archive_reason": "Deleted by user",
            })
        data.update(kwargs)

        contract = Contract(**data)
        session.add(contract)
        session.commit()
        session.refresh(contract)
        return contract

    @staticmethod
    def create_booking(session: Session, contract: Contract, **kwargs) -> Booking:
        """Create a test booking for a contract"""
        data = {
            "contract_id": contract.id,
            "partner_uuid": contract.partner_uuid,
            "start_date": contract.start_date,
            "end_date": contract.end_date,
        }
        data.update(kwargs)

        booking = Booking(**data)
        session.add(booking)
        session.commit()
        session.refresh(booking)
        return booking

    @staticmethod
    def create_package_reservation(session: Session, contract: Contract, **kwargs) -> PackageReservation:
        """Create a test package reservation for a contract"""
        data = {
            "contract_id": contract.id,
            "partner_uuid": contract.partner_uuid,
            "reservation_date": date(2026, 3, 2),
            "time_slot": "full_day",
            "entries_used": 1.0,
        }
        data.update(kwargs)

        reservation = PackageReservation(**data)
        session.add(reservation)
        session.commit()
        session.refresh(reservation)
        return reservation

    @staticmethod
    def days_ago(days: int):
        return get_current_datetime() - timedelta(days=days)


@pytest.fixture
def test_data_factory():
    """Provide test data factory"""
    return TestDataFactory
