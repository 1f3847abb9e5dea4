from sqlmodel import SQLModel
from fastapi.logger import logger
from src.api.common.utils.database import engine

# Import all models to register them with SQLModel
from src.api.customers.models.customer import Customer  # noqa: F401
from src.api.services.models.service import Service  # noqa: F401
from src.api.locations.models.location import Location  # noqa: F401
from src.api.contracts.models import Contract, Booking, PackageReservation  # noqa: F401
from src.api.activity.models.activity_log import ActivityLog  # noqa: F401


def init_db(bind=None):
    """Initialize the database by creating all tables"""
    bind = bind or engine
    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(bind)
    logger.info("Database tables created successfully.")


if __name__ == "__main__":
    init_db()
