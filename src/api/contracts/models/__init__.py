"""Contract aggregate models."""
from src.api.contracts.models.contract import Contract
from src.api.contracts.models.booking import Booking
from src.api.contracts.models.package_reservation import PackageReservation

__all__ = ["Contract", "Booking", "PackageReservation"]
