"""
Service type constants
"""

from enum import Enum


class ServiceType(str, Enum):
    """Kind of service a contract is signed for"""
    ABBONAMENTO = "abbonamento"
    PACCHETTO = "pacchetto"
    FREE_TRIAL = "free_trial"
