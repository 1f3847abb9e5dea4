from enum import Enum
from typing import Optional


class ArchiveErrorCode(str, Enum):
    NOT_FOUND_OR_ALREADY_ARCHIVED = "NOT_FOUND_OR_ALREADY_ARCHIVED"
    NOT_FOUND_OR_NOT_ARCHIVED = "NOT_FOUND_OR_NOT_ARCHIVED"
    DEPENDENT_CASCADE_FAILURE = "DEPENDENT_CASCADE_FAILURE"
    DATA_STORE_ERROR = "DATA_STORE_ERROR"
    INVALID_ROLE = "INVALID_ROLE"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    CONCURRENT_MODIFICATION = "CONCURRENT_MODIFICATION"


class CascadeMode(str, Enum):
    # Dependent failures are reported as warnings, the contract change stands
    BEST_EFFORT = "best_effort"
    # Dependent failures undo the contract change
    ATOMIC = "atomic"


DEFAULT_ARCHIVE_REASON = "Deleted by user"
CASCADE_REASON_TEMPLATE = "Contract archived: {reason}"
DEFAULT_RETENTION_DAYS = 365

ARCHIVE_ERROR_MESSAGES = {
    ArchiveErrorCode.NOT_FOUND_OR_ALREADY_ARCHIVED: "Contract not found or already archived",
    ArchiveErrorCode.NOT_FOUND_OR_NOT_ARCHIVED: "Contract not found or not archived",
}


class ArchiveError(Exception):
    """Expected failure of an archive operation, turned into a failed result"""

    def __init__(self, code: ArchiveErrorCode, message: Optional[str] = None):
        self.code = code
        self.message = message or ARCHIVE_ERROR_MESSAGES.get(code, code.value)
        super().__init__(self.message)
