from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session
from src.api.activity.schemas.activity_log import ActivityLogRead
from src.api.activity.services.activity_log_service import ActivityLogService
from src.api.common.constants.roles import UserRole
from src.api.common.utils.database import get_db
from src.api.contracts.config import ArchiveConfig
from src.api.contracts.constants import ArchiveErrorCode
from src.api.contracts.schemas.archive import (
    ArchiveRequest,
    ArchiveResult,
    PurgeRequest,
    RestoreRequest
)
from src.api.contracts.services.contract_archive_service import ContractArchiveService

router = APIRouter(prefix="/contracts", tags=["contract-archive"])

ERROR_STATUS_CODES = {
    ArchiveErrorCode.NOT_FOUND_OR_ALREADY_ARCHIVED: 404,
    ArchiveErrorCode.NOT_FOUND_OR_NOT_ARCHIVED: 404,
    ArchiveErrorCode.INVALID_ROLE: 400,
    ArchiveErrorCode.INVALID_ARGUMENT: 400,
    ArchiveErrorCode.DEPENDENT_CASCADE_FAILURE: 500,
    ArchiveErrorCode.DATA_STORE_ERROR: 500,
    ArchiveErrorCode.CONCURRENT_MODIFICATION: 409,
}


def get_archive_config() -> ArchiveConfig:
    return ArchiveConfig()


def get_contract_archive_service(
    db: Session = Depends(get_db),
    config: ArchiveConfig = Depends(get_archive_config)
) -> ContractArchiveService:
    """Dependency to get contract archive service"""
    return ContractArchiveService(db, config)


def get_activity_log_service(db: Session = Depends(get_db)) -> ActivityLogService:
    return ActivityLogService(db)


def _unwrap(result: ArchiveResult) -> ArchiveResult:
    if not result.success:
        status_code = ERROR_STATUS_CODES.get(result.error_code, 500)
        raise HTTPException(status_code=status_code, detail=result.error)
    return result


@router.post("/{contract_id}/archive", response_model=ArchiveResult)
def archive_contract(
    contract_id: int,
    request: ArchiveRequest,
    service: ContractArchiveService = Depends(get_contract_archive_service)
):
    """Archive a contract with its bookings and package reservations"""
    return _unwrap(service.archive_contract(contract_id, request.user_id, request.reason))


@router.post("/{contract_id}/restore", response_model=ArchiveResult)
def restore_contract(
    contract_id: int,
    request: RestoreRequest,
    service: ContractArchiveService = Depends(get_contract_archive_service)
):
    """Restore an archived contract with its bookings and package reservations"""
    return _unwrap(service.restore_contract(contract_id, request.user_id))


@router.get("/{contract_id}/activity", response_model=List[ActivityLogRead])
def get_contract_activity(
    contract_id: int,
    service: ActivityLogService = Depends(get_activity_log_service)
):
    """Get the archive, restore and delete history of a contract"""
    return service.get_entity_activity("contracts", str(contract_id))


@router.get("/archived", response_model=ArchiveResult)
def get_archived_contracts(
    user_role: UserRole = Query(..., description="Role of the caller"),
    partner_uuid: Optional[str] = Query(None, description="Partner of an admin caller"),
    user_id: Optional[str] = Query(None, description="Auth user of a customer caller"),
    service: ContractArchiveService = Depends(get_contract_archive_service)
):
    """List archived contracts visible to the caller"""
    if user_role == UserRole.ADMIN and not partner_uuid:
        raise HTTPException(status_code=400, detail="partner_uuid is required for admin role")
    return _unwrap(service.get_archived_contracts(partner_uuid, user_role, user_id))


@router.get("/archived/analytics", response_model=ArchiveResult)
def get_archive_analytics(
    partner_uuid: str = Query(..., description="Partner to summarize"),
    service: ContractArchiveService = Depends(get_contract_archive_service)
):
    """Get archive analytics for a partner dashboard"""
    return _unwrap(service.get_archive_analytics(partner_uuid))


@router.post("/archived/purge", response_model=ArchiveResult)
def purge_old_archived_contracts(
    request: PurgeRequest,
    service: ContractArchiveService = Depends(get_contract_archive_service)
):
    """Permanently delete contracts archived longer than the retention window"""
    return _unwrap(service.permanently_delete_old_archived(request.days_old, request.partner_uuid))


@router.delete("/archived/{contract_id}", response_model=ArchiveResult)
def permanently_delete_contract(
    contract_id: int,
    user_id: str = Query(..., description="User performing the delete"),
    service: ContractArchiveService = Depends(get_contract_archive_service)
):
    """Permanently delete one archived contract"""
    return _unwrap(service.permanently_delete_contract(contract_id, user_id))
