from typing import Any, Dict, List, Optional, Union
from fastapi.logger import logger
from sqlalchemy import update, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select
from src.api.activity.services.activity_log_service import ActivityLogService
from src.api.common.constants.roles import UserRole
from src.api.common.utils.datetime import (
    get_current_datetime,
    get_cutoff_datetime,
    is_same_month,
    is_same_year
)
from src.api.contracts.config import ArchiveConfig
from src.api.contracts.constants import (
    ArchiveError,
    ArchiveErrorCode,
    CascadeMode,
    CASCADE_REASON_TEMPLATE,
    DEFAULT_ARCHIVE_REASON
)
from src.api.contracts.models import Booking, Contract, PackageReservation
from src.api.contracts.schemas.archive import ArchiveAnalytics, ArchiveResult, PurgeSummary
from src.api.contracts.schemas.contract import ContractRead
from src.api.customers.models.customer import Customer

# Dependent tables, in the order they are cascaded and purged
DEPENDENT_MODELS = (
    (PackageReservation, "package reservations"),
    (Booking, "bookings"),
)


class ContractArchiveService:
    """
    Soft-delete lifecycle of the contract aggregate.

    A contract moves between ACTIVE and ARCHIVED any number of times and
    leaves the store only through a permanent delete. Bookings and package
    reservations follow their contract. Every public method returns an
    ArchiveResult; expected failures never raise.
    """

    def __init__(self, db: Session, config: Optional[ArchiveConfig] = None):
        self.db = db
        self.config = config or ArchiveConfig()
        self.activity = ActivityLogService(db)

    def archive_contract(
        self,
        contract_id: int,
        user_id: Optional[str],
        reason: Optional[str] = DEFAULT_ARCHIVE_REASON
    ) -> ArchiveResult:
        """
        Archive a contract and cascade the archive to its bookings and
        package reservations.

        Args:
            contract_id: ID of the contract to archive
            user_id: ID of the user performing the archive
            reason: Free-text reason stored on the contract, the default
                reason when None or blank

        Returns:
            ArchiveResult with the archived contract as data
        """
        now = get_current_datetime()
        if not reason or not reason.strip():
            reason = DEFAULT_ARCHIVE_REASON
        try:
            if not user_id:
                raise ArchiveError(ArchiveErrorCode.INVALID_ARGUMENT, "user_id is required to archive a contract")

            archived = self._transition_contract(
                contract_id,
                expected_archived=False,
                values=self._archive_values(now, user_id, reason)
            )
            if not archived:
                raise ArchiveError(ArchiveErrorCode.NOT_FOUND_OR_ALREADY_ARCHIVED)

            warnings = self._cascade(
                contract_id,
                expected_archived=False,
                values=self._archive_values(
                    now, user_id, CASCADE_REASON_TEMPLATE.format(reason=reason)),
                action="archiving"
            )

            contract = self._load_contract(contract_id)
            self.activity.log_activity(
                action_category="contract",
                action_type="archived",
                description=f"Archived contract {contract.contract_number or contract.id}",
                partner_uuid=contract.partner_uuid,
                user_id=user_id,
                entity_id=str(contract.id),
                entity_type="contracts",
                details=self._contract_details(contract, archive_reason=reason)
            )
            self.db.commit()
        except (ArchiveError, SQLAlchemyError) as e:
            return self._failure("archive_contract", "Failed to archive contract", e)

        logger.info(f"Contract {contract_id} archived by user {user_id}")
        return ArchiveResult(
            success=True,
            data=ContractRead.model_validate(contract),
            warnings=warnings
        )

    def restore_contract(self, contract_id: int, user_id: str) -> ArchiveResult:
        """
        Restore an archived contract and its bookings and package
        reservations.

        The archive reason is cleared with the rest of the archive fields.
        With `retain_archive_reason_on_restore` the cleared reason is kept in
        the restore activity entry.
        """
        now = get_current_datetime()
        try:
            previous_reason = None
            if self.config.retain_archive_reason_on_restore:
                previous_reason = self.db.exec(
                    select(Contract.archive_reason).where(Contract.id == contract_id)
                ).first()

            restored = self._transition_contract(
                contract_id,
                expected_archived=True,
                values=self._restore_values(now)
            )
            if not restored:
                raise ArchiveError(ArchiveErrorCode.NOT_FOUND_OR_NOT_ARCHIVED)

            warnings = self._cascade(
                contract_id,
                expected_archived=True,
                values=self._restore_values(now),
                action="restoring"
            )

            contract = self._load_contract(contract_id)
            details = self._contract_details(contract)
            if self.config.retain_archive_reason_on_restore:
                details["previous_archive_reason"] = previous_reason
            self.activity.log_activity(
                action_category="contract",
                action_type="restored",
                description=f"Restored contract {contract.contract_number or contract.id}",
                partner_uuid=contract.partner_uuid,
                user_id=user_id,
                entity_id=str(contract.id),
                entity_type="contracts",
                details=details
            )
            self.db.commit()
        except (ArchiveError, SQLAlchemyError) as e:
            return self._failure("restore_contract", "Failed to restore contract", e)

        logger.info(f"Contract {contract_id} restored by user {user_id}")
        return ArchiveResult(
            success=True,
            data=ContractRead.model_validate(contract),
            warnings=warnings
        )

    def get_archived_contracts(
        self,
        partner_uuid: Optional[str],
        user_role: Union[UserRole, str],
        user_id: Optional[str] = None
    ) -> ArchiveResult:
        """
        List archived contracts visible to the caller, most recently
        archived first.

        Args:
            partner_uuid: Partner the caller administers (admin role)
            user_role: 'user', 'admin' or 'superadmin'
            user_id: Auth user of the caller (user role)
        """
        try:
            role = self._parse_role(user_role)
            query = (
                select(Contract)
                .where(Contract.is_archived == True)  # noqa: E712
                .options(
                    selectinload(Contract.customer),
                    selectinload(Contract.service),
                    selectinload(Contract.location)
                )
                .order_by(Contract.archived_at.desc(), Contract.id.desc())
            )

            if role == UserRole.USER:
                customer = None
                if user_id:
                    customer = self.db.exec(
                        select(Customer).where(Customer.user_id == user_id)
                    ).first()
                if not customer:
                    return ArchiveResult(success=True, data=[])
                query = query.where(Contract.customer_id == customer.id)
            elif role == UserRole.ADMIN:
                query = query.where(Contract.partner_uuid == partner_uuid)
            elif role == UserRole.SUPERADMIN:
                # Platform operators see every partner's archive
                pass
            else:
                raise ArchiveError(ArchiveErrorCode.INVALID_ROLE, f"Unsupported user role: {role.value}")

            contracts = self.db.exec(query).all()
        except (ArchiveError, SQLAlchemyError) as e:
            return self._failure("get_archived_contracts", "Failed to fetch archived contracts", e)

        return ArchiveResult(
            success=True,
            data=[ContractRead.model_validate(contract) for contract in contracts]
        )

    def get_archive_analytics(self, partner_uuid: str) -> ArchiveResult:
        """
        Summarize the archived contracts of a partner.

        Contracts whose service type is not one of the known types are part
        of the totals but not of the per-type breakdown.
        """
        try:
            rows = self.db.exec(
                select(Contract.archived_at, Contract.service_type, Contract.service_cost)
                .where(
                    Contract.partner_uuid == partner_uuid,
                    Contract.is_archived == True  # noqa: E712
                )
            ).all()
        except SQLAlchemyError as e:
            return self._failure("get_archive_analytics", "Failed to fetch archive analytics", e)

        analytics = ArchiveAnalytics(total_archived=len(rows))
        now = get_current_datetime()

        for archived_at, service_type, service_cost in rows:
            if is_same_year(archived_at, now):
                analytics.archived_this_year += 1
                if is_same_month(archived_at, now):
                    analytics.archived_this_month += 1

            analytics.total_archived_value += service_cost or 0

            if service_type in analytics.by_service_type:
                analytics.by_service_type[service_type] += 1

        return ArchiveResult(success=True, data=analytics)

    def get_purge_candidates(
        self,
        days_old: Optional[int] = None,
        partner_uuid: Optional[str] = None
    ) -> ArchiveResult:
        """Get the IDs a purge with the same arguments would delete"""
        try:
            contract_ids = self._find_purge_candidates(self._retention_days(days_old), partner_uuid)
        except (ArchiveError, SQLAlchemyError) as e:
            return self._failure("get_purge_candidates", "Failed to find old archived contracts", e)
        return ArchiveResult(
            success=True,
            data=PurgeSummary(deleted_count=0, contract_ids=contract_ids)
        )

    def permanently_delete_old_archived(
        self,
        days_old: Optional[int] = None,
        partner_uuid: Optional[str] = None
    ) -> ArchiveResult:
        """
        Permanently delete contracts archived more than `days_old` days ago,
        together with their package reservations and bookings.

        Args:
            days_old: Retention window in days, `retention_days` when omitted
            partner_uuid: Restrict the purge to one partner

        Returns:
            ArchiveResult with a PurgeSummary as data
        """
        try:
            days_old = self._retention_days(days_old)
            contract_ids = self._find_purge_candidates(days_old, partner_uuid)
            if not contract_ids:
                return ArchiveResult(success=True, data=PurgeSummary(deleted_count=0))

            self._delete_contracts(contract_ids)
            self.activity.log_activity(
                action_category="contract",
                action_type="purged",
                description=f"Permanently deleted {len(contract_ids)} contracts archived more than {days_old} days ago",
                partner_uuid=partner_uuid,
                entity_type="contracts",
                details={"contract_ids": contract_ids, "days_old": days_old}
            )
            self.db.commit()
        except (ArchiveError, SQLAlchemyError) as e:
            return self._failure(
                "permanently_delete_old_archived", "Failed to permanently delete contracts", e)

        logger.info(f"Permanently deleted {len(contract_ids)} archived contracts")
        return ArchiveResult(
            success=True,
            data=PurgeSummary(deleted_count=len(contract_ids), contract_ids=contract_ids)
        )

    def permanently_delete_contract(self, contract_id: int, user_id: str) -> ArchiveResult:
        """Permanently delete one archived contract and its dependents"""
        try:
            contract = self.db.exec(
                select(Contract).where(
                    Contract.id == contract_id,
                    Contract.is_archived == True  # noqa: E712
                )
            ).first()
            if not contract:
                raise ArchiveError(ArchiveErrorCode.NOT_FOUND_OR_NOT_ARCHIVED)

            details = self._contract_details(contract, archive_reason=contract.archive_reason)
            partner_uuid = contract.partner_uuid
            description = f"Permanently deleted contract {contract.contract_number or contract.id}"

            self._delete_contracts([contract_id])
            self.activity.log_activity(
                action_category="contract",
                action_type="deleted",
                description=description,
                partner_uuid=partner_uuid,
                user_id=user_id,
                entity_id=str(contract_id),
                entity_type="contracts",
                details=details
            )
            self.db.commit()
        except (ArchiveError, SQLAlchemyError) as e:
            return self._failure("permanently_delete_contract", "Failed to permanently delete contract", e)

        logger.info(f"Contract {contract_id} permanently deleted by user {user_id}")
        return ArchiveResult(success=True, data=PurgeSummary(deleted_count=1, contract_ids=[contract_id]))

    def _transition_contract(self, contract_id: int, expected_archived: bool, values: Dict[str, Any]) -> bool:
        """
        Apply `values` to the contract only if its archive flag still holds
        `expected_archived`. The check and the write are one statement.
        """
        result = self.db.exec(
            update(Contract)
            .where(
                Contract.id == contract_id,
                Contract.is_archived == expected_archived
            )
            .values(**values)
            .execution_options(synchronize_session="evaluate")
        )
        return result.rowcount == 1

    def _cascade(
        self,
        contract_id: int,
        expected_archived: bool,
        values: Dict[str, Any],
        action: str
    ) -> List[str]:
        """
        Propagate a contract transition to its dependents.

        Returns the warnings of dependents that could not be updated. In
        atomic mode the first failure aborts the whole operation instead.
        """
        warnings = []
        for model, label in reversed(DEPENDENT_MODELS):
            try:
                self._cascade_with_retry(model, contract_id, expected_archived, values)
            except SQLAlchemyError as e:
                message = f"Error {action} related {label}: {e}"
                if self.config.cascade_mode == CascadeMode.ATOMIC:
                    raise ArchiveError(ArchiveErrorCode.DEPENDENT_CASCADE_FAILURE, message) from e
                logger.error(message)
                warnings.append(message)
        return warnings

    def _cascade_with_retry(self, model, contract_id: int, expected_archived: bool, values: Dict[str, Any]) -> int:
        attempts = self.config.cascade_max_attempts
        for attempt in range(1, attempts + 1):
            try:
                with self.db.begin_nested():
                    return self._apply_cascade(model, contract_id, expected_archived, values)
            except SQLAlchemyError as e:
                if attempt == attempts:
                    raise
                logger.warning(
                    f"Cascade to {model.__tablename__} for contract {contract_id} failed "
                    f"(attempt {attempt}/{attempts}): {e}")

    def _apply_cascade(self, model, contract_id: int, expected_archived: bool, values: Dict[str, Any]) -> int:
        result = self.db.exec(
            update(model)
            .where(
                model.contract_id == contract_id,
                model.is_archived == expected_archived
            )
            .values(**values)
            .execution_options(synchronize_session="evaluate")
        )
        return result.rowcount

    def _find_purge_candidates(self, days_old: int, partner_uuid: Optional[str]) -> List[int]:
        query = select(Contract.id).where(
            Contract.is_archived == True,  # noqa: E712
            Contract.archived_at < get_cutoff_datetime(days_old)
        )
        if partner_uuid is not None:
            query = query.where(Contract.partner_uuid == partner_uuid)
        return list(self.db.exec(query.order_by(Contract.id)).all())

    def _delete_contracts(self, contract_ids: List[int]) -> None:
        """
        Delete contracts and their dependents in chunks. Within a chunk,
        package reservations and bookings go before the contracts that
        they reference.
        """
        batch_size = self.config.purge_batch_size
        for start in range(0, len(contract_ids), batch_size):
            chunk = contract_ids[start:start + batch_size]

            for model, label in DEPENDENT_MODELS:
                self.db.exec(
                    delete(model)
                    .where(model.contract_id.in_(chunk))
                    .execution_options(synchronize_session=False)
                )

            result = self.db.exec(
                delete(Contract)
                .where(
                    Contract.id.in_(chunk),
                    Contract.is_archived == True  # noqa: E712
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != len(chunk):
                # A contract was restored or removed meanwhile
                raise ArchiveError(
                    ArchiveErrorCode.CONCURRENT_MODIFICATION,
                    f"Expected to delete {len(chunk)} archived contracts, found {result.rowcount}"
                )

    def _load_contract(self, contract_id: int) -> Contract:
        return self.db.exec(
            select(Contract)
            .where(Contract.id == contract_id)
            .options(
                selectinload(Contract.customer),
                selectinload(Contract.service),
                selectinload(Contract.location)
            )
            .execution_options(populate_existing=True)
        ).one()

    def _retention_days(self, days_old: Optional[int]) -> int:
        if days_old is None:
            return self.config.retention_days
        if days_old < 0:
            raise ArchiveError(ArchiveErrorCode.INVALID_ARGUMENT, "days_old must be zero or greater")
        return days_old

    def _failure(self, operation: str, prefix: str, error: Exception) -> ArchiveResult:
        """Roll back the unit of work and turn an error into a failed result"""
        self.db.rollback()
        if isinstance(error, ArchiveError):
            logger.warning(f"{operation}: {error.message}")
            return ArchiveResult(success=False, error=error.message, error_code=error.code)

        logger.error(f"Error in {operation}: {str(error)}")
        return ArchiveResult(
            success=False,
            error=f"{prefix}: {error}",
            error_code=ArchiveErrorCode.DATA_STORE_ERROR
        )

    @staticmethod
    def _parse_role(user_role: Union[UserRole, str]) -> UserRole:
        try:
            return UserRole(user_role)
        except ValueError:
            raise ArchiveError(ArchiveErrorCode.INVALID_ROLE, f"Unknown user role: {user_role}")

    @staticmethod
    def _archive_values(now, user_id: str, reason: str) -> Dict[str, Any]:
        return {
            "is_archived": True,
            "archived_at": now,
            "archived_by_user_id": user_id,
            "archive_reason": reason,
            "updated_at": now,
        }

    @staticmethod
    def _restore_values(now) -> Dict[str, Any]:
        return {
            "is_archived": False,
            "archived_at": None,
            "archived_by_user_id": None,
            "archive_reason": None,
            "updated_at": now,
        }

    @staticmethod
    def _contract_details(contract: Contract, **extra) -> Dict[str, Any]:
        details = {
            "contract_number": contract.contract_number,
            "customer_id": contract.customer_id,
            "service_name": contract.service_name,
            "service_type": contract.service_type,
            "start_date": contract.start_date.isoformat() if contract.start_date else None,
            "end_date": contract.end_date.isoformat() if contract.end_date else None,
        }
        details.update(extra)
        return details
