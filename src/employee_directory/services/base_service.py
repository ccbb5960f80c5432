"""
Base service layer shared by resource services
"""

import logging
from typing import Dict, Any, List, Optional
from dataclasses import dataclass

import asyncpg

from employee_directory.database.connection import DatabaseConnection

logger = logging.getLogger(__name__)

# Error types reported in ServiceResult.error_type
INVALID_INPUT = "INVALID_INPUT"
RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
CONFLICT = "CONFLICT"
DATABASE_ERROR = "DATABASE_ERROR"

@dataclass
class ServiceResult:
    """Result from service operation"""
    success: bool
    data: Optional[List[Dict[str, Any]]] = None
    count: int = 0
    error: Optional[str] = None
    error_type: Optional[str] = None

def is_unique_violation(exc: BaseException) -> bool:
    """Whether a store failure means a uniqueness constraint rejected the write"""
    return isinstance(exc, asyncpg.UniqueViolationError)

class BaseService:
    """Base service holding the database handle and result helpers"""

    def __init__(self, resource_name: str, database: DatabaseConnection):
        self.resource_name = resource_name
        self.database = database

    @staticmethod
    def serialize_row(row: Dict[str, Any]) -> Dict[str, Any]:
        """Convert datetime values to ISO strings"""
        return {
            key: value.isoformat() if hasattr(value, 'isoformat') else value
            for key, value in row.items()
        }

    def ok(self, rows: List[Dict[str, Any]]) -> ServiceResult:
        data = [self.serialize_row(row) for row in rows]
        return ServiceResult(success=True, data=data, count=len(data))

    def not_found(self, record_id: Any) -> ServiceResult:
        return ServiceResult(
            success=False,
            error=f"Record not found with ID: {record_id}",
            error_type=RESOURCE_NOT_FOUND
        )

    def failure(self, operation: str, exc: Exception) -> ServiceResult:
        """Classify a store exception into a failed ServiceResult"""
        if is_unique_violation(exc):
            logger.warning(f"Unique constraint violation during {operation} on {self.resource_name}: {exc}")
            return ServiceResult(
                success=False,
                error="Record already exists",
                error_type=CONFLICT
            )

        logger.error(f"{operation.capitalize()} operation failed for {self.resource_name}: {exc}", exc_info=True)
        return ServiceResult(
            success=False,
            error=f"Database {operation} failed: {exc}",
            error_type=DATABASE_ERROR
        )
