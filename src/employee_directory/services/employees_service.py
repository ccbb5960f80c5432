"""
Employees service - business logic for the employee directory
"""

import logging
import re
from typing import Optional

from employee_directory.database.connection import DatabaseConnection
from employee_directory.services.base_service import BaseService, ServiceResult, INVALID_INPUT

logger = logging.getLogger(__name__)

# Plain ASCII digits only; int() would also take "1_0", " 1 " and non-ASCII digits
EMPLOYEE_ID_PATTERN = re.compile(r"[0-9]+")

# Largest value a SERIAL primary key can hold
MAX_EMPLOYEE_ID = 2**31 - 1

EMPLOYEE_COLUMNS = "id, name, email, phone, created_at"

LIST_EMPLOYEES_SQL = f"SELECT {EMPLOYEE_COLUMNS} FROM employees ORDER BY id DESC"
GET_EMPLOYEE_SQL = f"SELECT {EMPLOYEE_COLUMNS} FROM employees WHERE id = $1"
INSERT_EMPLOYEE_SQL = (
    "INSERT INTO employees (name, email, phone) VALUES ($1, $2, $3) "
    f"RETURNING {EMPLOYEE_COLUMNS}"
)
UPDATE_EMPLOYEE_SQL = (
    "UPDATE employees SET name = $1, email = $2, phone = $3 WHERE id = $4 "
    f"RETURNING {EMPLOYEE_COLUMNS}"
)
DELETE_EMPLOYEE_SQL = "DELETE FROM employees WHERE id = $1"


def parse_employee_id(employee_id: str) -> Optional[int]:
    """Return the integer key for a path id, or None if no row could have it"""
    if not isinstance(employee_id, str) or not EMPLOYEE_ID_PATTERN.fullmatch(employee_id):
        return None
    value = int(employee_id)
    if value < 1 or value > MAX_EMPLOYEE_ID:
        return None
    return value


class EmployeesService(BaseService):
    """Service for employee CRUD operations.

    Every method issues at most one statement. Failures never raise; they come
    back as a ServiceResult whose error_type tells the caller what went wrong.
    """

    def __init__(self, database: DatabaseConnection):
        super().__init__("employees", database)

    @staticmethod
    def _validate(name: Optional[str], email: Optional[str]) -> Optional[ServiceResult]:
        if not name or not email:
            return ServiceResult(
                success=False,
                error="Name and email are required",
                error_type=INVALID_INPUT
            )
        return None

    async def list_employees(self) -> ServiceResult:
        """Get all employees, newest first"""
        try:
            rows = await self.database.fetch(LIST_EMPLOYEES_SQL)
        except Exception as e:
            return self.failure("read", e)
        return self.ok(rows)

    async def get_employee(self, employee_id: str) -> ServiceResult:
        """Get a single employee by ID"""
        key = parse_employee_id(employee_id)
        if key is None:
            return self.not_found(employee_id)

        try:
            row = await self.database.fetchrow(GET_EMPLOYEE_SQL, key)
        except Exception as e:
            return self.failure("read", e)

        if row is None:
            return self.not_found(employee_id)
        return self.ok([row])

    async def create_employee(
        self,
        name: Optional[str],
        email: Optional[str],
        phone: Optional[str] = None
    ) -> ServiceResult:
        """
        Create a new employee

        Args:
            name: Full name (required)
            email: Email address (required, unique)
            phone: Phone number (optional)

        Returns:
            ServiceResult with the created record, including id and created_at
        """
        invalid = self._validate(name, email)
        if invalid:
            return invalid

        logger.info(f"Creating employee: {email}")
        try:
            row = await self.database.fetchrow(INSERT_EMPLOYEE_SQL, name, email, phone)
        except Exception as e:
            return self.failure("insert", e)
        return self.ok([row])

    async def update_employee(
        self,
        employee_id: str,
        name: Optional[str],
        email: Optional[str],
        phone: Optional[str] = None
    ) -> ServiceResult:
        """
        Replace the mutable fields of an employee

        Args:
            employee_id: Path ID of the employee
            name: New name (required)
            email: New email (required, unique)
            phone: New phone; None clears it

        Returns:
            ServiceResult with the updated record
        """
        invalid = self._validate(name, email)
        if invalid:
            return invalid

        key = parse_employee_id(employee_id)
        if key is None:
            return self.not_found(employee_id)

        try:
            row = await self.database.fetchrow(UPDATE_EMPLOYEE_SQL, name, email, phone, key)
        except Exception as e:
            return self.failure("update", e)

        if row is None:
            return self.not_found(employee_id)
        return self.ok([row])

    async def delete_employee(self, employee_id: str) -> ServiceResult:
        """Hard-delete an employee by ID"""
        key = parse_employee_id(employee_id)
        if key is None:
            return self.not_found(employee_id)

        try:
            deleted = await self.database.execute(DELETE_EMPLOYEE_SQL, key)
        except Exception as e:
            return self.failure("delete", e)

        if deleted == 0:
            return self.not_found(employee_id)
        logger.info(f"Deleted employee {key}")
        return ServiceResult(success=True, count=deleted)
