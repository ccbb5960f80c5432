"""
Employee CRUD API routes
All database access goes through the employees service.
"""

import logging
from typing import List, Optional
from fastapi import APIRouter, HTTPException, Depends, Request

from employee_directory.models.employee import (
    EmployeeRequest,
    EmployeeResponse,
    EmployeeCreatedResponse,
    EmployeeUpdatedResponse,
    MessageResponse
)
from employee_directory.services.base_service import ServiceResult, INVALID_INPUT, RESOURCE_NOT_FOUND, CONFLICT
from employee_directory.services.employees_service import EmployeesService

router = APIRouter()
logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Employee not found"
DUPLICATE_EMAIL_MESSAGE = "Email already exists"


def get_employees_service(request: Request) -> EmployeesService:
    """Build the service around the connection owned by the application"""
    return EmployeesService(request.app.state.database)


def raise_for_result(result: ServiceResult, failure_message: str) -> None:
    """Map a failed ServiceResult onto the HTTP error contract"""
    if result.success:
        return
    if result.error_type == INVALID_INPUT:
        raise HTTPException(status_code=400, detail=result.error)
    if result.error_type == RESOURCE_NOT_FOUND:
        raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE)
    if result.error_type == CONFLICT:
        raise HTTPException(status_code=400, detail=DUPLICATE_EMAIL_MESSAGE)
    raise HTTPException(status_code=500, detail=failure_message)


@router.get("", response_model=List[EmployeeResponse])
async def list_employees(service: EmployeesService = Depends(get_employees_service)):
    """Get all employees, newest first"""
    result = await service.list_employees()
    raise_for_result(result, "Failed to fetch employees")
    return result.data


@router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    employee_id: str,
    service: EmployeesService = Depends(get_employees_service)
):
    """Get a single employee"""
    result = await service.get_employee(employee_id)
    raise_for_result(result, "Failed to fetch employee")
    return result.data[0]


@router.post("", response_model=EmployeeCreatedResponse, status_code=201)
async def create_employee(
    request: Optional[EmployeeRequest] = None,
    service: EmployeesService = Depends(get_employees_service)
):
    """Create a new employee"""
    request = request or EmployeeRequest()
    result = await service.create_employee(
        name=request.name,
        email=request.email,
        phone=request.phone
    )
    raise_for_result(result, "Failed to create employee")
    return EmployeeCreatedResponse(**result.data[0])


@router.put("/{employee_id}", response_model=EmployeeUpdatedResponse)
async def update_employee(
    employee_id: str,
    request: Optional[EmployeeRequest] = None,
    service: EmployeesService = Depends(get_employees_service)
):
    """Update name, email and phone of an employee"""
    # No body at all is treated like an empty JSON object
    request = request or EmployeeRequest()
    result = await service.update_employee(
        employee_id,
        name=request.name,
        email=request.email,
        phone=request.phone
    )
    raise_for_result(result, "Failed to update employee")
    return EmployeeUpdatedResponse(**result.data[0])


@router.delete("/{employee_id}", response_model=MessageResponse)
async def delete_employee(
    employee_id: str,
    service: EmployeesService = Depends(get_employees_service)
):
    """Delete an employee"""
    result = await service.delete_employee(employee_id)
    raise_for_result(result, "Failed to delete employee")
    return MessageResponse(message="Employee deleted successfully")
