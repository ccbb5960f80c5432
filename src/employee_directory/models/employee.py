"""
Employee Pydantic models
"""

from typing import Optional
from datetime import datetime
from pydantic import BaseModel

class EmployeeRequest(BaseModel):
    # Presence of name and email is checked by the service so that a missing
    # field is reported as a 400 with a readable message
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

class EmployeeResponse(BaseModel):
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    created_at: Optional[datetime] = None

class EmployeeCreatedResponse(EmployeeResponse):
    message: str = "Employee created successfully"

class EmployeeUpdatedResponse(EmployeeResponse):
    message: str = "Employee updated successfully"

class MessageResponse(BaseModel):
    message: str

class ErrorResponse(BaseModel):
    error: str
