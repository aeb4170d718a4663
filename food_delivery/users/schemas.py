"""
Pydantic schemas for request/response validation in the Users service.

These schemas define the structure of data for API requests and responses.
Every response is wrapped in the ``{"success": ..., "data": ...}`` envelope.
"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field

class UserBase(BaseModel):
    """Base schema with common user attributes."""
    name: str = Field(..., min_length=1, examples=["Budi Santoso"])
    email: str = Field(..., min_length=1, examples=["budi@example.com"])
    phone: str = Field(..., min_length=1, examples=["081234567892"])
    address: str = Field(..., min_length=1, examples=["Jl. Gatot Subroto No. 10, Jakarta"])

class UserCreate(UserBase):
    """Schema for creating a new user. All fields are required and non-empty."""

class UserUpdate(BaseModel):
    """Schema for updating an existing user. Omitted fields keep their value."""
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = Field(default=None, min_length=1)
    phone: Optional[str] = Field(default=None, min_length=1)
    address: Optional[str] = Field(default=None, min_length=1)

class User(UserBase):
    """
    Schema for user responses, mirrors the stored row.

    Attributes:
        id (int): User's unique identifier
        created_at (datetime): When the user was created
    """
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: Optional[datetime] = None

class UserResponse(BaseModel):
    success: bool = True
    data: User

class UserListResponse(BaseModel):
    success: bool = True
    data: List[User]

class MessageResponse(BaseModel):
    success: bool = True
    message: str

class HealthResponse(BaseModel):
    success: bool = True
    message: str
    timestamp: str
