"""
Pydantic schemas for request/response validation in the Orders service.

Orders are stored with snake_case columns and an encoded ``items`` string but
exposed with camelCase names and a real list; the aliases and the ``items``
validator below do that re-shaping, and responses are serialized by alias.
"""
import json
from datetime import datetime
from enum import Enum
from typing import Optional, List, Dict, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import MAX_INTEGER, MIN_INTEGER


class OrderStatus(str, Enum):
    """Lifecycle states of an order."""
    PENDING = "pending"
    PROCESSING = "processing"
    ON_DELIVERY = "on_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class OrderCreate(BaseModel):
    """Schema for creating a new order. Status is always set to pending."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(..., alias="userId", ge=MIN_INTEGER, le=MAX_INTEGER, examples=[1])
    restaurant_name: str = Field(..., alias="restaurantName", min_length=1, examples=["Sate Padang Ajo Ramon"])
    items: List[str] = Field(..., examples=[["Sate Padang", "Lontong", "Es Teh"]])
    total_price: int = Field(..., alias="totalPrice", ge=0, le=MAX_INTEGER, examples=[50000])


class OrderUpdate(BaseModel):
    """Schema for updating an existing order. Only supplied fields are written."""
    model_config = ConfigDict(populate_by_name=True)

    status: Optional[OrderStatus] = None
    restaurant_name: Optional[str] = Field(default=None, alias="restaurantName", min_length=1)
    items: Optional[List[str]] = None
    total_price: Optional[int] = Field(default=None, alias="totalPrice", ge=0, le=MAX_INTEGER)


class Order(BaseModel):
    """
    Schema for order responses in external shape.

    Attributes:
        id (int): Order's unique identifier
        user_id (int): userId, ID of the ordering user
        restaurant_name (str): restaurantName
        items (List[str]): Ordered item names, decoded from storage
        total_price (int): totalPrice
        status (OrderStatus): Order status
        created_at (datetime): createdAt, when the order was created
    """
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    user_id: int = Field(..., alias="userId")
    restaurant_name: str = Field(..., alias="restaurantName")
    items: List[str]
    total_price: int = Field(..., alias="totalPrice")
    status: OrderStatus
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    @field_validator("items", mode="before")
    @classmethod
    def decode_items(cls, value):
        if isinstance(value, str):
            return json.loads(value)
        return value


class OrderWithUser(Order):
    """Order plus the user record fetched live from the Users service."""
    user_details: Dict[str, Any] = Field(..., alias="userDetails")


class OrderResponse(BaseModel):
    success: bool = True
    data: Order


class OrderListResponse(BaseModel):
    success: bool = True
    data: List[Order]


class OrderWithUserResponse(BaseModel):
    success: bool = True
    data: OrderWithUser


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class HealthResponse(BaseModel):
    success: bool = True
    message: str
    timestamp: str
