"""Pydantic schemas for Order resources."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

PaymentMethod = Literal["COD", "VNPAY", "MOMO", "BANK_TRANSFER"]
OrderStatus = Literal["pending", "processing", "shipping", "completed", "cancelled"]


class OrderItem(BaseModel):
    product_id: str
    quantity: int = Field(..., ge=1)


class OrderCreate(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "items": [
                    {"product_id": "665f1c2e8b3a4d0012ab34c1", "quantity": 1},
                    {"product_id": "665f1c2e8b3a4d0012ab34c2", "quantity": 2},
                ],
                "payment_method": "COD",
                "shipping_address": None,
            }
        }
    )

    items: list[OrderItem] = Field(..., min_length=1)
    payment_method: PaymentMethod = "COD"
    shipping_address: str | None = None


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class OrderResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "665f1c2e8b3a4d0012ab34d0",
                "user_id": "665f1c2e8b3a4d0012ab34cd",
                "items": [
                    {"product_id": "665f1c2e8b3a4d0012ab34c1", "quantity": 1},
                    {"product_id": "665f1c2e8b3a4d0012ab34c2", "quantity": 2},
                ],
                "total_amount": 240000,
                "payment_method": "COD",
                "shipping_address": "Quận 1, TP. Hồ Chí Minh",
                "status": "pending",
                "order_date": "2026-01-15T10:30:00Z",
                "created_at": "2026-01-15T10:30:00Z",
                "updated_at": "2026-01-15T10:30:00Z",
            }
        }
    )

    id: str
    user_id: str
    items: list[OrderItem]
    total_amount: int
    payment_method: str
    shipping_address: str
    status: str
    order_date: datetime
    created_at: datetime
    updated_at: datetime
