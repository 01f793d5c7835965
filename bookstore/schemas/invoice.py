from datetime import datetime

from pydantic import BaseModel, ConfigDict


class InvoiceCreate(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {"order_id": "665f1c2e8b3a4d0012ab34d0", "coupon_code": "WELCOME10"}
        }
    )

    order_id: str
    coupon_code: str | None = None


class InvoiceResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "665f1c2e8b3a4d0012ab34e0",
                "order_id": "665f1c2e8b3a4d0012ab34d0",
                "order_date": "2026-01-15T10:30:00Z",
                "payment_date": "2026-01-15T10:30:00Z",
                "full_name": "Người Dùng 1",
                "email": "user1@timsachnhabe.com",
                "product_total": 240000,
                "discount_amount": 10000,
                "final_amount": 230000,
                "payment_method": "COD",
            }
        }
    )

    id: str
    order_id: str
    order_date: datetime
    payment_date: datetime
    full_name: str
    email: str
    product_total: int
    discount_amount: int
    final_amount: int
    payment_method: str
