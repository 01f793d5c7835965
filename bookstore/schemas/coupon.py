from datetime import datetime
from typing import Literal, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

CouponType = Literal["percent", "fixed", "shipping"]


class CouponCreate(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "code": "WELCOME10",
                "name": "Giảm 10% cho đơn đầu tiên",
                "type": "percent",
                "amount": 10,
                "start_date": "2026-01-01T00:00:00Z",
                "end_date": "2026-12-31T23:59:59Z",
                "description": "Áp dụng cho tất cả khách hàng mới",
            }
        }
    )

    code: str = Field(..., min_length=1, max_length=30)
    name: str = Field(..., min_length=1, max_length=200)
    type: CouponType
    amount: int = Field(..., ge=0)
    start_date: datetime
    end_date: datetime
    description: str | None = None

    @model_validator(mode="after")
    def check_window_and_amount(self) -> Self:
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        if self.type == "percent" and self.amount > 100:
            raise ValueError("percent coupons cannot exceed 100")
        return self


class CouponResponse(BaseModel):
    id: str
    code: str
    name: str
    type: str
    amount: int
    start_date: datetime
    end_date: datetime
    description: str | None = None
