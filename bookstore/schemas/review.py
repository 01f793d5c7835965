from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ReviewCreate(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {"book_id": 9786041234567, "rating": 5, "comment": "Sách rất hay, đáng đọc"}
        }
    )

    book_id: int
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field("", max_length=2000)


class ReviewResponse(BaseModel):
    id: str
    book_id: int
    rating: int
    comment: str
    user_id: str | None = None
    created_at: datetime | None = None
