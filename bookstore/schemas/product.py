"""Pydantic schemas for Product (book) resources."""

from pydantic import BaseModel, ConfigDict, Field

_EXAMPLE_PRODUCT = {
    "isbn": 9786041234567,
    "title": "Dế Mèn Phiêu Lưu Ký",
    "publisher": "NXB Kim Đồng",
    "author": "Tô Hoài",
    "page_count": 200,
    "weight": "250g",
    "price": 60000,
    "description": "Tác phẩm kinh điển thiếu nhi Việt Nam",
    "image_url": "/images/de-men-phieu-luu-ky.jpg",
    "catalog": "KID",
    "stock": 100,
}


class ProductCreate(BaseModel):
    model_config = ConfigDict(json_schema_extra={"example": _EXAMPLE_PRODUCT})

    isbn: int = Field(..., ge=1_000_000_000, le=9_999_999_999_999)
    title: str = Field(..., min_length=1, max_length=300)
    publisher: str | None = None
    author: str | None = None
    page_count: int | None = Field(None, ge=1)
    weight: str | None = None
    price: int = Field(..., ge=0)
    description: str | None = None
    image_url: str | None = None
    catalog: str
    stock: int = Field(0, ge=0)


class ProductUpdate(BaseModel):
    model_config = ConfigDict(json_schema_extra={"example": {"price": 55000, "stock": 120}})

    title: str | None = Field(None, min_length=1, max_length=300)
    publisher: str | None = None
    author: str | None = None
    page_count: int | None = Field(None, ge=1)
    weight: str | None = None
    price: int | None = Field(None, ge=0)
    description: str | None = None
    image_url: str | None = None
    catalog: str | None = None
    stock: int | None = Field(None, ge=0)


class ProductResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {"id": "665f1c2e8b3a4d0012ab34c1", **_EXAMPLE_PRODUCT, "sold_count": 0}
        }
    )

    id: str
    isbn: int
    title: str
    publisher: str | None = None
    author: str | None = None
    page_count: int | None = None
    weight: str | None = None
    price: int
    description: str | None = None
    image_url: str | None = None
    catalog: str
    sold_count: int = 0
    stock: int = 0
