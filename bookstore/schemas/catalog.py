"""Pydantic schemas for Catalog resources."""

from pydantic import BaseModel, ConfigDict, Field


class CatalogCreate(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={"example": {"code": "FIC", "name": "Tiểu thuyết"}}
    )

    code: str = Field(..., min_length=1, max_length=10, pattern=r"^[A-Z0-9_]+$")
    name: str = Field(..., min_length=1, max_length=100)


class CatalogResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {"id": "665f1c2e8b3a4d0012ab34c0", "code": "FIC", "name": "Tiểu thuyết"}
        }
    )

    id: str
    code: str
    name: str
