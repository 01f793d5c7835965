from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str
    full_name: str
    phone_number: str | None = None
    address: str | None = None

    @field_validator("password")
    @classmethod
    def password_min_length(cls, v: str) -> str:
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        return v

    @field_validator("full_name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name must not be empty")
        return v


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds until access token expires


class RefreshRequest(BaseModel):
    refresh_token: str


class UserResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "665f1c2e8b3a4d0012ab34cd",
                "full_name": "Người Dùng 1",
                "email": "user1@timsachnhabe.com",
                "phone_number": "0900000002",
                "address": "Quận 1, TP. Hồ Chí Minh",
                "role": "user",
                "created_at": "2026-01-15T10:30:00Z",
            }
        }
    )

    id: str
    full_name: str
    email: str
    phone_number: str | None = None
    address: str | None = None
    role: str
    created_at: datetime | None = None
