from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from akkuea_api.models.user import Role

MIN_PASSWORD_LENGTH = 6


class CreateUserRequest(BaseModel):
    name: str
    email: EmailStr
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)
    # parsed into Role by the handler so unknown roles fail as a business rule
    role: str = Field(min_length=1)

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Name is required.')
        return normalized

    @field_validator('email')
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    role: Role
    created_at: datetime

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    user: UserResponse
    token: str
