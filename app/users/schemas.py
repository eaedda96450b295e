from pydantic import BaseModel, Field
from pydantic.networks import validate_email
from datetime import datetime, timezone
from pydantic import validator


# -------- AUTH --------
class RegisterRequest(BaseModel):
    name: str = Field(..., max_length=100)
    email: str = Field(..., max_length=255)
    password: str = Field(..., min_length=1)

    @validator("name")
    def name_not_blank(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @validator("email")
    def email_well_formed(cls, v):
        # Checked like EmailStr, but stored exactly as sent so login matches it
        validate_email(v)
        return v


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class AuthResponse(BaseModel):
    token: str
    name: str
    email: str


# -------- USERS --------
class UserDisplaySchema(BaseModel):
    id: int
    name: str
    email: str
    created_at: datetime = Field(serialization_alias="createdAt")

    @validator("created_at")
    def assume_utc(cls, v):
        # SQLite hands timestamps back without an offset
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    class Config:
        from_attributes = True
