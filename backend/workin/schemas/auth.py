from __future__ import annotations

from pydantic import BaseModel, Field


class SignupRequest(BaseModel):
    name: str = Field(default="", max_length=120)
    email: str = Field(default="", max_length=255)
    phone_number: str = Field(default="", max_length=40)
    password: str = Field(default="", max_length=256)
    confirm_password: str = Field(default="", max_length=256)
    role: str = "candidate"


class LoginRequest(BaseModel):
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1, max_length=256)


class AuthResponse(BaseModel):
    message: str
    token: str
    token_type: str = "bearer"
    name: str
    role: str


class MeResponse(BaseModel):
    id: int
    name: str
    email: str
    phone_number: str
    role: str


class UserProfileOut(BaseModel):
    name: str
    email: str
    phone_number: str

    class Config:
        from_attributes = True
