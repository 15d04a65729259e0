from pydantic import BaseModel, EmailStr, Field


class UserCreate(BaseModel):
    email: EmailStr = Field(..., description="User's email address")
    name: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=8, max_length=72, description="Plain password (will be hashed). Minimum 8 characters.")


class RegisterResponse(BaseModel):
    id: str
    name: str


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    token: str
    token_type: str = "bearer"


class ProfileResponse(BaseModel):
    id: str
    name: str
    email: EmailStr

    class Config:
        from_attributes = True


class GoogleUserInfo(BaseModel):
    """Subset of Google's /oauth2/v2/userinfo payload."""

    id: str | None = None
    email: EmailStr
    verified_email: bool = False
    name: str | None = None
    picture: str | None = None
