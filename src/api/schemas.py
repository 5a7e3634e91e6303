from pydantic import BaseModel, Field


# --- Requests ---
# Fields default to "" so missing values reach the auth component and come
# back as field-specific validation errors.
class RegisterRequest(BaseModel):
    email: str = ""
    username: str = ""
    password: str = Field(default="", repr=False)


class LoginRequest(BaseModel):
    email: str = ""  # email or username
    password: str = Field(default="", repr=False)


# --- Responses ---
class UserResponse(BaseModel):
    id: int
    email: str
    username: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
