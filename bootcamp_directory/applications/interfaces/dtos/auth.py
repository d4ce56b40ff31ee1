from pydantic import BaseModel, EmailStr


class LoginSchema(BaseModel):
    email: EmailStr
    password: str


class Token(BaseModel):
    success: bool = True
    access_token: str
    token_type: str = "bearer"
