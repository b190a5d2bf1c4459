# app/schemas/tokens.py
from pydantic import BaseModel
from app.schemas.user import UserOut

class AuthResponse(BaseModel):
    status: str = "success"
    token: str
    user: UserOut
