# app/schemas/auth.py
from pydantic import BaseModel
from app.schemas.user import UserOut

class AuthOut(BaseModel):
    user: UserOut
    token: str

class MessageOut(BaseModel):
    message: str
