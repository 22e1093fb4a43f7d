# app/api/routes.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas.auth import AuthOut, MessageOut
from app.schemas.user import UserCreate, UserLogin
from app.services import auth as auth_service

router = APIRouter()

@router.get("/health")
def health():
    return {"status": "ok"}

@router.post("/api/auth/register", response_model=AuthOut, status_code=201, tags=["Auth"])
def register(user_in: UserCreate, db: Session = Depends(get_db)):
    """Create a new user plus profile and return a token"""
    return auth_service.register(db, user_in)

@router.post("/api/auth/login", response_model=AuthOut, tags=["Auth"])
def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """Authenticate user and return JWT"""
    return auth_service.login(db, credentials.email, credentials.password)

@router.post("/api/auth/logout", response_model=MessageOut, tags=["Auth"])
def logout():
    # tokens are stateless; the client drops its copy
    return {"message": "Logged out successfully"}
