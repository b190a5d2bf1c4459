import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Depends, Response, status
from sqlalchemy.orm import Session

from app.config.settings import Settings
from app.database import get_db
from app.models.user import User
from app.schemas.user import UserCreate, UserLogin
from app.schemas.tokens import AuthResponse
from app.utils.auth import get_settings, send_token, clear_session_cookie, auth_error

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(
    user: UserCreate,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    existing_user = db.query(User).filter(User.email == user.email).first()
    if existing_user:
        raise HTTPException(status_code=400, detail="Email already registered")

    new_user = User(name=user.name, email=user.email)
    new_user.set_password(user.password, rounds=settings.bcrypt_rounds)

    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    logger.info("User %s signed up", new_user.id)
    token = send_token(new_user, response, settings)
    return {"status": "success", "token": token, "user": new_user}


@router.post("/login", response_model=AuthResponse)
def login(
    response: Response,
    credentials: Optional[UserLogin] = None,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    credentials = credentials or UserLogin()
    if not credentials.email or not credentials.password:
        raise auth_error("Please enter email and password")

    db_user = db.query(User).filter(User.email == credentials.email.strip().lower()).first()
    # Same message for unknown email and wrong password
    if not db_user or not db_user.check_password(credentials.password):
        raise auth_error("Invalid email or password")

    token = send_token(db_user, response, settings)
    return {"status": "success", "token": token, "user": db_user}


@router.get("/logout")
def logout(response: Response, settings: Settings = Depends(get_settings)):
    clear_session_cookie(response, settings)
    return {"status": "success"}
