# app/routers/user.py
import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from app.config.settings import Settings
from app.database import get_db
from app.models.user import User
from app.schemas.user import PasswordUpdate, UserUpdateMe, UserResponse
from app.schemas.tokens import AuthResponse
from app.utils.auth import get_current_user, get_settings, send_token

logger = logging.getLogger(__name__)

router = APIRouter()

ADMIN_ROLE = "admin"


@router.get("/me", response_model=UserResponse)
def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information"""
    return {"status": "success", "user": current_user}


@router.patch("/updateMyPassword", response_model=AuthResponse)
def update_my_password(
    payload: PasswordUpdate,
    response: Response,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    current_user: User = Depends(get_current_user),
):
    """Re-authenticate with the current password, then replace it and reissue the token"""
    user = db.get(User, current_user.id)

    if not payload.password or not user.check_password(payload.password):
        raise HTTPException(status_code=400, detail="Current password is incorrect")

    user.set_password(payload.new_password, rounds=settings.bcrypt_rounds)
    db.commit()
    db.refresh(user)

    logger.info("User %s changed password", user.id)
    token = send_token(user, response, settings)
    return {"status": "success", "token": token, "user": user}


@router.patch("/updateMe", response_model=UserResponse)
def update_me(
    payload: UserUpdateMe,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update the caller's profile; only name, email and status are accepted"""
    update_data = payload.model_dump(exclude_unset=True, exclude_none=True)

    new_email = update_data.get("email")
    if new_email and new_email != current_user.email:
        taken = db.query(User).filter(User.email == new_email, User.id != current_user.id).first()
        if taken:
            raise HTTPException(status_code=400, detail="Email already registered")

    for key, value in update_data.items():
        setattr(current_user, key, value)

    db.commit()
    db.refresh(current_user)
    return {"status": "success", "user": current_user}


@router.delete("/deleteMe/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete an account. Users may delete themselves; admins may delete anyone."""
    if current_user.id != user_id and current_user.role != ADMIN_ROLE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You do not have permission to perform this action",
        )

    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="No user found with that ID")

    db.delete(user)
    db.commit()

    logger.info("User %s deleted by %s", user_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
