from fastapi import APIRouter, Depends, Request, status
from slowapi import Limiter
from slowapi.util import get_remote_address
from sqlalchemy.orm import Session

from ..config import settings
from ..core.exceptions import AuthenticationError, ValidationError
from ..database import get_db
from ..models import User
from ..schemas import AuthResponse, UserCreate, UserLogin, UserResponse
from ..utils.auth import create_access_token, get_current_user, get_password_hash, verify_password

# Rate limiter for auth endpoints (also installed on app.state in main)
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
    responses={
        401: {"description": "Not authenticated - invalid or missing credentials"},
        429: {"description": "Too many requests - rate limit exceeded"},
    }
)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("5/minute")  # Prevent signup abuse
def register(request: Request, payload: UserCreate, db: Session = Depends(get_db)):
    if db.query(User).filter(User.email == payload.email).first():
        raise ValidationError("User already exists with this email", field="email")

    user = User(
        email=payload.email,
        phone=payload.phone,
        hashed_password=get_password_hash(payload.password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    return {
        "message": "User registered successfully",
        "token": create_access_token(user.id),
        "user": {"id": user.id, "email": user.email, "phone": user.phone},
    }


@router.post("/login", response_model=AuthResponse)
@limiter.limit("10/minute")  # Prevent brute force attacks
def login(request: Request, payload: UserLogin, db: Session = Depends(get_db)):
    if not payload.email or not payload.password:
        raise ValidationError("Email and password are required")

    user = db.query(User).filter(User.email == payload.email.strip().lower()).first()
    if not user or not verify_password(payload.password, user.hashed_password):
        raise AuthenticationError("Invalid credentials")

    return {
        "message": "Login successful",
        "token": create_access_token(user.id),
        "user": user.to_public_dict(),
    }


@router.get("/me", response_model=UserResponse)
def read_users_me(current_user: User = Depends(get_current_user)):
    return current_user
