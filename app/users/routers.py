from fastapi import APIRouter, HTTPException, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from loguru import logger

from app.database import get_db
from app.security.passwords import hash_password, verify_password
from app.security.tokens import TokenService, get_token_service
from app.users import crud as user_crud, schemas
from app.users.auth import get_current_user_id

router = APIRouter()

DUPLICATE_EMAIL_DETAIL = "Email already registered."
INVALID_CREDENTIALS_DETAIL = "Invalid email or password."


@router.post("/register", response_model=schemas.AuthResponse)
def register(
    request: schemas.RegisterRequest,
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
):
    # Early exit only; the unique index on users.email decides races
    if user_crud.get_user_by_email(db, request.email):
        raise HTTPException(status_code=400, detail=DUPLICATE_EMAIL_DETAIL)

    password_hash = hash_password(request.password)

    try:
        user = user_crud.create_user(db, request.name, request.email, password_hash)
    except IntegrityError as exc:
        db.rollback()
        logger.warning(f"Concurrent registration rejected by unique index for {request.email}: {exc.orig}")
        raise HTTPException(status_code=400, detail=DUPLICATE_EMAIL_DETAIL)

    token = token_service.issue(user.id, user.name, user.email)
    logger.info(f"User registered: id={user.id}")

    return schemas.AuthResponse(token=token, name=user.name, email=user.email)


@router.post("/login", response_model=schemas.AuthResponse)
def login(
    request: schemas.LoginRequest,
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
):
    if not request.email.strip() or not request.password.strip():
        raise HTTPException(status_code=400, detail="Email and password are required.")

    user = user_crud.get_user_by_email(db, request.email)
    if not user or not verify_password(request.password, user.password_hash):
        logger.warning(f"Authentication denied for email: {request.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_CREDENTIALS_DETAIL,
        )

    token = token_service.issue(user.id, user.name, user.email)
    logger.info(f"User authenticated: id={user.id}")

    return schemas.AuthResponse(token=token, name=user.name, email=user.email)


@router.get("/me", response_model=schemas.UserDisplaySchema)
def get_current_user_info(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    user = user_crud.get_user_by_id(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user
