from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from ...config import get_settings
from ...core.auth_client import AuthClient, AuthError, AuthUnavailableError
from ...core.security import AuthUser
from ...db.session import get_db
from ...db import schemas
from ...services import account_service, admin
from .. import deps


router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_call(call, *args, **kwargs):
    try:
        return call(*args, **kwargs)
    except AuthError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except AuthUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc


def _sign_in(client: AuthClient, email: str, password: str, failure: str) -> schemas.TokenResponse:
    try:
        payload = client.sign_in_with_password(email, password)
    except AuthError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=failure) from exc
    except AuthUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    return account_service.session_response(payload)


@router.post("/login", response_model=schemas.TokenResponse)
def login(
    payload: schemas.AdminLogin,
    client: AuthClient = Depends(deps.auth_client),
):
    return _sign_in(client, payload.email, payload.password, "Invalid email or password")


@router.post("/token", response_model=schemas.TokenResponse)
def login_form(
    form_data: OAuth2PasswordRequestForm = Depends(),
    client: AuthClient = Depends(deps.auth_client),
):
    return _sign_in(client, form_data.username, form_data.password, "Invalid email or password")


@router.post("/portal/login", response_model=schemas.TokenResponse)
def portal_login(
    payload: schemas.PortalCredentials,
    client: AuthClient = Depends(deps.auth_client),
):
    try:
        email = account_service.portal_email(payload.phone)
    except account_service.AccountError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    return _sign_in(client, email, payload.password, "Invalid phone or password")


@router.post("/portal/register", response_model=schemas.TokenResponse, status_code=status.HTTP_201_CREATED)
def portal_register(
    payload: schemas.PortalRegistration,
    client: AuthClient = Depends(deps.auth_client),
):
    try:
        phone = account_service.normalize_phone(payload.phone)
    except account_service.AccountError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    email = account_service.portal_email(phone)
    # The backend links the new account to an existing client by phone.
    try:
        result = client.sign_up(email, payload.password, {"phone": phone, "full_name": payload.full_name.strip()})
    except AuthError as exc:
        detail = str(exc)
        if "already registered" in detail.lower():
            detail = "This phone number is already registered. Try signing in."
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail) from exc
    except AuthUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    return account_service.session_response(result)


@router.post("/refresh", response_model=schemas.TokenResponse)
def refresh(
    payload: schemas.RefreshRequest,
    client: AuthClient = Depends(deps.auth_client),
):
    return account_service.session_response(_auth_call(client.refresh_session, payload.refresh_token))


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    token: str = Depends(deps.get_access_token),
    _: AuthUser = Depends(deps.get_current_user),
    client: AuthClient = Depends(deps.auth_client),
):
    _auth_call(client.sign_out, token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/password-reset", status_code=status.HTTP_202_ACCEPTED)
def request_password_reset(
    payload: schemas.PasswordResetRequest,
    client: AuthClient = Depends(deps.auth_client),
):
    _auth_call(
        client.reset_password_for_email,
        payload.email,
        get_settings().password_reset_redirect_url,
    )
    return {"status": "sent"}


@router.get("/me", response_model=schemas.AdminSession)
def me(
    current: AuthUser = Depends(deps.get_current_user),
    db: Session = Depends(get_db),
):
    return schemas.AdminSession(
        id=current.id,
        email=current.email,
        is_admin=admin.is_admin(db, current.email),
    )
