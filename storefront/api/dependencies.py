from fastapi import Depends, Query, Request
from sqlalchemy.orm import Session
from typing import Optional

from shared.core import get_logger, set_request_context
from storefront.auth_local import decode_access_token
from storefront.core_settings import Settings, get_settings
from storefront.domain.errors import AccessDenied, AuthenticationError, InvalidArgument
from storefront.domain.models import User
from storefront.application.catalog import parse_id
from storefront.infrastructure.db import get_db
from storefront.infrastructure.payment_gateway import RazorpayGateway

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "
ADMIN_REQUIRED = "Access denied. Admin role required."

def _extract_token(request: Request) -> Optional[str]:
    """Bearer header first, then the ``token`` cookie set at login."""
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith(BEARER_PREFIX):
        return auth_header[len(BEARER_PREFIX):].strip() or None
    return request.cookies.get("token")

def _resolve_user(db: Session, token: str, settings: Settings) -> User:
    payload = decode_access_token(token, settings)
    if not payload or not payload.get("sub"):
        raise AuthenticationError("Token is not valid.")
    user = db.get(User, payload["sub"])
    if not user:
        raise AuthenticationError("Token is not valid. User not found.")
    if not user.is_active:
        raise AuthenticationError("User account is deactivated.")
    set_request_context(user_id=user.id)
    return user

def get_current_user(request: Request, db: Session = Depends(get_db),
                     settings: Settings = Depends(get_settings)) -> User:
    token = _extract_token(request)
    if not token:
        raise AuthenticationError("Authentication required")
    return _resolve_user(db, token, settings)

def require_admin(
    request: Request,
    user_id: Optional[str] = Query(None, alias="userId", description="Legacy admin identity, honoured only when enabled"),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> User:
    token = _extract_token(request)
    if token:
        user = _resolve_user(db, token, settings)
        if not user.is_admin:
            raise AccessDenied(ADMIN_REQUIRED)
        return user

    if settings.ALLOW_USER_ID_PARAM_AUTH and user_id:
        # Impersonation by parameter: the id is trusted as-is, nothing proves the caller owns it
        logger.warning(
            "Admin identity taken from userId parameter",
            extra={'extra_fields': {'user_id': user_id, 'path': request.url.path}}
        )
        try:
            user = db.get(User, parse_id(user_id, "user id"))
        except InvalidArgument:
            user = None
        if not user or not user.is_active or not user.is_admin:
            raise AuthenticationError(ADMIN_REQUIRED)
        set_request_context(user_id=user.id)
        return user

    raise AuthenticationError("Authentication required")

def get_payment_gateway(settings: Settings = Depends(get_settings)) -> RazorpayGateway:
    return RazorpayGateway(
        key_id=settings.RAZORPAY_KEY_ID,
        key_secret=settings.RAZORPAY_KEY_SECRET,
        base_url=settings.RAZORPAY_API_URL,
        timeout=settings.PAYMENT_GATEWAY_TIMEOUT,
    )
