from typing import Optional
import logging

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ..core.config import Settings
from ..database import get_db
from ..models.user import UserRole
from ..services.identity import IdentityVerifier
from ..services.roles import Principal, resolve_principal
from ..utils.errors import Forbidden, Unauthenticated

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

_ROLE_MESSAGES = {
    UserRole.ADMIN: "Admin only Actions!",
    UserRole.DECORATOR: "Decorator only Actions!",
}


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_identity_verifier(request: Request) -> IdentityVerifier:
    return request.app.state.identity_verifier


def get_payment_gateway(request: Request):
    return request.app.state.payment_gateway


def get_current_email(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> str:
    """Verified email of the caller; 401 when the bearer token is missing or bad."""
    if credentials is None or not credentials.credentials:
        raise Unauthenticated("Unauthorized Access!")
    return verifier.verify(credentials.credentials)


def get_current_principal(
    email: str = Depends(get_current_email),
    db: Session = Depends(get_db),
) -> Optional[Principal]:
    return resolve_principal(db, email)


def require_role(role: UserRole):
    """Dependency admitting only active principals holding ``role``."""

    def _dep(
        email: str = Depends(get_current_email),
        db: Session = Depends(get_db),
    ) -> Principal:
        principal = resolve_principal(db, email)
        if principal is None or principal.role != role:
            logger.warning(
                "Rejected %s for %s-only action (role=%s)",
                email,
                role.value,
                principal.role.value if principal else None,
            )
            raise Forbidden(_ROLE_MESSAGES[role], {"role": principal.role.value if principal else "none"})
        if not principal.is_active:
            logger.warning("Rejected suspended principal %s", email)
            raise Forbidden("Account suspended", {"status": principal.status.value})
        return principal

    return _dep


get_current_admin = require_role(UserRole.ADMIN)
get_current_decorator = require_role(UserRole.DECORATOR)
