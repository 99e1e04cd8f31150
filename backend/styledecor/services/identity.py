"""Bearer token verification.

Identity is issued elsewhere; this module only checks a token's signature and
expiry and reads the principal's email out of it. Tokens carry the email in
the ``email`` claim, falling back to ``sub``.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
import logging

from jose import JWTError, jwt

from ..utils.auth import normalize_email
from ..utils.errors import Unauthenticated

logger = logging.getLogger(__name__)


class IdentityVerifier:
    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        audience: Optional[str] = None,
        expire_minutes: int = 60,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.audience = audience or None
        self.expire_minutes = expire_minutes

    def verify(self, token: str) -> str:
        """Return the verified principal email for ``token``.

        Raises ``Unauthenticated`` when the token is malformed, expired,
        wrongly signed or carries no email.
        """
        options = {"verify_aud": self.audience is not None}
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                options=options,
            )
        except JWTError as exc:
            logger.info("Rejected identity token: %s", exc)
            raise Unauthenticated("Unauthorized Access!") from exc
        email = payload.get("email") or payload.get("sub")
        if not email or not isinstance(email, str):
            raise Unauthenticated("Unauthorized Access!")
        return normalize_email(email)

    def create_access_token(self, email: str, expires_delta: Optional[timedelta] = None) -> str:
        """Mint a token this verifier accepts (local development and tests)."""
        expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=self.expire_minutes))
        to_encode = {"sub": email, "email": email, "exp": expire}
        if self.audience:
            to_encode["aud"] = self.audience
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)
