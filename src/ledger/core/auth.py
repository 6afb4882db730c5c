"""Bearer-token gate that resolves the calling owner.

The gate is stateless: it checks the token signature and expiry against the
secret it was built with and returns a typed ``RequestContext``. Services take
that context as an explicit argument.
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from jose import ExpiredSignatureError, JWTError

from ledger.core.exceptions import UnauthorizedError
from ledger.core.security import DEFAULT_ALGORITHM, decode_token

logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"


@dataclass(frozen=True)
class RequestContext:
    """Identity of the principal on whose behalf a request runs."""

    owner_id: UUID


class AuthGate:
    """Validates ``Authorization: Bearer <token>`` values."""

    def __init__(self, secret: str, algorithm: str = DEFAULT_ALGORITHM):
        if not secret:
            raise ValueError("AuthGate requires a non-empty secret")
        self._secret = secret
        self._algorithm = algorithm

    def resolve(self, authorization: str | None) -> RequestContext:
        """
        Resolve the owner behind an Authorization header value.

        Args:
            authorization: Raw header value, e.g. "Bearer eyJ..."

        Returns:
            RequestContext for the token's subject

        Raises:
            UnauthorizedError: If the header is absent or malformed, the
                signature is invalid, the token expired, or ``sub`` is not
                a user id
        """
        token = self.extract_token(authorization)
        return RequestContext(owner_id=self.verify(token))

    @staticmethod
    def extract_token(authorization: str | None) -> str:
        """Pull the token segment out of a Bearer header value."""
        if not authorization or not authorization.strip():
            raise UnauthorizedError("AUTH_001")

        scheme, _, token = authorization.strip().partition(" ")
        token = token.strip()
        if scheme.lower() != BEARER_SCHEME or not token:
            raise UnauthorizedError("AUTH_001")
        return token

    def verify(self, token: str) -> UUID:
        """Verify a token and return its subject as a UUID."""
        try:
            payload = decode_token(token, self._secret, self._algorithm)
        except ExpiredSignatureError:
            logger.info("Rejected expired token")
            raise UnauthorizedError("AUTH_002", details={"reason": "expired"})
        except JWTError:
            logger.info("Rejected token with invalid signature or format")
            raise UnauthorizedError("AUTH_002", details={"reason": "invalid"})

        subject = payload.get("sub")
        if not subject:
            raise UnauthorizedError("AUTH_002", details={"reason": "missing sub"})
        try:
            return UUID(str(subject))
        except ValueError:
            raise UnauthorizedError("AUTH_002", details={"reason": "malformed sub"})
