from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import jwt, JWTError, ExpiredSignatureError
from src.exceptions import InvalidTokenError, TokenExpiredError
from src.security.interfaces import JWTAuthManagerInterface


class JWTAuthManager(JWTAuthManagerInterface):
    """
    Issues and verifies access tokens.

    Only access tokens are handled here; the reviews service trusts whatever
    identity provider minted the token as long as it was signed with the
    shared access secret.
    """

    def __init__(
        self,
        secret_key_access: str,
        algorithm: str,
        access_token_expire_minutes: int = 60,
    ):
        self._secret_key_access = secret_key_access
        self._algorithm = algorithm
        self._access_token_expire_minutes = access_token_expire_minutes

    def create_access_token(
        self, data: dict, expires_delta: Optional[timedelta] = None
    ) -> str:
        to_encode = data.copy()
        expire = datetime.now(timezone.utc) + (
            expires_delta or timedelta(minutes=self._access_token_expire_minutes)
        )
        to_encode.update({"exp": expire})
        return jwt.encode(to_encode, self._secret_key_access, algorithm=self._algorithm)

    def decode_access_token(self, token: str) -> dict:
        try:
            return jwt.decode(
                token, self._secret_key_access, algorithms=[self._algorithm]
            )
        except ExpiredSignatureError:
            raise TokenExpiredError
        except JWTError:
            raise InvalidTokenError
