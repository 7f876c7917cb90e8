import os
from fastapi import Depends, HTTPException
from starlette import status
from .settings import TestingSettings, Settings, BaseAppSettings, LocalSettings
from src.exceptions import BaseSecurityError
from src.security.http import get_token
from src.security.interfaces import JWTAuthManagerInterface
from src.security.token_manager import JWTAuthManager


def get_settings() -> BaseAppSettings:
    env_mode = os.getenv("ENVIRONMENT", "local")
    if env_mode == "testing":
        return TestingSettings()
    if env_mode == "local":
        return LocalSettings()
    return Settings()  # env_mode == "docker" or else


def get_jwt_auth_manager(
    settings: BaseAppSettings = Depends(get_settings),
) -> JWTAuthManagerInterface:
    return JWTAuthManager(
        secret_key_access=settings.SECRET_KEY_ACCESS,
        algorithm=settings.JWT_SIGNING_ALGORITHM,
        access_token_expire_minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )


async def get_current_user_id(
    token: str = Depends(get_token),
    jwt_manager: JWTAuthManagerInterface = Depends(get_jwt_auth_manager),
) -> str:
    try:
        payload = jwt_manager.decode_access_token(token)
    except BaseSecurityError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))

    # Older tokens carry the subject under "id" instead of "user_id"
    user_id = payload.get("user_id") or payload.get("id")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token: user_id missing",
        )
    return str(user_id)
