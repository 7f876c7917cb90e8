from fastapi import Request, HTTPException, status


def get_token(request: Request) -> str:
    """
    Extracts the bearer token from the Authorization header.

    :raises HTTPException: 401 if the header is missing or malformed.
    """
    authorization: str | None = request.headers.get("Authorization")

    if not authorization:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header is missing",
        )

    scheme, _, token = authorization.partition(" ")

    if scheme.lower() != "bearer" or not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid Authorization header format. Expected 'Bearer <token>'",
        )

    return token
