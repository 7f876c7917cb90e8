import logging
import os
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

if "ENVIRONMENT" not in os.environ:
    os.environ["ENVIRONMENT"] = "local"

from src.config import get_settings  # noqa: E402
from src.routes import reviews_router, averages_router  # noqa: E402

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(levelname)s | %(name)s | %(message)s",
)

app = FastAPI(
    title="Movie reviews",
    description="Movie reviews and average ratings based on FastAPI and SQLAlchemy",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(
    reviews_router, prefix=f"{settings.API_PREFIX}/reviews", tags=["reviews"]
)
app.include_router(
    averages_router, prefix=f"{settings.API_PREFIX}/average", tags=["average"]
)


@app.get("/", tags=["health"])
async def health_check():
    return {"detail": "Server is running"}


if __name__ == "__main__":
    uvicorn.run("src.main:app", reload=True)
