import os

os.environ["ENVIRONMENT"] = "testing"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from src.config import get_settings  # noqa: E402
from src.database import Base, get_db  # noqa: E402
from src.main import app  # noqa: E402
from src.security.token_manager import JWTAuthManager  # noqa: E402
from src.services import AverageAggregator, ReviewService  # noqa: E402
from src.storages import ReviewStore, SummaryStore  # noqa: E402


@pytest.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(engine):
    session_factory = async_sessionmaker(
        bind=engine, autoflush=False, expire_on_commit=False
    )
    async with session_factory() as session:
        yield session


@pytest.fixture
def review_store(db_session):
    return ReviewStore(db_session)


@pytest.fixture
def summary_store(db_session):
    return SummaryStore(db_session)


@pytest.fixture
def aggregator(review_store, summary_store):
    return AverageAggregator(review_store=review_store, summary_store=summary_store)


@pytest.fixture
def review_service(review_store, aggregator):
    return ReviewService(review_store=review_store, aggregator=aggregator)


@pytest.fixture
def jwt_manager():
    settings = get_settings()
    return JWTAuthManager(
        secret_key_access=settings.SECRET_KEY_ACCESS,
        algorithm=settings.JWT_SIGNING_ALGORITHM,
    )


@pytest.fixture
def auth_headers(jwt_manager):
    def _auth_headers(user_id: str) -> dict:
        token = jwt_manager.create_access_token({"user_id": user_id})
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture
async def client(db_session):
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as async_client:
        yield async_client
    app.dependency_overrides.clear()
