from typing import List, Tuple

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.services.in_memory_rate_limiter import InMemoryRateLimiter
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.notifier import INotifier
from src.depends import get_notifier, get_rate_limiter, get_unit_of_work


class RecordingNotifier(INotifier):
    """Keeps every reset link instead of emailing it"""

    def __init__(self):
        self.sent: List[Tuple[str, str]] = []

    async def send_password_reset_link(self, email: str, raw_token: str) -> None:
        self.sent.append((email, raw_token))


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def rate_limiter():
    return InMemoryRateLimiter(
        max_requests=ApplicationConfig.PASSWORD_RESET_MAX_REQUESTS,
        window_seconds=ApplicationConfig.PASSWORD_RESET_WINDOW_SECONDS,
    )


@pytest_asyncio.fixture
async def client(db_session, notifier, rate_limiter):
    from src.api.app import create_app

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_rate_limiter] = lambda: rate_limiter

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
