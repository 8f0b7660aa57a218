from datetime import timedelta

from fastapi import Depends
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.email_notifier import LoggingNotifier, ResendNotifier
from src.adapter.services.in_memory_rate_limiter import InMemoryRateLimiter
from src.adapter.services.jwt_session_issuer import JwtSessionIssuer
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.notifier import INotifier
from src.app.services.rate_limiter import IRateLimiter
from src.app.services.session_issuer import ISessionIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    ConfirmPasswordResetUseCase,
    GetSessionUserUseCase,
    RequestPasswordResetUseCase,
    SignupUseCase,
)

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

# Process-wide: counts survive across requests, not across restarts or instances
password_reset_rate_limiter = InMemoryRateLimiter(
    max_requests=ApplicationConfig.PASSWORD_RESET_MAX_REQUESTS,
    window_seconds=ApplicationConfig.PASSWORD_RESET_WINDOW_SECONDS,
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_rate_limiter() -> IRateLimiter:
    return password_reset_rate_limiter


def get_notifier() -> INotifier:
    if not ApplicationConfig.RESEND_API_KEY:
        return LoggingNotifier()
    return ResendNotifier(
        api_key=ApplicationConfig.RESEND_API_KEY,
        sender=ApplicationConfig.EMAIL_FROM,
        app_url=ApplicationConfig.APP_URL,
        ttl_minutes=ApplicationConfig.PASSWORD_RESET_TOKEN_TTL_MINUTES,
        timeout=ApplicationConfig.EMAIL_TIMEOUT_SECONDS,
    )


def get_session_issuer() -> ISessionIssuer:
    return JwtSessionIssuer(
        secret=ApplicationConfig.AUTH_SECRET,
        ttl=timedelta(days=ApplicationConfig.SESSION_TTL_DAYS),
    )


def get_request_password_reset_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
    rate_limiter: IRateLimiter = Depends(get_rate_limiter),
    notifier: INotifier = Depends(get_notifier),
) -> RequestPasswordResetUseCase:
    return RequestPasswordResetUseCase(
        uow,
        rate_limiter,
        notifier,
        token_ttl=timedelta(minutes=ApplicationConfig.PASSWORD_RESET_TOKEN_TTL_MINUTES),
        token_hash_rounds=ApplicationConfig.TOKEN_HASH_ROUNDS,
    )


def get_confirm_password_reset_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
    session_issuer: ISessionIssuer = Depends(get_session_issuer),
) -> ConfirmPasswordResetUseCase:
    return ConfirmPasswordResetUseCase(
        uow,
        session_issuer,
        token_hash_rounds=ApplicationConfig.TOKEN_HASH_ROUNDS,
        password_hash_rounds=ApplicationConfig.PASSWORD_HASH_ROUNDS,
    )


def get_signup_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
    session_issuer: ISessionIssuer = Depends(get_session_issuer),
) -> SignupUseCase:
    return SignupUseCase(
        uow, session_issuer, password_hash_rounds=ApplicationConfig.PASSWORD_HASH_ROUNDS
    )


def get_session_user_use_case(
    uow: UnitOfWork = Depends(get_unit_of_work),
    session_issuer: ISessionIssuer = Depends(get_session_issuer),
) -> GetSessionUserUseCase:
    return GetSessionUserUseCase(uow, session_issuer)
