import asyncio
import logging
from urllib.parse import urlparse, parse_qs, urlencode, urlunparse

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from huma.core.config import settings

logger = logging.getLogger(__name__)

# asyncpg rejects these libpq-only query parameters
UNSUPPORTED_PARAMS = ("server_settings", "passfile", "channel_binding", "gssencmode")


def normalize_database_url(raw_url: str) -> str:
    """
    Make a libpq style URL usable by SQLAlchemy's asyncpg dialect.
    - postgres:// and postgresql:// become postgresql+asyncpg://
    - sslmode=... becomes ssl=...
    - connect_timeout becomes command_timeout
    - parameters asyncpg does not understand are dropped
    """
    parsed = urlparse(raw_url)
    scheme = parsed.scheme
    if scheme in ("postgres", "postgresql"):
        scheme = "postgresql+asyncpg"

    query_params = {k: v[0] for k, v in parse_qs(parsed.query, keep_blank_values=True).items()}
    if "sslmode" in query_params:
        query_params["ssl"] = query_params.pop("sslmode")
    if "connect_timeout" in query_params:
        query_params["command_timeout"] = query_params.pop("connect_timeout")
    for param in UNSUPPORTED_PARAMS:
        if query_params.pop(param, None) is not None:
            logger.info("Removed unsupported parameter: %s", param)

    return urlunparse((scheme, parsed.netloc, parsed.path, parsed.params, urlencode(query_params), parsed.fragment))


_db_url = normalize_database_url(str(settings.DATABASE_URL))
logger.info("Using DATABASE_URL: %s...", _db_url[:50])

engine = create_async_engine(
    _db_url,
    poolclass=NullPool,
    pool_pre_ping=True,
    echo=False,
)

SessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

# OSError messages worth another connection attempt
RETRYABLE_ERRORS = (
    "Network is unreachable",
    "Connection refused",
    "No address associated with hostname",
    "Temporary failure in name resolution",
    "timeout",
)


async def open_session(max_retries: int = 3) -> AsyncSession:
    """
    Open a session on the app schema, retrying transient network errors.
    """
    retry_delay = 1  # seconds

    for attempt in range(max_retries):
        session = SessionLocal()
        try:
            await session.execute(text("SET search_path TO app, public"))
            return session
        except OSError as e:
            await session.close()
            if not any(error_type in str(e) for error_type in RETRYABLE_ERRORS):
                logger.error("Database connection failed with non-retryable OSError: %s", e)
                raise
            if attempt == max_retries - 1:
                logger.error("Database connection failed after %s attempts: %s", max_retries, e)
                raise
            logger.warning("Network/connection issue, attempt %s/%s. Retrying in %ss... Error: %s", attempt + 1, max_retries, retry_delay, e)
            await asyncio.sleep(retry_delay)
            retry_delay *= 2
        except Exception:
            await session.close()
            raise
    raise RuntimeError("max_retries must be at least 1")


async def get_db():
    """
    Dependency that provides a database session.
    Errors raised by the route after the session is handed out propagate unchanged.
    """
    session = await open_session()
    try:
        yield session
    finally:
        await session.close()
