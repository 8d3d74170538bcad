from typing import Awaitable, TypeVar
from loguru import logger

T = TypeVar('T')


async def or_default(awaitable: Awaitable[T], default: T, label: str = 'operation') -> T:
    """Await a best-effort sub-operation, returning default if it raises"""
    try:
        return await awaitable
    except Exception as e:
        logger.warning(f"{label} failed, using default: {e}")
        return default
