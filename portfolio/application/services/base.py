"""Shared plumbing for portfolio services.

Every public service method runs inside ``operation``: failures are
re-raised with the operation's intent in the message, and the affected
view paths are invalidated on every exit path.
"""
from contextlib import asynccontextmanager, nullcontext
from typing import Optional
import logging
import sqlite3

from ...errors import (
    PortfolioError,
    Unauthenticated,
    UnknownPersistenceError,
    ConstraintViolation,
    StorageProviderError,
)
from ...identity import IdentityOracle, Principal
from ...infrastructure.invalidation import ViewInvalidator, invalidates
from ...infrastructure.storage import StorageError
from ..forms import invalid_input_message

logger = logging.getLogger(__name__)


@asynccontextmanager
async def operation(intent: str, invalidator: Optional[ViewInvalidator] = None, *paths: str):
    """Run one operation body.

    Args:
        intent: What the operation does, e.g. "update album"
        invalidator: Signal to fire on exit (reads pass None)
        paths: View paths to invalidate

    Raises:
        PortfolioError: Always a subclass, message prefixed with ``intent``
    """
    guard = invalidates(invalidator, *paths) if invalidator is not None else nullcontext()
    async with guard:
        try:
            yield
        except PortfolioError as e:
            logger.info("%s failed: %s (%s) %s", intent, e.message, e.kind, getattr(e, "reasons", ""))
            raise e.with_context(intent) from e
        except sqlite3.IntegrityError as e:
            logger.warning("%s violated a constraint: %s", intent, e)
            raise ConstraintViolation(f"Failed to {intent}: {e}") from e
        except sqlite3.Error as e:
            logger.error("%s hit a database error: %s", intent, e)
            raise UnknownPersistenceError(f"Failed to {intent}: {e}") from e
        except StorageError as e:
            logger.error("%s hit a storage error: %s", intent, e)
            raise StorageProviderError(f"Failed to {intent}: {e}") from e


class PortfolioService:
    """Base class for services that act on behalf of a principal."""

    #: Entity name used in caller-facing messages
    entity = "portfolio"

    def __init__(self, identity: IdentityOracle, invalidator: ViewInvalidator):
        self.identity = identity
        self.invalidator = invalidator

    async def _require_principal(self) -> Principal:
        """Return the current principal or raise ``Unauthenticated``."""
        principal = await self.identity.current_principal()
        if principal is None:
            raise Unauthenticated(invalid_input_message(self.entity))
        return principal

    def _operation(self, intent: str, *paths: str):
        return operation(intent, self.invalidator, *paths)

    def _read(self, intent: str):
        return operation(intent)
