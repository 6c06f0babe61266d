import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import InternalError, ServiceError

logger = logging.getLogger(__name__)


class UnitOfWork:
    """
    Explicit transaction boundary around an AsyncSession.

        async with UnitOfWork(db, on_integrity_error=ConflictError("...")):
            ...writes...

    Leaving the block normally commits. Any exception rolls back everything
    written inside the block, then:
    - IntegrityError is re-raised as `on_integrity_error` when one is given
    - any other SQLAlchemyError becomes InternalError
    - ServiceError and anything else propagate unchanged

    The session may already hold an implicit transaction from earlier reads;
    those reads become part of this unit.
    """

    def __init__(
        self,
        db: AsyncSession,
        on_integrity_error: ServiceError | None = None,
        failure_message: str = "Database operation failed",
    ):
        self.db = db
        self.on_integrity_error = on_integrity_error
        self.failure_message = failure_message

    async def __aenter__(self) -> "UnitOfWork":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        if exc is None:
            try:
                await self.db.commit()
                return False
            except SQLAlchemyError as commit_exc:
                exc = commit_exc

        await self.db.rollback()
        logger.warning("[DB] Rolled back unit of work: %s", exc)
        self._raise_translated(exc)
        return False

    def _raise_translated(self, exc: BaseException) -> None:
        if isinstance(exc, IntegrityError) and self.on_integrity_error is not None:
            raise self.on_integrity_error from exc
        if isinstance(exc, SQLAlchemyError):
            logger.error("[DB] %s: %s", self.failure_message, exc)
            raise InternalError(self.failure_message) from exc
        # Non-store errors: __aexit__ returning False re-raises the original.
