from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.database import get_db as db_session


def get_db(db: AsyncSession = Depends(db_session)):
    return db
