from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.dependencies import get_db
from app.schemas.analysis import TeamSummary, UserStats
from app.services.analysis import team_stats, user_stats

router = APIRouter(prefix="/analysis", tags=["analysis"])

@router.get("/summary", response_model=TeamSummary)
async def get_team_summary(db: AsyncSession = Depends(get_db)):
    return await team_stats(db)

@router.get("/users", response_model=list[UserStats])
async def get_user_stats(db: AsyncSession = Depends(get_db)):
    return await user_stats(db)
