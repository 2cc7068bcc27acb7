"""Skills — the options for the listing's skill filter."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from roster.infrastructure.database import get_db
from roster.schemas.listing import SkillResponse
from roster.services import listing_service

router = APIRouter(prefix="/api/v1/skills", tags=["skills"])


@router.get("", response_model=list[SkillResponse])
async def list_skills(db: AsyncSession = Depends(get_db)):
    """All skills ordered by name."""
    skills = await listing_service.list_skills(db)
    return [SkillResponse.model_validate(skill) for skill in skills]
