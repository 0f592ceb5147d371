from typing import Optional

from fastapi import APIRouter, HTTPException

from app.core.config import settings
from app.utils.enrichment_utils import empty_result, search_europeana, search_met_museum

router = APIRouter()


@router.get("/europeana")
async def europeana(q: Optional[str] = None):
    if not settings.EUROPEANA_API_KEY:
        return empty_result()
    if not q:
        raise HTTPException(status_code=400, detail="Missing query parameter 'q'")
    return await search_europeana(q)


@router.get("/met")
async def met_museum(q: Optional[str] = None, medium: Optional[str] = None):
    if not q:
        raise HTTPException(status_code=400, detail="Missing query parameter 'q'")
    return await search_met_museum(q, medium)
