import asyncio
import logging

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)


def empty_result():
    return {"items": []}


def _client():
    return httpx.AsyncClient(timeout=settings.ENRICHMENT_TIMEOUT)


async def search_europeana(query: str):
    """Forward ``query`` to the Europeana search API and return its JSON body as-is."""
    params = {
        "query": query,
        "wskey": settings.EUROPEANA_API_KEY,
        "rows": str(settings.ENRICHMENT_MAX_RESULTS),
        "profile": "rich",
        "media": "true",
        "reusability": "open",
    }
    try:
        async with _client() as client:
            response = await client.get(settings.EUROPEANA_SEARCH_URL, params=params)
            response.raise_for_status()
            return response.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.error("Europeana error: %s", exc)
        return empty_result()


async def _fetch_met_object(client, object_id):
    response = await client.get(f"{settings.MET_MUSEUM_BASE_URL}/objects/{object_id}")
    response.raise_for_status()
    return response.json()


async def search_met_museum(query: str, medium: str = None):
    params = {"q": query, "hasImages": "true"}
    if medium:
        params["medium"] = medium

    try:
        async with _client() as client:
            response = await client.get(f"{settings.MET_MUSEUM_BASE_URL}/search", params=params)
            response.raise_for_status()
            object_ids = response.json().get("objectIDs") or []

            fetched = await asyncio.gather(
                *(
                    _fetch_met_object(client, object_id)
                    for object_id in object_ids[: settings.ENRICHMENT_MAX_RESULTS]
                ),
                return_exceptions=True,
            )
    except (httpx.HTTPError, ValueError, AttributeError) as exc:
        logger.error("Met Museum error: %s", exc)
        return empty_result()

    items = []
    for object_id, item in zip(object_ids, fetched):
        if isinstance(item, Exception):
            logger.warning("Met Museum object %s skipped: %s", object_id, item)
            continue
        items.append(item)
    return {"items": items}
