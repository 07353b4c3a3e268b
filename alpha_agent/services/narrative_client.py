from typing import List, Optional
import httpx
import logging
from pydantic import ValidationError
from alpha_agent.services.types import Narrative, NarrativeFetch
from alpha_agent.config import get_settings

logger = logging.getLogger(__name__)

async def fetch_narratives(client: Optional[httpx.AsyncClient] = None) -> NarrativeFetch:
    """
    Poll the Narrative Radar for the current narrative list.

    Never raises: an unreachable radar, a non-2xx answer or a payload that
    isn't ``{"narratives": [...]}`` all degrade to an empty result with the
    reason recorded in ``error``. No retries.

    Args:
        client: Optional shared AsyncClient (a fresh one is opened otherwise)

    Returns:
        NarrativeFetch with the parsed narratives
    """
    settings = get_settings()
    url = f"{settings.narrative_radar_url.rstrip('/')}/api/narratives"

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=settings.request_timeout) as own_client:
                response = await own_client.get(url)
        else:
            response = await client.get(url, timeout=settings.request_timeout)

        response.raise_for_status()
        data = response.json()

    except httpx.HTTPStatusError as e:
        logger.error(f"Narrative radar returned {e.response.status_code}")
        return NarrativeFetch(error=f"HTTP {e.response.status_code} from narrative radar")
    except httpx.HTTPError as e:
        logger.error(f"Failed to fetch narratives: {e!r}")
        return NarrativeFetch(error=f"Narrative radar unreachable: {e!r}")
    except ValueError as e:
        logger.error(f"Narrative radar sent invalid JSON: {e}")
        return NarrativeFetch(error="Narrative radar sent invalid JSON")

    records = (data.get("narratives") or []) if isinstance(data, dict) else None
    if not isinstance(records, list):
        logger.error("Narrative radar payload has unexpected shape")
        return NarrativeFetch(error="Malformed narrative payload")

    narratives = _parse_narratives(records)
    logger.info(f"Retrieved {len(narratives)} narratives from radar")
    return NarrativeFetch(narratives=narratives)

def _parse_narratives(records: list) -> List[Narrative]:
    narratives = []
    for record in records:
        try:
            narratives.append(Narrative.from_record(record))
        except ValidationError as e:
            logger.warning(f"Skipping malformed narrative record: {e.error_count()} validation error(s)")
            continue
    return narratives
