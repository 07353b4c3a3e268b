import math
from typing import Dict, Iterable, Optional
import httpx
import logging
from alpha_agent.services.types import PriceFetch
from alpha_agent.config import get_settings

logger = logging.getLogger(__name__)

async def fetch_prices(
    token_ids: Iterable[str],
    client: Optional[httpx.AsyncClient] = None
) -> PriceFetch:
    """
    Fetch current USD prices for a set of mints from the Jupiter price API.

    An empty token set returns immediately without touching the network.
    Failures return an empty mapping; callers treat every price as optional.

    Args:
        token_ids: Mint addresses to price
        client: Optional shared AsyncClient

    Returns:
        PriceFetch mapping mint -> price (None when upstream has no usable price)
    """
    mints = list(dict.fromkeys(token_ids))
    if not mints:
        return PriceFetch()

    settings = get_settings()
    params = {"ids": ",".join(mints)}

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=settings.request_timeout) as own_client:
                response = await own_client.get(settings.price_api_url, params=params)
        else:
            response = await client.get(settings.price_api_url, params=params, timeout=settings.request_timeout)

        response.raise_for_status()
        data = response.json()

    except httpx.HTTPStatusError as e:
        logger.warning(f"Price API returned {e.response.status_code} for {len(mints)} mints")
        return PriceFetch(error=f"HTTP {e.response.status_code} from price API")
    except httpx.HTTPError as e:
        logger.warning(f"Failed to fetch token prices: {e!r}")
        return PriceFetch(error=f"Price API unreachable: {e!r}")
    except ValueError:
        logger.warning("Price API sent invalid JSON")
        return PriceFetch(error="Price API sent invalid JSON")

    if not isinstance(data, dict):
        logger.warning("Price API payload has unexpected shape")
        return PriceFetch(error="Malformed price payload")

    prices = _parse_prices(data)
    logger.debug(f"Priced {sum(p is not None for p in prices.values())}/{len(mints)} mints")
    return PriceFetch(prices=prices)

def _parse_prices(data: dict) -> Dict[str, Optional[float]]:
    # v2 nests entries under "data"; v3 returns them at the top level
    entries = data.get("data") if "data" in data else data
    if not isinstance(entries, dict):
        return {}

    prices = {}
    for mint, info in entries.items():
        if not isinstance(info, dict):
            prices[mint] = None
            continue
        prices[mint] = _to_price(info.get("price", info.get("usdPrice")))
    return prices

def _to_price(raw) -> Optional[float]:
    # Jupiter v2 sends prices as strings
    try:
        price = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(price):
        return None
    return price or None
