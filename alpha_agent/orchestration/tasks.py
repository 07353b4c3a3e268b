import asyncio
import logging
from typing import Dict

from alpha_agent.context import AGENT_NAME, AgentContext
from alpha_agent.orchestration.report import build_report, enrich, utc_timestamp
from alpha_agent.services.narrative_client import fetch_narratives
from alpha_agent.services.price_client import fetch_prices
from alpha_agent.services.tokens import all_tokens, unique_tokens
from alpha_agent.services.wallet import get_wallet_stats
from alpha_agent.trading.scorer import score

logger = logging.getLogger(__name__)

def healthcheck(ctx: AgentContext) -> Dict:
    """Liveness plus the agent's own identity."""
    return {
        "status": "ok",
        "agent": AGENT_NAME,
        "wallet": ctx.wallet.address,
    }

async def list_narratives() -> Dict:
    result = await fetch_narratives()
    narratives = [n.to_record() for n in result.narratives]
    return {"narratives": narratives, "count": len(narratives)}

async def find_alpha() -> Dict:
    """
    Narratives -> ranked opportunities -> price enrichment.

    Returns:
        Dictionary with enriched opportunities and counts
    """
    fetched = await fetch_narratives()
    opportunities = score(fetched.narratives)

    prices = await fetch_prices(unique_tokens(o.tokens for o in opportunities))

    return {
        "opportunities": enrich(opportunities, prices),
        "count": len(opportunities),
        "analyzed_narratives": len(fetched.narratives),
        "timestamp": utc_timestamp(),
    }

async def all_prices() -> Dict:
    result = await fetch_prices(all_tokens())
    return {"prices": result.prices, "count": len(result.prices)}

async def wallet_stats(ctx: AgentContext) -> Dict:
    stats = await get_wallet_stats(ctx.wallet)
    return stats.model_dump(exclude_none=True)

async def run_analysis(ctx: AgentContext) -> Dict:
    """
    Full pipeline: radar + wallet (concurrently) -> score -> prices -> report.

    Upstream failures degrade the report instead of failing it: a dead radar
    yields zero narratives, a dead RPC yields a zero balance, a dead price
    API yields null prices.
    """
    logger.info("Running full analysis pipeline...")

    fetched, wallet = await asyncio.gather(
        fetch_narratives(),
        get_wallet_stats(ctx.wallet),
    )
    if not fetched.ok:
        logger.warning(f"Analyzing without narratives: {fetched.error}")

    opportunities = score(fetched.narratives)
    prices = await fetch_prices(unique_tokens(o.tokens for o in opportunities))

    report = build_report(fetched.narratives, opportunities, wallet, prices)

    logger.info(
        f"Analysis complete: {len(opportunities)} opportunities "
        f"from {len(fetched.narratives)} narratives"
    )
    return report
