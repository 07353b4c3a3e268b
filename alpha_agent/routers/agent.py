"""
Agent endpoints: narratives, alpha, wallet, prices and the full analysis.

Upstream outages never surface as error statuses here; the pipeline
degrades to empty or partial data instead.
"""

import logging
from fastapi import APIRouter, HTTPException, Depends, Request

from alpha_agent.context import AgentContext
from alpha_agent.orchestration.tasks import (
    all_prices,
    find_alpha,
    healthcheck,
    list_narratives,
    run_analysis,
    wallet_stats,
)

logger = logging.getLogger(__name__)
router = APIRouter(tags=["agent"])


def get_context(request: Request) -> AgentContext:
    """Resolve the process-wide agent context."""
    return request.app.state.context


@router.get("/health")
def health(ctx: AgentContext = Depends(get_context)):
    """Health check with the agent's wallet address."""
    return healthcheck(ctx)


@router.get("/narratives")
async def narratives():
    """Current narratives from the Narrative Radar, unfiltered."""
    try:
        return await list_narratives()
    except Exception as e:
        logger.error(f"Error listing narratives: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to list narratives")


@router.get("/alpha")
async def alpha():
    """
    Alpha opportunities with token suggestions.

    Each opportunity carries ``token_prices`` for its mints; a mint the price
    API couldn't price maps to null.
    """
    try:
        return await find_alpha()
    except Exception as e:
        logger.error(f"Error finding alpha: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to find alpha")


@router.get("/wallet")
async def wallet(ctx: AgentContext = Depends(get_context)):
    """Agent wallet info and on-chain stats; RPC failures come back as an ``error`` field."""
    return await wallet_stats(ctx)


@router.get("/prices")
async def prices():
    """Token prices for every narrative-related token."""
    try:
        return await all_prices()
    except Exception as e:
        logger.error(f"Error fetching prices: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch prices")


@router.post("/analyze")
async def analyze(ctx: AgentContext = Depends(get_context)):
    """
    Full analysis pipeline.

    Fetches narratives and wallet stats, scores opportunities, prices their
    tokens and returns a composite report with a one-line summary.
    """
    try:
        return await run_analysis(ctx)
    except Exception as e:
        logger.error(f"Error running analysis: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to run analysis")
