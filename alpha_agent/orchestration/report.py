"""Assemble API payloads from scored opportunities, prices and wallet stats."""

from datetime import datetime, timezone
from typing import Dict, List, Sequence

from alpha_agent.services.types import Narrative, Opportunity, PriceFetch, WalletStats

NO_ALPHA_SUMMARY = "No high-confidence opportunities detected. Market in consolidation."


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def enrich(opportunities: Sequence[Opportunity], prices: PriceFetch) -> List[Dict]:
    """Attach ``token_prices`` to each opportunity; unpriced tokens map to None."""
    return [
        {
            **opp.model_dump(),
            "token_prices": {mint: prices.get(mint) for mint in opp.tokens},
        }
        for opp in opportunities
    ]


def summarize(opportunities: Sequence[Opportunity]) -> str:
    if not opportunities:
        return NO_ALPHA_SUMMARY
    top = opportunities[0]
    return f"Top alpha: {top.narrative} → {top.action} ({top.confidence * 100:.0f}% confidence)"


def top_narratives(narratives: Sequence[Narrative], limit: int = 3) -> List[str]:
    return [f"{n.name} [{n.confidence}]" for n in narratives[:limit]]


def build_report(
    narratives: Sequence[Narrative],
    opportunities: Sequence[Opportunity],
    wallet: WalletStats,
    prices: PriceFetch,
) -> Dict:
    """
    Composite analysis report returned by ``POST /analyze``.

    Args:
        narratives: Everything the radar returned (unfiltered)
        opportunities: Ranked scorer output
        wallet: Agent wallet stats (may carry an error)
        prices: Prices for the opportunity tokens

    Returns:
        Report dictionary ready for JSON serialization
    """
    return {
        "timestamp": utc_timestamp(),
        "agent": {
            "wallet": wallet.address,
            "balance": wallet.balance_sol,
            "network": wallet.network,
        },
        "analysis": {
            "narratives_analyzed": len(narratives),
            "opportunities_found": len(opportunities),
            "top_narratives": top_narratives(narratives),
        },
        "opportunities": enrich(opportunities, prices),
        "summary": summarize(opportunities),
    }
