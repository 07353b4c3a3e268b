"""
Opportunity scoring for Solana narratives.

Maps each narrative's (confidence, direction) pair onto a fixed
recommendation. The weights are rule-table constants, not statistics.
"""

import logging
from typing import Iterable, List, Optional

from alpha_agent.services.tokens import tokens_for
from alpha_agent.services.types import Narrative, Opportunity

logger = logging.getLogger(__name__)

ACCELERATING = "ACCELERATING"


def score_narrative(narrative: Narrative) -> Optional[Opportunity]:
    """
    Apply the rule table to one narrative.

    HIGH + ACCELERATING -> ACCUMULATE (0.85, MEDIUM risk)
    MEDIUM + ACCELERATING -> DCA (0.60, LOW risk)
    MEDIUM + anything else -> WATCHLIST (0.40, LOW risk)

    Every other combination, including HIGH without acceleration, yields
    no opportunity.
    """
    tokens = tokens_for(narrative.name)
    accelerating = narrative.direction == ACCELERATING

    if narrative.confidence == "HIGH" and accelerating:
        return Opportunity(
            narrative=narrative.name,
            action="ACCUMULATE",
            tokens=tokens,
            reasoning=(
                f"{narrative.name} is a high-confidence accelerating narrative with "
                f"{len(narrative.supporting_signals)} supporting signals. {narrative.explanation}"
            ),
            confidence=0.85,
            risk="MEDIUM",
            suggested_allocation="5-10% of portfolio",
        )

    if narrative.confidence == "MEDIUM":
        return Opportunity(
            narrative=narrative.name,
            action="DCA" if accelerating else "WATCHLIST",
            tokens=tokens,
            reasoning=f"{narrative.name} showing {narrative.direction.lower()} trend. {narrative.explanation}",
            confidence=0.6 if accelerating else 0.4,
            risk="LOW",
            suggested_allocation="2-5% of portfolio" if accelerating else "Watch only",
        )

    return None


def score(narratives: Iterable[Narrative]) -> List[Opportunity]:
    """
    Score narratives into ranked opportunities.

    Args:
        narratives: Narratives from the radar, in radar order

    Returns:
        Opportunities ranked by confidence (highest first); ties keep radar order
    """
    opportunities = []
    for narrative in narratives:
        opportunity = score_narrative(narrative)
        if opportunity is None:
            logger.debug(f"No opportunity for {narrative.name} [{narrative.confidence}/{narrative.direction}]")
            continue
        opportunities.append(opportunity)

    # sorted() is stable, so equal confidences stay in input order
    return sorted(opportunities, key=lambda o: o.confidence, reverse=True)
