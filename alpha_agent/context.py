from dataclasses import dataclass
from typing import Optional

from alpha_agent.config import Settings, get_settings
from alpha_agent.services.wallet import WalletContext, load_wallet

AGENT_NAME = "solana-alpha-agent"


@dataclass(frozen=True)
class AgentContext:
    """Process-wide state, built once at startup and never mutated."""
    settings: Settings
    wallet: WalletContext


def build_context(settings: Optional[Settings] = None) -> AgentContext:
    settings = settings or get_settings()
    return AgentContext(settings=settings, wallet=load_wallet(settings))
