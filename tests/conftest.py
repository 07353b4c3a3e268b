import pytest
from solders.keypair import Keypair

from alpha_agent.config import Settings
from alpha_agent.context import AgentContext
from alpha_agent.services.types import Narrative
from alpha_agent.services.wallet import WalletContext


def make_narrative(name="DeFi", confidence="HIGH", direction="ACCELERATING",
                   explanation="x", supporting_signals=None, **extra) -> Narrative:
    return Narrative(
        name=name,
        confidence=confidence,
        direction=direction,
        explanation=explanation,
        supporting_signals=supporting_signals or [],
        **extra,
    )


@pytest.fixture
def settings():
    return Settings(
        rpc_url="https://api.devnet.solana.com",
        solana_private_key="",
        _env_file=None,
    )


@pytest.fixture
def wallet(settings):
    return WalletContext(keypair=Keypair(), rpc_url=settings.rpc_url, ephemeral=True)


@pytest.fixture
def agent_context(settings, wallet):
    return AgentContext(settings=settings, wallet=wallet)
