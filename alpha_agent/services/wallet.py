"""
Agent wallet identity and on-chain stats.

The keypair is loaded once at process start from ``SOLANA_PRIVATE_KEY``
(base58, or hex as a fallback). A missing or unreadable key is not fatal:
an ephemeral keypair is generated instead and a warning is logged.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import base58
from solana.rpc.async_api import AsyncClient
from solders.keypair import Keypair

from alpha_agent.services.types import WalletStats

logger = logging.getLogger(__name__)

LAMPORTS_PER_SOL = 1_000_000_000
RECENT_TX_LIMIT = 5


@dataclass(frozen=True)
class WalletContext:
    """Read-only wallet identity shared by every request."""
    keypair: Keypair
    rpc_url: str
    ephemeral: bool = False
    timeout: float = 10.0

    @property
    def address(self) -> str:
        return str(self.keypair.pubkey())

    @property
    def network(self) -> str:
        return network_label(self.rpc_url)


def network_label(rpc_url: str) -> str:
    url = (rpc_url or "").lower()
    if "devnet" in url:
        return "devnet"
    if "testnet" in url:
        return "testnet"
    return "mainnet"


def decode_keypair(secret: str) -> Keypair:
    """Decode a base58 (or hex) secret into a Keypair.

    Accepts the 64-byte secret key form as well as a bare 32-byte seed.

    Raises:
        ValueError: If the secret can't be decoded into a keypair
    """
    secret = secret.strip()
    if not secret:
        raise ValueError("Empty private key")

    for decode in (base58.b58decode, bytes.fromhex):
        try:
            key_bytes = decode(secret)
        except ValueError:
            continue
        if len(key_bytes) == 64:
            return Keypair.from_bytes(key_bytes)
        if len(key_bytes) == 32:
            return Keypair.from_seed(key_bytes)

    raise ValueError("Private key must be a base58 or hex encoded 64-byte key or 32-byte seed")


def load_wallet(settings) -> WalletContext:
    """Build the wallet context from settings, falling back to an ephemeral key."""
    if settings.solana_private_key:
        try:
            keypair = decode_keypair(settings.solana_private_key)
            wallet = WalletContext(keypair=keypair, rpc_url=settings.rpc_url, timeout=settings.request_timeout)
            logger.info(f"Wallet loaded: {wallet.address}")
            return wallet
        except Exception as e:
            logger.warning(f"Could not load SOLANA_PRIVATE_KEY ({e}); using a temporary wallet")
    else:
        logger.warning("SOLANA_PRIVATE_KEY not set; generated a temporary wallet")

    return WalletContext(
        keypair=Keypair(), rpc_url=settings.rpc_url, ephemeral=True, timeout=settings.request_timeout
    )


async def get_wallet_stats(wallet: WalletContext, rpc: Optional[AsyncClient] = None) -> WalletStats:
    """
    Query balance and recent activity for the agent wallet.

    Never raises: an RPC failure is reported inline through ``error`` with
    a zero balance.

    Args:
        wallet: The agent wallet context
        rpc: Optional RPC client (one is opened against ``wallet.rpc_url`` otherwise)

    Returns:
        WalletStats for the wallet
    """
    owns_client = rpc is None
    if owns_client:
        rpc = AsyncClient(wallet.rpc_url, timeout=wallet.timeout)

    pubkey = wallet.keypair.pubkey()
    try:
        balance = await rpc.get_balance(pubkey)
        signatures = await rpc.get_signatures_for_address(pubkey, limit=RECENT_TX_LIMIT)
        return WalletStats(
            address=wallet.address,
            balance_sol=(balance.value or 0) / LAMPORTS_PER_SOL,
            recent_transactions=len(signatures.value or []),
            network=wallet.network,
        )
    except Exception as e:
        logger.error(f"Wallet stats query failed for {wallet.address}: {e}")
        return WalletStats(address=wallet.address, balance_sol=0, error=str(e) or type(e).__name__)
    finally:
        if owns_client:
            try:
                await rpc.close()
            except Exception as e:
                logger.warning(f"Failed to close RPC client for {wallet.rpc_url}: {e}")
