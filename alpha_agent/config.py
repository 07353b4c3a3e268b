from pydantic_settings import BaseSettings
from functools import lru_cache

DEFAULT_RPC_URL = "https://api.devnet.solana.com"
DEFAULT_RADAR_URL = "https://solana-narrative-radar-8vsib.ondigitalocean.app"

class Settings(BaseSettings):
    # Solana
    rpc_url: str = DEFAULT_RPC_URL
    solana_private_key: str = ""  # base58 secret key; empty -> ephemeral wallet

    # Upstreams
    narrative_radar_url: str = DEFAULT_RADAR_URL
    price_api_url: str = "https://api.jup.ag/price/v2"
    request_timeout: float = 10.0

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    cors_origins: str = "*"  # comma-separated

    class Config:
        env_file = ".env"
        case_sensitive = False

@lru_cache()
def get_settings():
    return Settings()
