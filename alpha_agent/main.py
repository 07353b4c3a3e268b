import logging
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from alpha_agent import __version__
from alpha_agent.config import get_settings
from alpha_agent.context import AgentContext, build_context
from alpha_agent.logging_config import configure_app_logging
from alpha_agent.routers import agent

configure_app_logging(get_settings().log_level)
logger = logging.getLogger(__name__)

SERVICE_INFO = {
    "name": "Solana Alpha Agent",
    "version": __version__,
    "description": "AI agent that detects Solana narratives and finds alpha opportunities using on-chain and off-chain data",
    "architecture": {
        "data_layer": "Solana Narrative Radar (GitHub, DeFiLlama, Social signals)",
        "analysis_layer": "Confidence-weighted opportunity scoring",
        "execution_layer": "Solana RPC + Jupiter for token operations",
    },
    "endpoints": {
        "GET /health": "Health check",
        "GET /narratives": "Current narratives from Narrative Radar",
        "GET /alpha": "Alpha opportunities with token suggestions",
        "GET /wallet": "Agent wallet info + on-chain stats",
        "GET /prices": "Token prices for narrative-related tokens",
        "POST /analyze": "Full analysis pipeline",
    },
}

def create_app(context: Optional[AgentContext] = None) -> FastAPI:
    """Build the API around a ready agent context (built from settings if omitted)."""
    context = context or build_context()

    app = FastAPI(
        title="Solana Alpha Agent",
        description="Narrative-driven alpha opportunities for the Solana ecosystem",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json"
    )
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in context.settings.cors_origins.split(",") if o.strip()],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(agent.router)

    @app.get("/")
    def root():
        """Root endpoint - service information."""
        return SERVICE_INFO

    @app.on_event("startup")
    async def startup():
        settings = context.settings
        logger.info(f"Solana Alpha Agent running on port {settings.port}")
        logger.info(f"Narrative Radar: {settings.narrative_radar_url}")
        logger.info(f"Wallet: {context.wallet.address} ({context.wallet.network})")

    @app.on_event("shutdown")
    async def shutdown():
        logger.info("Solana Alpha Agent shutting down")

    return app

app = create_app()
