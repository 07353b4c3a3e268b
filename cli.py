#!/usr/bin/env python3
"""
Solana Alpha Agent CLI

Score narratives or run the live pipeline without the web server.
"""

import argparse
import asyncio
import json
import sys
from typing import List
from pydantic import ValidationError
from alpha_agent.config import get_settings
from alpha_agent.context import build_context
from alpha_agent.logging_config import setup_logging, get_logger
from alpha_agent.orchestration.report import summarize
from alpha_agent.orchestration.tasks import run_analysis
from alpha_agent.services.types import Narrative, Opportunity
from alpha_agent.trading.scorer import score

logger = get_logger(__name__)

def load_narratives(file_path: str) -> List[Narrative]:
    """Read narratives from a JSON file (a list, or the radar's ``{"narratives": [...]}``)."""
    with open(file_path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    records = data.get("narratives", []) if isinstance(data, dict) else data
    narratives = []
    for record in records:
        try:
            narratives.append(Narrative.from_record(record))
        except ValidationError as e:
            logger.warning(f"Skipping invalid narrative: {e.error_count()} validation error(s)")
    return narratives

def print_opportunities(opportunities: List[Opportunity]) -> None:
    print(f"\n{'='*60}")
    print("ALPHA OPPORTUNITIES")
    print(f"{'='*60}")

    if not opportunities:
        print("None.")

    for i, opp in enumerate(opportunities, 1):
        print(f"{i}. {opp.narrative} → {opp.action}")
        print(f"   Confidence: {opp.confidence:.2f}   Risk: {opp.risk}   Allocation: {opp.suggested_allocation}")
        print(f"   Tokens:     {', '.join(opp.tokens) or '-'}")
        print(f"   Reasoning:  {opp.reasoning}")
        print()

    print(summarize(opportunities))
    print(f"{'='*60}\n")

def score_file(file_path: str) -> None:
    """Score narratives from a local file; no network access."""
    try:
        narratives = load_narratives(file_path)
    except FileNotFoundError:
        logger.error(f"File not found: {file_path}")
        sys.exit(1)
    except (json.JSONDecodeError, TypeError) as e:
        logger.error(f"Could not read narratives from {file_path}: {e}")
        sys.exit(1)

    logger.info(f"Scoring {len(narratives)} narratives from {file_path}")
    print_opportunities(score(narratives))

def analyze() -> None:
    """Run the live pipeline against the configured upstreams."""
    report = asyncio.run(run_analysis(build_context()))
    print(json.dumps(report, indent=2, ensure_ascii=False))

def serve() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("alpha_agent.main:app", host=settings.host, port=settings.port)

def main():
    parser = argparse.ArgumentParser(
        description="Solana Alpha Agent CLI - narrative scoring and analysis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Score narratives saved from the radar
  python cli.py --file narratives.json

  # Run the full live analysis
  python cli.py --analyze

  # Start the API server
  python cli.py --serve
        """
    )

    parser.add_argument(
        '--file', '-f',
        help='JSON file with narratives to score'
    )
    parser.add_argument(
        '--analyze',
        action='store_true',
        help='Run the full live analysis pipeline'
    )
    parser.add_argument(
        '--serve',
        action='store_true',
        help='Run the API server'
    )
    parser.add_argument(
        '--log-level',
        default='INFO',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: INFO)'
    )

    args = parser.parse_args()

    setup_logging(args.log_level)

    if args.serve:
        serve()
    elif args.analyze:
        analyze()
    elif args.file:
        score_file(args.file)
    else:
        parser.print_help()
        sys.exit(1)

if __name__ == '__main__':
    main()
