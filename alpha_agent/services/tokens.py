"""Narrative -> Solana token reference table."""
from types import MappingProxyType
from typing import List, Mapping, Tuple

JUP = "JUPyiwrYJFskUPiHa7hkeR8VUtAeFoSYbKedZNsDvCN"
BONK = "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263"
WSOL = "So11111111111111111111111111111111111111112"
MSOL = "mSoLzYCxHdYgdzU16g5QSh3i5K3z3KZK7ytfqcJm7So"
AI_AGENT_MINT = "FoqP7aTaibT5npFKYpYYADYY4Dc1GYVqJBJhV88PBvMV"

# Keys are lower-cased narrative names
NARRATIVE_TOKENS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "defi": (JUP, BONK),
    "ai agents": (AI_AGENT_MINT,),
    "trading": (JUP,),
    "infrastructure": (WSOL,),
    "staking": (MSOL,),
    "rwa": (),
    "memecoins": (BONK,),
})

def tokens_for(narrative_name: str) -> List[str]:
    """Mints associated with a narrative; unknown names map to an empty list."""
    return list(NARRATIVE_TOKENS.get(narrative_name.lower(), ()))

def unique_tokens(groups) -> List[str]:
    """Flatten token groups, dropping duplicates but keeping first-seen order."""
    seen = []
    for group in groups:
        for mint in group:
            if mint not in seen:
                seen.append(mint)
    return seen

def all_tokens() -> List[str]:
    return unique_tokens(NARRATIVE_TOKENS.values())
