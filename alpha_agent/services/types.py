from pydantic import BaseModel, ConfigDict, PrivateAttr, field_validator
from typing import Any, Dict, Literal, Optional, List

Action = Literal["ACCUMULATE", "DCA", "WATCHLIST"]
RiskLevel = Literal["LOW", "MEDIUM", "HIGH"]

class Narrative(BaseModel):
    # Radar records may carry fields we don't model; keep them for /narratives
    model_config = ConfigDict(extra="allow")

    name: str
    confidence: str = ""
    direction: str = ""
    explanation: str = ""
    ideas: List[Any] = []  # build ideas, passed through as sent
    supporting_signals: List[str] = []

    _record: Optional[Dict[str, Any]] = PrivateAttr(default=None)

    @field_validator("confidence", "direction", "explanation", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value

    @field_validator("ideas", "supporting_signals", mode="before")
    @classmethod
    def _none_to_list(cls, value):
        return [] if value is None else value

    @classmethod
    def from_record(cls, record: Any) -> "Narrative":
        """Validate a radar record, remembering it verbatim for pass-through."""
        narrative = cls.model_validate(record)
        narrative._record = record
        return narrative

    def to_record(self) -> Dict[str, Any]:
        """The record as the radar sent it (or as constructed, without defaults)."""
        if self._record is not None:
            return self._record
        return self.model_dump(exclude_unset=True)

class Opportunity(BaseModel):
    narrative: str
    action: Action
    tokens: List[str] = []
    reasoning: str
    confidence: float
    risk: RiskLevel
    suggested_allocation: str

class WalletStats(BaseModel):
    address: str
    balance_sol: float = 0
    recent_transactions: Optional[int] = None
    network: Optional[str] = None
    error: Optional[str] = None

class NarrativeFetch(BaseModel):
    """Outcome of a narrative radar poll; ``error`` is set when it degraded to empty."""
    narratives: List[Narrative] = []
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

class PriceFetch(BaseModel):
    """Outcome of a price lookup; every price is optional."""
    prices: Dict[str, Optional[float]] = {}
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def get(self, mint: str) -> Optional[float]:
        return self.prices.get(mint)
