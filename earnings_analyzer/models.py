"""
Data models for earnings call analysis reports.

The report is produced by the LLM as a single JSON object. These models
describe that object; they are applied only when output validation is
enabled; otherwise the model output is relayed as-is.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field, field_validator


# Sentinel values the model is instructed to use for absent topics
NOT_DISCUSSED = "Not discussed in this call"
NOT_APPLICABLE = "N/A"
NOT_MENTIONED = "Not mentioned in transcript"

# Guidance rows every report must carry, matched against the metric name
REQUIRED_GUIDANCE = {
    "revenue": ("revenue", "sales"),
    "margin": ("margin",),
    "capex": ("capex", "capital expenditure"),
}


class Sentiment(str, Enum):
    """Overall management tone on the call."""
    OPTIMISTIC = "Optimistic"
    CAUTIOUS = "Cautious"
    NEUTRAL = "Neutral"
    PESSIMISTIC = "Pessimistic"


class ConfidenceScore(str, Enum):
    """How clear and specific management's own forward guidance was."""
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class GuidanceItem(BaseModel):
    """A single forward-looking statement keyed by financial metric."""
    metric: str
    outlook: str
    timeframe: str


class AnalysisResult(BaseModel):
    """Structured sentiment and guidance report for one transcript."""
    sentiment: Sentiment
    sentiment_reasoning: str = Field(min_length=1)
    confidence_score: ConfidenceScore
    positives: List[str] = Field(min_length=3, max_length=5)
    negatives: List[str] = Field(min_length=3, max_length=5)
    guidance: List[GuidanceItem] = Field(min_length=1)
    capacity_utilization: str
    growth_initiatives: List[str] = Field(min_length=3, max_length=5)

    @field_validator("guidance")
    @classmethod
    def guidance_covers_required_metrics(cls, v):
        metrics = [item.metric.lower() for item in v]
        missing = [
            name for name, keywords in REQUIRED_GUIDANCE.items()
            if not any(k in metric for metric in metrics for k in keywords)
        ]
        if missing:
            raise ValueError(f"guidance is missing rows for: {', '.join(missing)}")
        return v
