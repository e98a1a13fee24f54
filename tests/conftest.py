"""Shared fixtures: synthetic transcript PDFs and a stub LLM."""

import copy

import fitz  # PyMuPDF
import pytest

from earnings_analyzer.config import Settings


TRANSCRIPT_LINES = [
    "Operator: Good afternoon and welcome to the Acme Industries third quarter earnings call.",
    "CEO: Revenue grew 12 percent year over year to 4.2 billion dollars, a record quarter.",
    "CEO: We expect full year revenue growth in the range of 9 to 11 percent for fiscal 2025.",
    "CFO: EBITDA margin expanded 150 basis points to 21.4 percent on better pricing.",
    "CFO: Capex for the year will be approximately 600 million dollars, weighted to Q4.",
    "CFO: Plant utilization averaged 84 percent, up from 78 percent a year ago.",
    "Analyst: Can you comment on the supply chain headwinds in the European segment?",
    "CEO: Europe remains soft and we are cautious on demand there into next year.",
]

SAMPLE_REPORT = {
    "sentiment": "Optimistic",
    "sentiment_reasoning": (
        "Management called the quarter a record and raised expectations. "
        "Margin expansion was attributed to better pricing."
    ),
    "confidence_score": "High",
    "positives": [
        "Revenue grew 12 percent year over year to 4.2 billion dollars",
        "EBITDA margin expanded 150 basis points to 21.4 percent",
        "Plant utilization rose to 84 percent",
    ],
    "negatives": [
        "Europe remains soft",
        "Supply chain headwinds in the European segment",
        "Capex weighted to Q4 adds execution risk",
    ],
    "guidance": [
        {"metric": "Revenue", "outlook": "Growth of 9 to 11 percent", "timeframe": "FY2025"},
        {"metric": "EBITDA Margin", "outlook": "Not discussed in this call", "timeframe": "N/A"},
        {"metric": "Capex", "outlook": "Approximately 600 million dollars", "timeframe": "FY2025"},
    ],
    "capacity_utilization": "Plant utilization averaged 84 percent, up from 78 percent a year ago.",
    "growth_initiatives": [
        "Pricing actions across product lines",
        "Capacity additions funded by the capex program",
        "Continued focus on North American demand",
    ],
}


class StubLLM:
    """Deterministic stand-in for ChatCompletionClient that records its input."""
    model = "stub-model"

    def __init__(self, content="", error=None):
        self.content = content
        self.error = error
        self.calls = []

    def complete(self, system_prompt, user_prompt):
        self.calls.append((system_prompt, user_prompt))
        if self.error is not None:
            raise self.error
        return self.content


def make_pdf(lines, pages=1):
    """Build a PDF whose pages each carry the given lines of text."""
    doc = fitz.open()
    for _ in range(pages):
        page = doc.new_page()
        y = 72
        for line in lines:
            page.insert_text((50, y), line, fontsize=8)
            y += 12
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def settings():
    return Settings(api_key="test-key")


@pytest.fixture
def sample_report():
    return copy.deepcopy(SAMPLE_REPORT)


@pytest.fixture
def transcript_pdf():
    return make_pdf(TRANSCRIPT_LINES)


@pytest.fixture
def blank_pdf():
    return make_pdf([])


@pytest.fixture
def stub_llm():
    """Factory for StubLLM instances."""
    return StubLLM


@pytest.fixture
def pdf_factory():
    return make_pdf
