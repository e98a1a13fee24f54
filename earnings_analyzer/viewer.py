"""
View state for the single-page report viewer.

The page is always in exactly one phase: idle (upload form), loading, or
result. An error message may overlay the idle phase only. Each user or
network event is a function that maps the current state to the next one.
The same machine is mirrored by viewer/static/app.js in the browser.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional

from .analyzer import PDF_MEDIA_TYPE
from .config import MAX_UPLOAD_BYTES


class ViewPhase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    RESULT = "result"


class InvalidTransitionError(ValueError):
    """Raised when an event does not apply to the current phase."""
    pass


@dataclass(frozen=True)
class ViewState:
    phase: ViewPhase = ViewPhase.IDLE
    file_name: Optional[str] = None
    result: Optional[Dict[str, Any]] = None
    error: Optional[str] = None


def initial_state() -> ViewState:
    return ViewState()


def _require(state: ViewState, phase: ViewPhase, event: str) -> None:
    if state.phase is not phase:
        raise InvalidTransitionError(
            f"'{event}' is not allowed while {state.phase.value}"
        )


def select_file(
    state: ViewState,
    file_name: str,
    content_type: Optional[str],
    size: int,
    max_bytes: int = MAX_UPLOAD_BYTES
) -> ViewState:
    """
    A file was picked or dropped.

    Runs the advisory client checks; a rejected file leaves the view idle
    with an inline message, an accepted one moves it to loading.
    """
    _require(state, ViewPhase.IDLE, "select_file")
    if content_type != PDF_MEDIA_TYPE:
        return replace(state, error="Only PDF files are accepted.")
    if size > max_bytes:
        limit_mb = max_bytes // (1024 * 1024)
        return replace(state, error=f"File exceeds the {limit_mb} MB limit.")
    return ViewState(phase=ViewPhase.LOADING, file_name=file_name)


def receive_response(state: ViewState, status_code: int, body: Any) -> ViewState:
    """The analysis request came back, successfully or not."""
    _require(state, ViewPhase.LOADING, "receive_response")
    if 200 <= status_code < 300:
        return ViewState(phase=ViewPhase.RESULT, file_name=state.file_name, result=body)

    message = None
    if isinstance(body, dict):
        message = body.get("error")
    return ViewState(phase=ViewPhase.IDLE, error=message or "Analysis failed.")


def fail_request(state: ViewState, message: str = "Connection failed. Please retry.") -> ViewState:
    """The request never produced a response (network failure)."""
    _require(state, ViewPhase.LOADING, "fail_request")
    return ViewState(phase=ViewPhase.IDLE, error=message)


def reset(state: ViewState) -> ViewState:
    """Start over with an empty upload form."""
    return initial_state()


# Presentation maps, keyed by the report's enum values

TONE_STYLES = {
    "Optimistic": "tone-optimistic",
    "Cautious": "tone-cautious",
    "Neutral": "tone-neutral",
    "Pessimistic": "tone-pessimistic",
}

TONE_WIDTHS = {
    "Optimistic": 85,
    "Cautious": 55,
    "Neutral": 50,
}

CONFIDENCE_STYLES = {
    "High": "conf-high",
    "Medium": "conf-medium",
    "Low": "conf-low",
}


# Report values come straight from the model and may be any JSON type

def tone_style(sentiment: Any) -> str:
    if not isinstance(sentiment, str):
        return TONE_STYLES["Neutral"]
    return TONE_STYLES.get(sentiment, TONE_STYLES["Neutral"])


def tone_width(sentiment: Any) -> int:
    if not isinstance(sentiment, str):
        return 25
    return TONE_WIDTHS.get(sentiment, 25)


def confidence_style(score: Any) -> str:
    if not isinstance(score, str):
        return CONFIDENCE_STYLES["Medium"]
    return CONFIDENCE_STYLES.get(score, CONFIDENCE_STYLES["Medium"])
