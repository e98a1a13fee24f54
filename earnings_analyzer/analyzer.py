"""
Earnings call transcript analyzer.

Takes the raw bytes of an uploaded PDF, extracts its text, and asks the
LLM for a structured sentiment and guidance report. The report is relayed
as the model produced it unless output validation is switched on.
"""

import json
import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from .config import Settings
from .models import AnalysisResult
from .pdf_text import extract_text
from .prompts import SYSTEM_PROMPT, build_user_prompt


__version__ = "1.0.0"

PDF_MEDIA_TYPE = "application/pdf"

logger = logging.getLogger(__name__)


class AnalysisError(Exception):
    """Raised when a transcript cannot be analyzed. Carries an HTTP status."""
    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InvalidUploadError(AnalysisError):
    """The upload is missing or is not a PDF."""
    status_code = 400


class InsufficientTextError(AnalysisError):
    """The PDF holds too little text, e.g. a scanned document."""
    status_code = 422


class EmptyResponseError(AnalysisError):
    """The model returned no content."""
    status_code = 500


class SchemaMismatchError(AnalysisError):
    """The model output does not match the report schema."""
    status_code = 500


def validate_upload(content_type: Optional[str], data: Optional[bytes]) -> None:
    """
    Check that an upload is present and declared as a PDF.

    Size is not checked here; the 20MB ceiling is a client-side control.
    """
    if not data:
        raise InvalidUploadError("No file uploaded. Please select a PDF file.")
    if content_type != PDF_MEDIA_TYPE:
        raise InvalidUploadError("Invalid file type. Please upload a PDF document.")


def truncate_transcript(text: str, limit: int) -> str:
    """Keep the first `limit` characters of the transcript."""
    if len(text) > limit:
        return text[:limit]
    return text


class TranscriptAnalyzer:
    """
    Runs the extract -> prompt -> parse pipeline for one transcript.

    The llm argument is anything with a complete(system_prompt, user_prompt)
    method returning the completion text.
    """

    def __init__(self, llm, settings: Optional[Settings] = None):
        self.llm = llm
        self.settings = settings or Settings()

    def analyze(self, pdf_bytes: bytes) -> Dict[str, Any]:
        """
        Analyze a PDF transcript.

        Args:
            pdf_bytes: Raw PDF file content

        Returns:
            The parsed JSON report

        Raises:
            InsufficientTextError: fewer than min_transcript_chars of text
            EmptyResponseError: the model returned nothing
            SchemaMismatchError: validation is on and the report is malformed
        """
        text = extract_text(pdf_bytes)
        logger.info("Extracted %d characters from %d byte PDF", len(text), len(pdf_bytes))

        if not text or len(text.strip()) < self.settings.min_transcript_chars:
            raise InsufficientTextError(
                "Could not extract sufficient text from the PDF. "
                "The file may be scanned/image-based or empty."
            )

        return self.analyze_text(text)

    def analyze_text(self, text: str) -> Dict[str, Any]:
        """Send already-extracted transcript text to the model."""
        limit = self.settings.max_transcript_chars
        if len(text) > limit:
            logger.info("Truncating transcript from %d to %d characters", len(text), limit)
            text = truncate_transcript(text, limit)

        content = self.llm.complete(SYSTEM_PROMPT, build_user_prompt(text))
        if not content:
            raise EmptyResponseError("AI returned an empty response. Please try again.")

        report = json.loads(content)

        if self.settings.validate_output:
            self._validate_report(report)

        return report

    def _validate_report(self, report: Any) -> None:
        try:
            AnalysisResult.model_validate(report)
        except ValidationError as e:
            logger.warning("Model output failed schema validation: %s", e)
            raise SchemaMismatchError(
                f"AI response did not match the expected report format "
                f"({e.error_count()} problem(s) found)."
            ) from e
