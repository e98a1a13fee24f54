#!/usr/bin/env python3
"""
Earnings Call Analyzer API Server

FastAPI application that accepts a PDF earnings call transcript and returns
a structured sentiment and guidance report produced by an LLM. Also serves
the single-page report viewer.

Usage:
    # Start the server
    uvicorn api:app --host 0.0.0.0 --port 8000 --reload

    # Or run directly
    python api.py

Endpoints:
    GET  /             - Report viewer (upload form)
    POST /report       - Upload PDF from the viewer form, render the report page
    POST /api/analyze  - Upload PDF, return the report as JSON
    GET  /health       - Health check endpoint
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, File, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from earnings_analyzer.analyzer import (
    AnalysisError,
    InvalidUploadError,
    TranscriptAnalyzer,
    __version__,
    validate_upload,
)
from earnings_analyzer.config import Settings
from earnings_analyzer.llm_client import ChatCompletionClient
from earnings_analyzer.viewer import (
    ViewPhase,
    confidence_style,
    initial_state,
    receive_response,
    select_file,
    tone_style,
    tone_width,
)

# Load environment variables
load_dotenv()

VIEWER_DIR = Path(__file__).parent / "viewer"

logger = logging.getLogger(__name__)


def _build_templates() -> Jinja2Templates:
    templates = Jinja2Templates(directory=VIEWER_DIR / "templates")
    templates.env.globals.update(
        ViewPhase=ViewPhase,
        tone_style=tone_style,
        tone_width=tone_width,
        confidence_style=confidence_style,
    )
    return templates


templates = _build_templates()


async def _run_pipeline(app: FastAPI, content_type: Optional[str], data: Optional[bytes]) -> Dict[str, Any]:
    """Validate an upload and run it through the analyzer."""
    validate_upload(content_type, data)

    analyzer: Optional[TranscriptAnalyzer] = app.state.analyzer
    if analyzer is None:
        raise AnalysisError("AI service not configured. Set GROQ_API_KEY and restart the server.")

    try:
        # Run the blocking pipeline in the thread pool
        loop = asyncio.get_event_loop()
        return await loop.run_in_executor(None, analyzer.analyze, data)
    except AnalysisError:
        raise
    except Exception as e:
        logger.exception("Analysis error")
        raise AnalysisError(f"Processing failed: {e}") from e


async def analysis_error_handler(request: Request, exc: AnalysisError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # The only request input is the file field
    error = InvalidUploadError("No file uploaded. Please select a PDF file.")
    return JSONResponse(status_code=error.status_code, content={"error": error.message})


def create_app(settings: Optional[Settings] = None, llm=None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Configuration; read from the environment when omitted
        llm: Chat completion client; built from settings at startup when omitted
    """
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage application lifecycle."""
        logger.info("Starting Earnings Call Analyzer API Server...")
        owned_client = None

        if app.state.analyzer is None:
            try:
                owned_client = ChatCompletionClient(settings)
                app.state.analyzer = TranscriptAnalyzer(owned_client, settings)
                logger.info("LLM client initialized (%s)", settings.model)
            except ValueError as e:
                logger.warning("LLM initialization failed: %s", e)

        yield

        logger.info("Shutting down Earnings Call Analyzer API Server...")
        if owned_client:
            owned_client.close()
            app.state.analyzer = None

    app = FastAPI(
        title="Earnings Call Analyzer API",
        description="Upload an earnings call transcript PDF and get a structured sentiment and guidance report",
        version=__version__,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.analyzer = TranscriptAnalyzer(llm, settings) if llm is not None else None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(AnalysisError, analysis_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.mount("/static", StaticFiles(directory=VIEWER_DIR / "static"), name="static")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": __version__,
            "llm": "initialized" if app.state.analyzer is not None else "not initialized",
            "model": settings.model,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

    @app.post("/api/analyze")
    async def analyze_transcript(file: Optional[UploadFile] = File(None)):
        """
        Upload a PDF transcript and return the analysis report.

        Errors are returned as {"error": message} with status 400 (missing
        or non-PDF file), 422 (no extractable text) or 500 (model failure).
        """
        data = await file.read() if file is not None else None
        content_type = file.content_type if file is not None else None
        report = await _run_pipeline(app, content_type, data)
        return JSONResponse(content=report)

    @app.get("/", response_class=HTMLResponse)
    async def home(request: Request):
        """Serve the viewer with an empty upload form."""
        return _render(request, initial_state())

    @app.post("/report", response_class=HTMLResponse)
    async def report_page(request: Request, file: Optional[UploadFile] = File(None)):
        """Form fallback for the viewer: analyze the upload and render the page."""
        data = await file.read() if file is not None else b""
        file_name = file.filename if file is not None else ""
        content_type = file.content_type if file is not None else None

        state = select_file(
            initial_state(), file_name, content_type, len(data),
            max_bytes=settings.max_upload_bytes
        )
        if state.phase is ViewPhase.LOADING:
            try:
                report = await _run_pipeline(app, content_type, data)
                state = receive_response(state, 200, report)
            except AnalysisError as e:
                state = receive_response(state, e.status_code, {"error": e.message})

        return _render(request, state)

    def _render(request: Request, state):
        return templates.TemplateResponse(
            request,
            "index.html",
            {"state": state, "max_upload_mb": settings.max_upload_bytes // (1024 * 1024)}
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = app.state.settings
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    print(f"""
    Earnings Call Analyzer API Server v{__version__}

    Starting server at http://{settings.host}:{settings.port}

    Endpoints:
      GET  /             - Report viewer
      POST /api/analyze  - Upload transcript PDF, get JSON report
      GET  /health       - Health check

    Documentation: http://{settings.host}:{settings.port}/docs
    """)

    uvicorn.run(app, host=settings.host, port=settings.port)
