#!/usr/bin/env python3
"""
Earnings Call Analyzer - command line

Runs a local PDF transcript through the same pipeline as the API server
and prints the JSON report.

Usage:
    # Print the report for a transcript
    python analyze.py --pdf "transcripts/q3_call.pdf"

    # Write the report to a file and enforce the report schema
    python analyze.py --pdf "q3_call.pdf" --output report.json --validate
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from earnings_analyzer.analyzer import AnalysisError, TranscriptAnalyzer
from earnings_analyzer.config import Settings
from earnings_analyzer.llm_client import ChatCompletionClient


def main(argv=None):
    """Main entry point for the command line analyzer."""
    parser = argparse.ArgumentParser(
        description="Earnings Call Analyzer - structured sentiment and guidance from a transcript PDF",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python analyze.py --pdf transcript.pdf
  python analyze.py --pdf transcript.pdf --output report.json --validate
        """
    )
    parser.add_argument("--pdf", type=Path, required=True, help="Transcript PDF to analyze")
    parser.add_argument("--output", type=Path, help="Write the JSON report here instead of stdout")
    parser.add_argument("--validate", action="store_true",
                        help="Reject model output that does not match the report schema")
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and errors")

    args = parser.parse_args(argv)

    load_dotenv()
    settings = Settings.from_env()
    if args.validate:
        settings.validate_output = True

    logging.basicConfig(
        level=logging.WARNING if args.quiet else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    if not args.pdf.exists():
        print(f"Error: PDF not found: {args.pdf}")
        return 1

    try:
        with ChatCompletionClient(settings) as llm:
            report = TranscriptAnalyzer(llm, settings).analyze(args.pdf.read_bytes())
    except ValueError as e:
        # Missing API key or malformed JSON from the model
        print(f"Error: {e}")
        return 1
    except AnalysisError as e:
        print(f"Error: {e.message}")
        return 1
    except Exception as e:
        logging.getLogger(__name__).exception("Analysis error")
        print(f"Error: Processing failed: {e}")
        return 1

    output = json.dumps(report, indent=2, ensure_ascii=False)
    if args.output:
        args.output.write_text(output + "\n", encoding="utf-8")
        print(f"Report written to {args.output}")
    else:
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
