"""Command-line entry point for the asset extractor.

Usage:
    asset-extractor check
    asset-extractor analyze package.pdf
    asset-extractor extract package.pdf --job-id 42 --out uploads --timeout 300
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import List, Optional

from .config import Config
from .models.asset import ExtractionResult
from .pipeline.orchestrator import ExtractionOrchestrator


def _build_orchestrator(args) -> ExtractionOrchestrator:
    config = Config(use_vision=not args.no_vision)
    return ExtractionOrchestrator(config=config, api_key=args.api_key)


def _cmd_check(args) -> int:
    orchestrator = _build_orchestrator(args)
    available = orchestrator.is_extraction_available()
    print(f"Extraction available: {available}")
    if not available:
        print(f"  Reason: {orchestrator.capabilities.reason}")
    return 0 if available else 1


def _cmd_analyze(args) -> int:
    orchestrator = _build_orchestrator(args)
    analysis = asyncio.run(orchestrator.analyze_pages_by_content(args.pdf))
    print(json.dumps(analysis.to_dict(), indent=2))
    return 0


async def _extract_with_deadline(
    orchestrator: ExtractionOrchestrator,
    pdf_path: str,
    job_id: str,
    output_root: str,
    timeout: Optional[float],
) -> ExtractionResult:
    try:
        return await asyncio.wait_for(
            orchestrator.extract_all_assets(pdf_path, job_id, output_root),
            timeout=timeout,
        )
    except asyncio.TimeoutError:
        return ExtractionResult(
            summary=f"Extraction incomplete: timed out after {timeout:g}s"
        )


def _cmd_extract(args) -> int:
    orchestrator = _build_orchestrator(args)
    result = asyncio.run(_extract_with_deadline(
        orchestrator, args.pdf, args.job_id, args.out, args.timeout
    ))

    print("\nResults:")
    print(f"  Drawings: {len(result.drawings)}")
    print(f"  Maps: {len(result.maps)}")
    print(f"  Photos: {len(result.photos)}")
    print(f"  Summary: {result.summary}")

    job_dir = os.path.join(
        args.out, orchestrator.config.job_dir_template.format(job_id=args.job_id)
    )
    if result.total_assets:
        manifest = result.save(job_dir, orchestrator.config.manifest_file)
        print(f"\nManifest saved to: {manifest}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Work-package PDF asset extractor"
    )
    parser.add_argument("--api-key", help="OpenAI API key (default: OPENAI_API_KEY)")
    parser.add_argument("--no-vision", action="store_true", help="Skip the vision fallback")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Report whether PDF rendering works here")
    check.set_defaults(func=_cmd_check)

    analyze = sub.add_parser("analyze", help="Classify pages and print page numbers")
    analyze.add_argument("pdf", help="Path to the PDF package")
    analyze.set_defaults(func=_cmd_analyze)

    extract = sub.add_parser("extract", help="Render photos, drawings and maps to JPEG")
    extract.add_argument("pdf", help="Path to the PDF package")
    extract.add_argument("--job-id", required=True, help="Job identifier")
    extract.add_argument("--out", default="uploads", help="Output root directory")
    extract.add_argument("--timeout", type=float, help="Give up after this many seconds")
    extract.set_defaults(func=_cmd_extract)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
