#!/usr/bin/env python3
"""
Material Chunking Script

Extracts segments from a course material (PDF or image), chunks them with
the configured token limit and overlap, and writes the result as JSON.

Usage:
    python scripts/chunk_material.py lecture-01.pdf -o lecture-01-chunks.json
    python scripts/chunk_material.py scan.png --no-ocr
    python scripts/chunk_material.py notes.pdf --chunk-tokens 500 --overlap 50

Environment:
    CHUNK_TOKENS, CHUNK_OVERLAP, OCR_LANGUAGE, OCR_MAX_PDF_PAGES (see .env)
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from chunking import ChunkingConfig, ChunkingService, ChunkingServiceConfig
from course_rag.logging_config import get_logger, setup_logging
from course_rag.settings import PipelineSettings
from extraction.exceptions import ExtractionError, format_error_chain

logger = get_logger(__name__)


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Extract and chunk a course material for retrieval",
    )
    parser.add_argument("path", help="Path to a PDF or image file")
    parser.add_argument("-o", "--output", help="Output JSON path (default: <input>-chunks.json)")
    parser.add_argument("--chunk-tokens", type=int, help="Override CHUNK_TOKENS")
    parser.add_argument("--overlap", type=float, help="Override CHUNK_OVERLAP")
    parser.add_argument("--no-ocr", action="store_true", help="Skip OCR for pages without text")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    settings = PipelineSettings.from_env()
    chunking = settings.chunking
    if args.chunk_tokens is not None or args.overlap is not None:
        chunking = ChunkingConfig(
            chunk_token_limit=args.chunk_tokens if args.chunk_tokens is not None else chunking.chunk_token_limit,
            chunk_overlap_tokens=args.overlap if args.overlap is not None else chunking.chunk_overlap_tokens,
        )
    config = ChunkingServiceConfig(chunking=chunking, ocr=settings.ocr)
    if args.no_ocr:
        config = replace(config, ocr_enabled=False)

    source = Path(args.path)
    if not source.exists():
        logger.error(f"File not found: {source}")
        return 1

    service = ChunkingService(config)
    try:
        result = service.chunk_material(source.read_bytes(), source.name)
    except ExtractionError as exc:
        logger.error(f"Extraction failed for {source.name}:\n{format_error_chain(exc)}")
        return 1

    output = Path(args.output) if args.output else source.with_name(f"{source.stem}-chunks.json")
    result.save(str(output))

    stats = result.stats
    print(f"Chunks:     {stats.total_chunks}")
    print(f"Tokens:     {stats.total_tokens} (avg {stats.avg_chunk_tokens:.1f}, max {stats.max_chunk_tokens})")
    print(f"Segments:   {stats.segments_processed} processed, {stats.segments_skipped} skipped")
    print(f"Saved to:   {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
