"""Render a liturgy JSON payload to a DOCX file without running the server.

Usage:
    python generate_doc.py payload.json
    python generate_doc.py payload.json -o out/easter_vigil.docx
"""
import argparse
import asyncio
import json
import logging
import os
import sys

from app.services.generator import GenerationStatus, generate_document

logger = logging.getLogger("generate_doc")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("payload", help="JSON file with title, subtitle, filename, sections")
    parser.add_argument(
        "-o", "--output",
        help="Output path (default: the payload's filename, or liturgy.docx)",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s - %(message)s")
    args = parse_args(argv)

    with open(args.payload, "r", encoding="utf-8") as f:
        data = json.load(f)

    result = asyncio.run(generate_document(data))

    if result.status is GenerationStatus.INVALID:
        logger.error("Invalid payload; required: %s", ", ".join(result.missing))
        for detail in result.details:
            logger.error("  %s", detail)
        return 2
    if result.status is GenerationStatus.FAILED:
        logger.error("Failed to generate document: %s", result.message)
        return 1

    out_path = args.output or result.filename
    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(out_path, "wb") as f:
        f.write(result.content)

    print(f"Document saved as {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
