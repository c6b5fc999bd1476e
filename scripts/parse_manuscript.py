#!/usr/bin/env python3
"""Parse a manuscript file and print the structured result as JSON."""

import argparse
import logging
import mimetypes
import sys
from pathlib import Path

# Ensure project root is on sys.path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from manuscript.core.models import ParserOptions, RawDocument
from manuscript.core.parsing_service import DocumentParsingService
from manuscript.core.settings import load_settings

logger = logging.getLogger("parse_manuscript")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("path", help="Manuscript file (.txt, .md, .docx, .pdf, .pages)")
    parser.add_argument("--mime", default=None, help="Declared MIME type (guessed if omitted)")
    parser.add_argument("--no-title", action="store_true", help="Do not extract a title")
    parser.add_argument("--enhance", action="store_true", help="Run Ollama content enhancement")
    parser.add_argument("--config", default=None, help="Engine settings YAML")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    path = Path(args.path)
    if not path.is_file():
        logger.error("No such file: %s", path)
        return 2

    settings = load_settings(args.config)
    service = DocumentParsingService(settings=settings)
    raw = RawDocument(
        data=path.read_bytes(),
        file_name=path.name,
        mime_type=args.mime or mimetypes.guess_type(path.name)[0],
    )
    options = ParserOptions(extract_title=not args.no_title, enhance_with_ai=args.enhance)

    result = service.parse(raw, options)
    print(result.model_dump_json(indent=2, exclude_none=True))

    for warning in result.warnings:
        logger.warning(warning)
    return 1 if result.error else 0


if __name__ == "__main__":
    sys.exit(main())
