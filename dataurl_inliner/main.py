# Imports
import sys
import asyncio
import logging
import argparse
from pathlib import Path
from typing import Dict, List

from tqdm import tqdm

from dataurl_inliner.config import Config
from dataurl_inliner.exceptions import InlinerError, InvalidInputError
from dataurl_inliner.pipeline import Document, create_pipeline
from dataurl_inliner.writer import DocumentWriter

# Logger
logger = logging.getLogger(__name__)


# Helpers
def _build_overrides(args: argparse.Namespace) -> dict:
    """Build config overrides from command line arguments."""
    overrides = {}
    if args.remote:
        overrides["remote"] = True
    if args.extensions:
        overrides["extensions"] = args.extensions
    if args.include:
        overrides["include"] = args.include
    if args.exclude:
        overrides["exclude"] = args.exclude
    if args.include_pattern:
        overrides["include_patterns"] = args.include_pattern
    if args.exclude_pattern:
        overrides["exclude_patterns"] = args.exclude_pattern
    if args.limit is not None:
        overrides["limit"] = args.limit
    if args.jobs is not None:
        overrides["max_concurrency"] = args.jobs
    return overrides


def _load_documents(paths: List[str]) -> List[Document]:
    documents = []
    for name in paths:
        path = Path(name)
        try:
            documents.append(Document(path=str(path), contents=path.read_bytes()))
        except OSError as e:
            raise InvalidInputError(f"Cannot read {path}: {e.strerror or e}") from e
    return documents


def _sum_stats(documents: List[Document]) -> Dict[str, int]:
    totals: Dict[str, int] = {}
    for document in documents:
        for key, value in document.stats.items():
            totals[key] = totals.get(key, 0) + value
    return totals


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Inline small images and fonts referenced from HTML/CSS as base64 data URIs"
    )
    parser.add_argument("files", nargs="+", help="HTML or CSS files to transform")
    parser.add_argument("-o", "--output-dir", help="Write results here instead of in place")
    parser.add_argument("--remote", action="store_true", help="Also inline http(s) URLs")
    parser.add_argument("-e", "--extensions", help="Allowed extensions, comma separated (png,jpg)")
    parser.add_argument("--include", action="append", help="Only inline references containing this text")
    parser.add_argument("--exclude", action="append", help="Never inline references containing this text")
    parser.add_argument("--include-pattern", action="append", help="Only inline references matching this regex")
    parser.add_argument("--exclude-pattern", action="append", help="Never inline references matching this regex")
    parser.add_argument("-l", "--limit", type=int, help="Max asset size in bytes, 0 for no limit")
    parser.add_argument("-j", "--jobs", type=int, help="Documents processed concurrently")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


# Execution
def main(argv=None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)-7s | %(message)s",
        datefmt="%H:%M:%S"
    )

    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = Config(**_build_overrides(args))
        documents = _load_documents(args.files)
        writer = DocumentWriter(args.output_dir)

        with create_pipeline(config) as pipeline:
            with tqdm(total=len(documents), desc="Inlining assets", unit="file") as pbar:
                results = asyncio.run(
                    pipeline.transform_many(documents, on_done=lambda _: pbar.update(1))
                )

        for document in results:
            writer.write(document)

        logger.info(f"Processed {len(results)} files. Stats: {_sum_stats(results)}")
        return 0

    except KeyboardInterrupt:
        logger.info("\nInterrupted")
        return 130
    except InvalidInputError as e:
        logger.error(f"Input error: {e}")
        return 2
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 5
    except InlinerError as e:
        logger.error(f"Inliner error: {e}")
        return 6
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
