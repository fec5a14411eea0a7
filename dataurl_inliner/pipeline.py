"""Inline Pipeline - Extract, validate, encode and rewrite asset references per document."""

import asyncio
import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from dataurl_inliner.config import Config
from dataurl_inliner.encoder import AssetEncoder, EncodingStatus
from dataurl_inliner.exceptions import UnsupportedInputError
from dataurl_inliner.fetcher import AssetFetcher
from dataurl_inliner.interfaces import FetcherInterface, MimeResolverInterface
from dataurl_inliner.processors import ReferenceExtractor
from dataurl_inliner.rules import RuleConfig
from dataurl_inliner.validator import EligibilityValidator

logger = logging.getLogger(__name__)

STREAMING_NOT_SUPPORTED = "dataurl-inliner: Streaming not supported"


# Models
@dataclass
class Document:
    """A unit of content at the host boundary: str, bytes, None, or a stream."""

    path: str
    contents: Any = None
    stats: Dict[str, int] = field(default_factory=dict)

    @property
    def is_null(self) -> bool:
        return self.contents is None

    @property
    def is_stream(self) -> bool:
        return not isinstance(self.contents, (str, bytes, bytearray)) and not self.is_null


@dataclass
class TransformResult:
    content: str
    stats: Dict[str, int]


def _new_stats() -> Dict[str, int]:
    return {
        "references": 0,
        "unique": 0,
        "rejected": 0,
        EncodingStatus.ENCODED.value: 0,
        EncodingStatus.OVERSIZED.value: 0,
        EncodingStatus.FAILED.value: 0,
        "replaced": 0,
        "errors": 0,
    }


class InlinePipeline:
    """Rewrites asset references into data URIs, one document at a time."""

    def __init__(
        self,
        rules: Optional[RuleConfig] = None,
        fetcher: Optional[FetcherInterface] = None,
        mime_resolver: Optional[MimeResolverInterface] = None,
        max_concurrency: int = 4,
    ):
        self._rules = rules or RuleConfig()
        self._fetcher = fetcher or AssetFetcher()
        self._extractor = ReferenceExtractor()
        self._validator = EligibilityValidator(self._rules)
        self._encoder = AssetEncoder(self._fetcher, mime_resolver)
        self._max_concurrency = max_concurrency

    @property
    def rules(self) -> RuleConfig:
        return self._rules

    def transform(self, text: str, origin: str) -> str:
        """Return text with every eligible, fetchable, small enough reference inlined."""
        return self.transform_document(text, origin).content

    def transform_document(self, text: str, origin: str) -> TransformResult:
        # reference -> data URI, "" (not inlinable) or False (rejected); owned by this call
        cache: Dict[str, Union[str, bool]] = {}
        stats = _new_stats()
        content = text

        try:
            for reference in self._extractor.extract(text):
                stats["references"] += 1
                if reference not in cache:
                    stats["unique"] += 1
                    cache[reference] = self._evaluate(reference, origin, stats)

                cached = cache[reference]
                if cached:
                    content = content.replace(reference, cached, 1)
                    stats["replaced"] += 1
        except Exception as e:
            stats["errors"] += 1
            logger.exception(f"Failed to inline assets in {origin}: {e}")

        logger.debug(f"Transformed {origin}: {stats}")
        return TransformResult(content=content, stats=stats)

    def _evaluate(self, reference: str, origin: str, stats: Dict[str, int]) -> Union[str, bool]:
        if not self._validator.is_eligible(reference):
            stats["rejected"] += 1
            return False

        outcome = self._encoder.encode(reference, origin, self._rules.limit)
        stats[outcome.status.value] += 1
        return outcome.data_uri

    # Host boundary
    def process(self, document: Document) -> Document:
        """Transform a host document; null contents pass through, streams are refused."""
        if document.is_null:
            return document

        if document.is_stream:
            raise UnsupportedInputError(STREAMING_NOT_SUPPORTED)

        if isinstance(document.contents, str):
            result = self.transform_document(document.contents, document.path)
            return replace(document, contents=result.content, stats=result.stats)

        try:
            text = bytes(document.contents).decode("utf-8")
        except UnicodeDecodeError as e:
            logger.error(f"Skipped non UTF-8 document {document.path}: {e}")
            return document

        result = self.transform_document(text, document.path)
        return replace(document, contents=result.content.encode("utf-8"), stats=result.stats)

    async def transform_many(
        self,
        documents: Iterable[Document],
        max_concurrency: Optional[int] = None,
        on_done: Optional[Callable[[Document], None]] = None,
    ) -> List[Document]:
        """Process documents concurrently on worker threads, results in input order."""
        semaphore = asyncio.Semaphore(max_concurrency or self._max_concurrency)

        async def _run(document: Document) -> Document:
            async with semaphore:
                result = await asyncio.to_thread(self.process, document)
            if on_done:
                on_done(result)
            return result

        return list(await asyncio.gather(*(_run(d) for d in documents)))

    def close(self) -> None:
        self._fetcher.close()
        logger.debug("Pipeline resources closed")

    def __enter__(self) -> "InlinePipeline":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


# Factory
def create_pipeline(config: Optional[Config] = None, **overrides) -> InlinePipeline:
    """Build a pipeline from settings; keyword overrides win over config and environment."""
    if config is None:
        config = Config(**overrides)
    elif overrides:
        config = Config(**{**config.model_dump(), **overrides})

    return InlinePipeline(
        rules=config.to_rules(),
        fetcher=AssetFetcher(config),
        max_concurrency=config.max_concurrency,
    )
