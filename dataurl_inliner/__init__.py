# Imports
from dataurl_inliner.config import Config
from dataurl_inliner.rules import RuleConfig, LiteralRule, PatternRule
from dataurl_inliner.processors import ReferenceExtractor, normalize_extensions
from dataurl_inliner.validator import EligibilityValidator, is_remote
from dataurl_inliner.encoder import (
    AssetEncoder,
    EncodingOutcome,
    EncodingStatus,
    MimeTypeResolver,
)
from dataurl_inliner.fetcher import AssetFetcher
from dataurl_inliner.pipeline import Document, InlinePipeline, TransformResult, create_pipeline
from dataurl_inliner.writer import DocumentWriter
from dataurl_inliner.exceptions import (
    InlinerError,
    AssetFetchError,
    NetworkTimeoutError,
    UnsupportedInputError,
    InvalidInputError,
)
from dataurl_inliner.interfaces import FetchedAsset, FetcherInterface, MimeResolverInterface


# Exports
__all__ = [
    "Config",
    "RuleConfig",
    "LiteralRule",
    "PatternRule",
    "ReferenceExtractor",
    "normalize_extensions",
    "EligibilityValidator",
    "is_remote",
    "AssetEncoder",
    "EncodingOutcome",
    "EncodingStatus",
    "MimeTypeResolver",
    "AssetFetcher",
    "Document",
    "InlinePipeline",
    "TransformResult",
    "create_pipeline",
    "DocumentWriter",
    "InlinerError",
    "AssetFetchError",
    "NetworkTimeoutError",
    "UnsupportedInputError",
    "InvalidInputError",
    "FetchedAsset",
    "FetcherInterface",
    "MimeResolverInterface",
]
