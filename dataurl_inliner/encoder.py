"""Asset Encoder - Resolves references, fetches bytes and builds base64 data URIs."""

import base64
import logging
import mimetypes
import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from dataurl_inliner.constants import DATA_URI_TEMPLATE, EXTRA_MIME_TYPES
from dataurl_inliner.interfaces import FetcherInterface, MimeResolverInterface
from dataurl_inliner.validator import is_remote

logger = logging.getLogger(__name__)


# MIME lookup
class MimeTypeResolver:
    """mimetypes based lookup with web font and image types registered."""

    def __init__(self):
        self._types = mimetypes.MimeTypes()
        for ext, mime_type in EXTRA_MIME_TYPES.items():
            self._types.add_type(mime_type, ext)

    def guess(self, location: str) -> str:
        mime_type, _ = self._types.guess_type(location, strict=False)
        return mime_type or ""


# Outcomes
class EncodingStatus(str, Enum):
    ENCODED = "encoded"
    OVERSIZED = "oversized"
    FAILED = "failed"


@dataclass(frozen=True)
class EncodingOutcome:
    status: EncodingStatus
    data_uri: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is EncodingStatus.ENCODED

    @classmethod
    def encoded(cls, data_uri: str) -> "EncodingOutcome":
        return cls(EncodingStatus.ENCODED, data_uri)

    @classmethod
    def oversized(cls) -> "EncodingOutcome":
        return cls(EncodingStatus.OVERSIZED)

    @classmethod
    def failed(cls, error: str) -> "EncodingOutcome":
        return cls(EncodingStatus.FAILED, error=error)


def build_data_uri(mime_type: str, content: bytes) -> str:
    payload = base64.b64encode(content).decode("ascii")
    return DATA_URI_TEMPLATE.format(mime_type=mime_type, payload=payload)


# Encoder
class AssetEncoder:
    """Turns one reference into a data URI, or an empty result when it should stay as is."""

    def __init__(self, fetcher: FetcherInterface, mime_resolver: Optional[MimeResolverInterface] = None):
        self._fetcher = fetcher
        self._mime = mime_resolver or MimeTypeResolver()

    def encode(self, reference: str, origin: str, limit: Optional[int] = None) -> EncodingOutcome:
        """Never raises: failures are logged and reported as FAILED."""
        try:
            return self._encode(reference, origin, limit)
        except Exception as e:
            message = str(e)
            logger.error(message)
            return EncodingOutcome.failed(message)

    def _encode(self, reference: str, origin: str, limit: Optional[int]) -> EncodingOutcome:
        location = reference
        mime_type = ""

        if not is_remote(reference):
            location = self.resolve_local(reference, origin)
            mime_type = self._mime.guess(location)

        asset = self._fetcher.fetch(location, max_bytes=limit or None)

        if asset.oversized or (limit and asset.byte_length > limit):
            logger.debug(f"Skipped oversized asset (limit {limit} bytes): {reference}")
            return EncodingOutcome.oversized()

        if asset.content_type:
            mime_type = asset.content_type

        return EncodingOutcome.encoded(build_data_uri(mime_type, asset.content))

    @staticmethod
    def resolve_local(reference: str, origin: str) -> str:
        """Join a reference against the directory of the referencing document.

        Query strings and fragments are cache busters, not part of the file name.
        A leading slash still resolves under the document directory.
        """
        path = reference.split("?", 1)[0].split("#", 1)[0]
        return os.path.normpath(os.path.join(os.path.dirname(origin), path.lstrip("/\\")))
