from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable


# Models
@dataclass
class FetchedAsset:
    # Raw asset bytes plus the content type reported by the source, if any
    content: bytes
    content_type: Optional[str] = None
    # set when the fetcher stopped reading early because of max_bytes
    oversized: bool = False

    @property
    def byte_length(self) -> int:
        return len(self.content)


# Interfaces
@runtime_checkable
class FetcherInterface(Protocol):
    # Protocol for reading asset bytes from a local path or remote URL

    def fetch(self, location: str, max_bytes: Optional[int] = None) -> FetchedAsset:
        # Return the asset; may stop early once more than max_bytes are seen
        ...

    def close(self) -> None:
        # Release any open connections
        ...


@runtime_checkable
class MimeResolverInterface(Protocol):
    # Protocol for MIME type lookup from a file location

    def guess(self, location: str) -> str:
        # MIME type, or an empty string when unknown
        ...
