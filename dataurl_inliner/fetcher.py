import logging
from pathlib import Path
from typing import Optional, Tuple

import requests
from requests.adapters import HTTPAdapter

from dataurl_inliner.config import Config
from dataurl_inliner.constants import CHUNK_SIZE
from dataurl_inliner.exceptions import AssetFetchError, NetworkTimeoutError
from dataurl_inliner.interfaces import FetchedAsset
from dataurl_inliner.validator import is_remote

logger = logging.getLogger(__name__)


# Service
class AssetFetcher:
    """Reads local asset files and downloads remote ones."""

    def __init__(self, config: Optional[Config] = None):
        self._config = config or Config()
        self._session = requests.Session()
        self._session.headers.update({
            "User-Agent": self._config.user_agent,
            "Accept": "image/*, font/*, */*;q=0.8",
        })
        # one pooled connection per concurrent document worker
        adapter = HTTPAdapter(pool_maxsize=self._config.max_concurrency)
        self._session.mount("http://", adapter)
        self._session.mount("https://", adapter)

    def fetch(self, location: str, max_bytes: Optional[int] = None) -> FetchedAsset:
        """Fetch asset bytes, stopping early once more than max_bytes are seen."""
        if is_remote(location):
            return self._download(location, max_bytes)
        return self._read_local(Path(location), max_bytes)

    def _read_local(self, path: Path, max_bytes: Optional[int]) -> FetchedAsset:
        try:
            if max_bytes and path.stat().st_size > max_bytes:
                logger.debug(f"Local asset over {max_bytes} bytes: {path}")
                return FetchedAsset(content=b"", oversized=True)
            return FetchedAsset(content=path.read_bytes())
        except OSError as e:
            raise AssetFetchError(str(path), e.strerror or str(e)) from e

    def _download(self, url: str, max_bytes: Optional[int]) -> FetchedAsset:
        try:
            response = self._session.get(
                url,
                timeout=self._config.request_timeout,
                stream=True,
            )
            response.raise_for_status()
        except requests.Timeout as e:
            raise NetworkTimeoutError(url) from e
        except requests.RequestException as e:
            raise AssetFetchError(url, str(e)) from e

        with response:
            content_type = self._parse_content_type(response.headers.get("Content-Type"))

            declared = response.headers.get("Content-Length")
            if max_bytes and declared and declared.isdigit() and int(declared) > max_bytes:
                logger.debug(f"Remote asset declares {declared} bytes, limit {max_bytes}: {url}")
                return FetchedAsset(content=b"", content_type=content_type, oversized=True)

            try:
                content, oversized = self._read_stream(response, max_bytes)
            except requests.Timeout as e:
                raise NetworkTimeoutError(url) from e
            except requests.RequestException as e:
                raise AssetFetchError(url, str(e)) from e

        if oversized:
            logger.debug(f"Remote asset over {max_bytes} bytes: {url}")
            return FetchedAsset(content=b"", content_type=content_type, oversized=True)
        return FetchedAsset(content=content, content_type=content_type)

    def _read_stream(self, response: requests.Response, max_bytes: Optional[int]) -> Tuple[bytes, bool]:
        buffer = bytearray()
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
            buffer.extend(chunk)
            if max_bytes and len(buffer) > max_bytes:
                return b"", True
        return bytes(buffer), False

    def _parse_content_type(self, content_type: Optional[str]) -> Optional[str]:
        if not content_type:
            return None
        return content_type.split(";", 1)[0].strip() or None

    def close(self) -> None:
        self._session.close()
        logger.debug("AssetFetcher session closed")

    def __enter__(self) -> "AssetFetcher":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
