# Test Fixtures
import pytest
from unittest.mock import Mock

from dataurl_inliner.interfaces import FetchedAsset


@pytest.fixture
def sample_html():
    return """<html>
<body>
  <img class="logo" src="images/logo.png" alt="logo">
  <div style="background: url('images/bg.jpg') no-repeat"></div>
  <img src="https://cdn.example.com/banner.png">
</body>
</html>
"""


@pytest.fixture
def sample_css():
    return """
.hero { background-image: url(images/hero.png); }
.icon { background-image: url("images/icon.svg?v=3"); }
@font-face {
  font-family: 'iconfont';
  src: url('fonts/iconfont.woff') format('woff');
}
"""


@pytest.fixture
def mock_fetcher():
    def _make(content: bytes = b"file", content_type=None):
        fetcher = Mock()
        fetcher.fetch.return_value = FetchedAsset(content=content, content_type=content_type)
        return fetcher
    return _make


@pytest.fixture
def mock_mime():
    resolver = Mock()
    resolver.guess.return_value = "image/png"
    return resolver


@pytest.fixture
def asset_dir(tmp_path):
    """Document directory with a small png, a large jpg and a font."""
    images = tmp_path / "images"
    images.mkdir()
    (images / "small.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\x00")
    (images / "large.jpg").write_bytes(b"\xff" * 5000)
    (tmp_path / "font.woff").write_bytes(b"wOFF0000")
    return tmp_path
