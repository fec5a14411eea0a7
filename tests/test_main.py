import base64

import pytest

from dataurl_inliner.main import _build_overrides, build_parser, main
from dataurl_inliner.pipeline import Document
from dataurl_inliner.writer import DocumentWriter


@pytest.fixture
def site(asset_dir, monkeypatch):
    monkeypatch.chdir(asset_dir)
    page = asset_dir / "index.html"
    page.write_text('<img src="images/small.png"><img src="images/large.jpg">', encoding="utf-8")
    return asset_dir


class TestOverrides:

    def test_only_given_options(self):
        args = build_parser().parse_args(["a.html"])
        assert _build_overrides(args) == {}

    def test_maps_options(self):
        args = build_parser().parse_args([
            "a.html", "--remote", "-e", "png,jpg", "--include", "icons", "--include", "logos",
            "--exclude-pattern", r"\.gif$", "-l", "0", "-j", "2",
        ])
        assert _build_overrides(args) == {
            "remote": True,
            "extensions": "png,jpg",
            "include": ["icons", "logos"],
            "exclude_patterns": [r"\.gif$"],
            "limit": 0,
            "max_concurrency": 2,
        }


class TestMain:

    def test_rewrites_in_place(self, site):
        assert main([str(site / "index.html")]) == 0

        payload = base64.b64encode((site / "images" / "small.png").read_bytes()).decode()
        assert (site / "index.html").read_text(encoding="utf-8") == (
            f'<img src="data:image/png;base64,{payload}"><img src="images/large.jpg">'
        )

    def test_writes_to_output_dir(self, site):
        out = site / "dist"

        assert main([str(site / "index.html"), "-o", str(out), "-e", "svg"]) == 0

        assert (out / "index.html").read_text(encoding="utf-8") == (site / "index.html").read_text(encoding="utf-8")
        assert "data:" not in (out / "index.html").read_text(encoding="utf-8")

    def test_missing_input(self, site):
        assert main([str(site / "nope.html")]) == 2

    def test_invalid_pattern(self, site):
        assert main([str(site / "index.html"), "--include-pattern", "(unclosed"]) == 5


class TestDocumentWriter:

    def test_atomic_replace(self, tmp_path):
        target = tmp_path / "style.css"
        target.write_text("old", encoding="utf-8")

        written = DocumentWriter().write(Document(path=str(target), contents="new"))

        assert written == target
        assert target.read_text(encoding="utf-8") == "new"
        assert not list(tmp_path.glob("*.tmp"))

    def test_output_dir_created(self, tmp_path):
        writer = DocumentWriter(tmp_path / "out" / "nested")
        written = writer.write(Document(path="/src/site/page.html", contents=b"<p></p>"))
        assert written == tmp_path / "out" / "nested" / "page.html"
        assert written.read_bytes() == b"<p></p>"

    def test_null_document_skipped(self, tmp_path):
        assert DocumentWriter(tmp_path).write(Document(path="empty.html")) is None

    def test_basename_collision_warns(self, tmp_path, caplog):
        writer = DocumentWriter(tmp_path / "out")

        with caplog.at_level("WARNING"):
            writer.write(Document(path="/src/a/index.html", contents="first"))
            writer.write(Document(path="/src/b/index.html", contents="second"))

        assert "/src/b/index.html overwrites /src/a/index.html" in caplog.text
        assert (tmp_path / "out" / "index.html").read_text(encoding="utf-8") == "second"

    def test_rewriting_same_document_does_not_warn(self, tmp_path, caplog):
        writer = DocumentWriter(tmp_path)

        with caplog.at_level("WARNING"):
            writer.write(Document(path="/src/a/index.html", contents="first"))
            writer.write(Document(path="/src/a/index.html", contents="again"))

        assert "overwrites" not in caplog.text
