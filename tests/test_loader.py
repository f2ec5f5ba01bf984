"""Tests for the page file loader."""

import json
from pathlib import Path

import pytest

from src.indexing.loader import SUPPORTED_FORMATS, PageLoader


@pytest.fixture
def loader() -> PageLoader:
    return PageLoader()


class TestPageLoaderTxt:
    def test_form_feed_separates_pages(self, loader: PageLoader, tmp_path: Path) -> None:
        f = tmp_path / "rules.txt"
        f.write_text("COMBAT\nRoll to hit.\fMORALE\nTake a test.\fEnd", encoding="utf-8")

        pages = loader.load(f)

        assert [p.page_number for p in pages] == [1, 2, 3]
        assert pages[0].text == "COMBAT\nRoll to hit."
        assert pages[2].text == "End"

    def test_single_page(self, loader: PageLoader, tmp_path: Path) -> None:
        f = tmp_path / "rules.md"
        f.write_text("Just one page", encoding="utf-8")
        pages = loader.load(f)
        assert len(pages) == 1
        assert pages[0].page_number == 1

    def test_utf16_file(self, loader: PageLoader, tmp_path: Path) -> None:
        f = tmp_path / "rules.txt"
        f.write_bytes("Injuries table\fAdvancement".encode("utf-16"))
        pages = loader.load(f)
        assert "Injuries" in pages[0].text
        assert pages[-1].text.endswith("Advancement")


class TestPageLoaderJson:
    def test_records_with_either_key(self, loader: PageLoader, tmp_path: Path) -> None:
        records = [
            {"pageNumber": 3, "text": "third"},
            {"page_number": 1, "text": "first"},
        ]
        f = tmp_path / "pages.json"
        f.write_text(json.dumps(records), encoding="utf-8")

        pages = loader.load(f)

        assert [(p.page_number, p.text) for p in pages] == [(1, "first"), (3, "third")]

    def test_non_list_rejected(self, loader: PageLoader, tmp_path: Path) -> None:
        f = tmp_path / "pages.json"
        f.write_text('{"text": "x"}', encoding="utf-8")
        with pytest.raises(ValueError, match="Expected a list"):
            loader.load(f)


class TestPageLoaderErrors:
    def test_missing_file(self, loader: PageLoader) -> None:
        with pytest.raises(FileNotFoundError):
            loader.load("/nonexistent/rules.txt")

    def test_unsupported_format(self, loader: PageLoader, tmp_path: Path) -> None:
        f = tmp_path / "rules.pdf"
        f.touch()
        with pytest.raises(ValueError, match="Unsupported file format"):
            loader.load(f)

    def test_supported_extensions(self, loader: PageLoader) -> None:
        for ext, fmt in SUPPORTED_FORMATS.items():
            assert loader._detect_format(Path(f"rules{ext.upper()}")) == fmt
