"""Loading extracted page text from disk for the indexing runner."""

import json
import logging
from pathlib import Path

import chardet

from src.models.page import PageText

logger = logging.getLogger(__name__)

# Supported file extensions mapped to format identifiers
SUPPORTED_FORMATS: dict[str, str] = {
    ".txt": "txt",
    ".md": "txt",
    ".json": "json",
}

# Text exports separate pages with form feeds
PAGE_SEPARATOR = "\f"


class PageLoader:
    """Reads page text files produced by the text-extraction step.

    - ``.txt`` / ``.md``: pages separated by form feed characters,
      numbered from 1.
    - ``.json``: a list of ``{"page_number": int, "text": str}`` records
      (``pageNumber`` is accepted too).
    """

    def load(self, file_path: str | Path) -> list[PageText]:
        """Load the pages of one source document.

        Args:
            file_path: Path to the pages file.

        Returns:
            Pages sorted by page_number.

        Raises:
            FileNotFoundError: If file_path does not exist.
            ValueError: If the format is unsupported or the JSON is malformed.
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        file_format = self._detect_format(path)
        if file_format == "json":
            pages = self._load_json(path)
        else:
            pages = self._load_txt(path)

        logger.info("Loaded %d pages from %s", len(pages), path)
        return sorted(pages, key=lambda page: page.page_number)

    def _detect_format(self, file_path: Path) -> str:
        ext = file_path.suffix.lower()
        if ext not in SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported file format: '{ext}'. "
                f"Supported: {', '.join(SUPPORTED_FORMATS.keys())}"
            )
        return SUPPORTED_FORMATS[ext]

    def _load_txt(self, file_path: Path) -> list[PageText]:
        text = self._read_text(file_path)
        return [
            PageText(text=page_text, page_number=number)
            for number, page_text in enumerate(text.split(PAGE_SEPARATOR), start=1)
        ]

    def _load_json(self, file_path: Path) -> list[PageText]:
        data = json.loads(self._read_text(file_path))
        if not isinstance(data, list):
            raise ValueError(f"Expected a list of pages in {file_path}")
        return [PageText.model_validate(record) for record in data]

    def _read_text(self, file_path: Path) -> str:
        """Decode a page file as UTF-8, or as whatever chardet guesses."""
        try:
            return file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            pass

        raw = file_path.read_bytes()
        guess = chardet.detect(raw)
        encoding = guess.get("encoding") or "utf-8"
        if guess.get("confidence", 0) < 0.7:
            logger.warning("Guessed encoding %s for %s with low confidence", encoding, file_path)
        try:
            return raw.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            logger.error("Could not decode %s as %s; replacing bad bytes", file_path, encoding)
            return raw.decode("utf-8", errors="replace")
