"""Tests for source-level chunk assembly."""

import pytest

from src.config import ChunkingConfig
from src.indexing.assembler import ChunkAssembler
from src.indexing.sections import SectionExtractor
from src.indexing.segmenter import TextSegmenter
from src.models.page import PageText
from src.models.section import Section, make_section_id

SMALL = ChunkingConfig(target_size=200, min_size=60, max_size=300, overlap_size=30)


@pytest.fixture
def assembler() -> ChunkAssembler:
    return ChunkAssembler(TextSegmenter(SMALL))


def _section(ordinal: int, title: str, text: str | None, page: int) -> Section:
    return Section(
        id=make_section_id("src", ordinal),
        source_id="src",
        title=title,
        section_path=[title],
        page_start=page,
        page_end=page + 1,
        text=text,
    )


def _long_text(prefix: str, words: int = 150) -> str:
    return " ".join(f"{prefix}{i}" for i in range(words))


class TestPageFallback:
    def test_single_sentence_page(self) -> None:
        pages = [PageText(text="Combat Rules. Roll 1d6 to hit.", page_number=1)]
        sections = SectionExtractor().extract(pages, source_id="src")
        assembler = ChunkAssembler(TextSegmenter(ChunkingConfig()))

        chunks = assembler.assemble(pages, sections, source_id="src")

        assert sections == []
        assert len(chunks) == 1
        chunk = chunks[0]
        assert chunk.order_index == 0
        assert chunk.score_hints.has_dice_notation is True
        assert "roll" in chunk.keywords
        assert "combat" in chunk.keywords
        assert chunk.section_id is None
        assert chunk.section_path == []

    def test_pages_chunked_in_order(self, assembler: ChunkAssembler) -> None:
        pages = [
            PageText(text=_long_text("alpha"), page_number=1),
            PageText(text="   ", page_number=2),
            PageText(text=_long_text("beta"), page_number=5),
        ]
        chunks = assembler.assemble(pages, [], source_id="src")

        assert [c.order_index for c in chunks] == list(range(len(chunks)))
        assert {c.page_start for c in chunks} == {1, 5}
        page_order = [c.page_start for c in chunks]
        assert page_order == sorted(page_order)
        assert all(c.source_id == "src" for c in chunks)

    def test_no_pages(self, assembler: ChunkAssembler) -> None:
        assert assembler.assemble([], []) == []


class TestSectionChunking:
    def test_section_metadata(self, assembler: ChunkAssembler) -> None:
        section = _section(0, "INJURIES", "Roll a D66 on the injury table.", page=4)
        chunks = assembler.assemble([], [section], source_id="src")

        assert len(chunks) == 1
        assert chunks[0].section_id == section.id
        assert chunks[0].section_path == ["INJURIES"]
        assert chunks[0].page_start == chunks[0].page_end == 4

    def test_marker_sections_skipped(self, assembler: ChunkAssembler) -> None:
        sections = [
            _section(0, "PART ONE", None, page=1),
            _section(1, "COMBAT", "Roll to hit.", page=2),
        ]
        chunks = assembler.assemble([], sections)
        assert len(chunks) == 1
        assert chunks[0].section_path == ["COMBAT"]
        assert chunks[0].order_index == 0

    def test_order_index_continues_across_sections(self, assembler: ChunkAssembler) -> None:
        sections = [
            _section(0, "MOVEMENT", _long_text("move"), page=1),
            _section(1, "SHOOTING", _long_text("shoot"), page=3),
            _section(2, "COMBAT", "Short body.", page=5),
        ]
        chunks = assembler.assemble([], sections, source_id="src")

        assert [c.order_index for c in chunks] == list(range(len(chunks)))
        paths = [c.section_path[0] for c in chunks]
        assert paths == sorted(paths, key=["MOVEMENT", "SHOOTING", "COMBAT"].index)
        assert paths.count("MOVEMENT") > 1
        assert paths[-1] == "COMBAT"

    def test_sections_take_precedence_over_pages(self, assembler: ChunkAssembler) -> None:
        pages = [PageText(text="ignored page text", page_number=1)]
        sections = [_section(0, "COMBAT", "Section body.", page=1)]
        chunks = assembler.assemble(pages, sections)
        assert [c.text for c in chunks] == ["Section body."]

    def test_extracted_sections_end_to_end(self, assembler: ChunkAssembler) -> None:
        pages = [
            PageText(text="MOVEMENT\n" + _long_text("move", 60), page_number=1),
            PageText(text="SHOOTING\n" + _long_text("shoot", 60), page_number=2),
        ]
        sections = SectionExtractor().extract(pages, source_id="src")
        chunks = assembler.assemble(pages, sections, source_id="src")

        assert [s.title for s in sections] == ["MOVEMENT", "SHOOTING"]
        assert {c.section_id for c in chunks} == {s.id for s in sections}
        for chunk in chunks:
            assert chunk.page_start <= chunk.page_end
            assert len(chunk.text) <= SMALL.max_size
