"""Entry point for indexing rulebook page files."""

import logging
from collections import Counter
from pathlib import Path
from typing import Optional

import typer

from src.config import load_config
from src.indexing import PageLoader, RulesIndexer
from src.storage.results import write_index_result

app = typer.Typer()


@app.command()
def main(
    paths: list[Path] = typer.Argument(..., help="Page files (.txt with form feeds, or .json)"),
    config_path: Path = typer.Option(Path("config.yaml"), "--config", help="YAML config file"),
    output_dir: Optional[Path] = typer.Option(
        None, help="Where to write results (defaults to storage.processed_dir)"
    ),
) -> None:
    """Index each file as one source document and write its sections and chunks."""
    config = load_config(config_path)
    logging.basicConfig(
        level=config.logging.level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    target_dir = output_dir or Path(config.storage.processed_dir)
    target_dir.mkdir(parents=True, exist_ok=True)

    stem_counts = Counter(path.stem for path in paths)
    duplicates = sorted(stem for stem, count in stem_counts.items() if count > 1)
    if duplicates:
        typer.echo(f"Duplicate source ids: {', '.join(duplicates)}", err=True)
        raise typer.Exit(code=2)

    loader = PageLoader()
    documents = {path.stem: loader.load(path) for path in paths}

    indexer = RulesIndexer(config)
    failed = 0
    for result in indexer.index_many(documents):
        written = write_index_result(result, target_dir)
        if result.status == "failed":
            failed += 1
            typer.echo(f"{result.source_id}: FAILED ({result.error.message}) -> {written}")
        else:
            typer.echo(
                f"{result.source_id}: {result.stats.sections} sections, "
                f"{result.stats.chunks} chunks -> {written}"
            )

    if failed:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
