"""End-to-end tests for the file statistics pipeline."""

import json
from pathlib import Path

import pandas as pd
import pytest

from textstats.config import Config
from textstats.pipeline import StatisticsPipeline


def create_test_files(tmp_path):
    """Create a small corpus with one invalid file."""
    corpus = tmp_path / "corpus"
    (corpus / "nested").mkdir(parents=True)
    (corpus / "a.txt").write_text("Hello, world!", encoding="utf-8")
    (corpus / "nested" / "b.txt").write_text("cafe\u0301 au lait", encoding="utf-8")
    (corpus / "c.txt").write_bytes(b"broken \xff bytes")
    (corpus / "ignored.md").write_text("# not matched", encoding="utf-8")
    return corpus


class TestPipeline:
    """Tests for the statistics pipeline."""

    def test_collect_files(self, tmp_path):
        corpus = create_test_files(tmp_path)
        config = Config()
        config.input.paths = [corpus]

        files = StatisticsPipeline(config).collect_files()
        assert [f.relative_to(corpus).as_posix() for f in files] == [
            "a.txt",
            "c.txt",
            "nested/b.txt",
        ]

    def test_collect_files_non_recursive(self, tmp_path):
        corpus = create_test_files(tmp_path)
        config = Config()
        config.input.paths = [corpus, corpus / "a.txt"]
        config.input.recursive = False

        files = StatisticsPipeline(config).collect_files()
        assert [f.name for f in files] == ["a.txt", "c.txt"]

    def test_missing_input(self, tmp_path):
        config = Config()
        config.input.paths = [tmp_path / "missing.txt"]
        with pytest.raises(FileNotFoundError):
            StatisticsPipeline(config).collect_files()

    def test_run_writes_csv(self, tmp_path):
        corpus = create_test_files(tmp_path)
        output_path = tmp_path / "out" / "stats.csv"
        config = Config()
        config.input.paths = [corpus]
        config.output.output_path = output_path
        config.processing.show_progress = False

        rows = StatisticsPipeline(config).run()

        by_name = {Path(row.path).name: row for row in rows}
        assert by_name["a.txt"].word_count == 2
        assert by_name["a.txt"].grapheme_count == 13
        assert by_name["b.txt"].word_count == 3
        assert by_name["b.txt"].grapheme_count == 12
        assert by_name["b.txt"].scalar_count == 13
        assert by_name["c.txt"].word_count is None
        assert by_name["c.txt"].error

        assert output_path.exists()
        results = pd.read_csv(output_path)
        assert list(results.columns) == [
            "path",
            "word_count",
            "grapheme_count",
            "scalar_count",
            "error",
        ]
        assert len(results) == 3

    def test_run_writes_json(self, tmp_path):
        corpus = create_test_files(tmp_path)
        output_path = tmp_path / "stats.json"
        config = Config()
        config.input.paths = [corpus / "a.txt"]
        config.output.output_path = output_path
        config.output.format = "json"
        config.processing.show_progress = False

        StatisticsPipeline(config).run()

        records = json.loads(output_path.read_text(encoding="utf-8"))
        assert records[0]["word_count"] == 2
        assert records[0]["grapheme_count"] == 13
        assert records[0]["error"] is None

    def test_parallel_matches_sequential(self, tmp_path):
        corpus = create_test_files(tmp_path)
        config = Config()
        config.input.paths = [corpus]
        config.processing.show_progress = False
        sequential = StatisticsPipeline(config).run()

        config.processing.workers = 2
        parallel = StatisticsPipeline(config).run()

        assert parallel == sequential
