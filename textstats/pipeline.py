"""Batch statistics over text files."""

import logging
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import asdict, fields
from pathlib import Path
from typing import Optional

import pandas as pd
from tqdm import tqdm

from .aggregator import StatisticsAggregator
from .config import Config, SegmentationConfig
from .exceptions import InvalidText
from .models import FileStatistics, TextSnapshot

logger = logging.getLogger(__name__)


def count_file(
    path: Path, aggregator: StatisticsAggregator, encoding: str = "utf-8"
) -> FileStatistics:
    """Compute statistics for one file.

    Invalid text and unreadable files yield a row with ``error`` set and
    no counts, never a partial result.

    Args:
        path: File to read
        aggregator: Aggregator to compute with
        encoding: Text encoding of the file

    Returns:
        FileStatistics row
    """
    try:
        snapshot = TextSnapshot.from_bytes(path.read_bytes(), encoding=encoding)
    except InvalidText as e:
        logger.error(f"Invalid text in {path}: {e}")
        return FileStatistics(path=str(path), error=str(e))
    except OSError as e:
        logger.error(f"Cannot read {path}: {e}")
        return FileStatistics(path=str(path), error=str(e))

    result = aggregator.compute(snapshot)
    return FileStatistics(
        path=str(path),
        word_count=result.word_count,
        grapheme_count=result.grapheme_count,
        scalar_count=len(snapshot),
    )


def _count_file_worker(args: tuple) -> FileStatistics:
    """Worker for parallel processing. Must be module-level for pickling.

    Args:
        args: (path, seg_config_dict, encoding)
    """
    path, seg_config, encoding = args
    aggregator = StatisticsAggregator.from_config(SegmentationConfig(**seg_config))
    return count_file(Path(path), aggregator, encoding)


class StatisticsPipeline:
    """Pipeline for computing statistics over many files."""

    def __init__(self, config: Config):
        """Initialize statistics pipeline.

        Args:
            config: Pipeline configuration
        """
        self.config = config
        self.aggregator = StatisticsAggregator.from_config(config)

    def collect_files(self) -> list[Path]:
        """Expand configured input paths into a list of files.

        Returns:
            Files in input order, directories expanded and sorted

        Raises:
            FileNotFoundError: If an input path does not exist
        """
        input_config = self.config.input
        files: list[Path] = []
        seen: set[Path] = set()

        for path in input_config.paths:
            if path.is_dir():
                if input_config.recursive:
                    matches = path.rglob(input_config.pattern)
                else:
                    matches = path.glob(input_config.pattern)
                candidates = sorted(p for p in matches if p.is_file())
            elif path.exists():
                candidates = [path]
            else:
                raise FileNotFoundError(path)

            for candidate in candidates:
                if candidate not in seen:
                    seen.add(candidate)
                    files.append(candidate)

        return files

    def _process_sequential(self, files: list[Path]) -> list[FileStatistics]:
        encoding = self.config.input.encoding
        return [
            count_file(path, self.aggregator, encoding)
            for path in tqdm(
                files,
                desc="Counting",
                disable=not self.config.processing.show_progress,
            )
        ]

    def _process_parallel(self, files: list[Path]) -> list[FileStatistics]:
        workers = self.config.processing.workers
        seg_config = self.config.segmentation.model_dump()
        encoding = self.config.input.encoding
        rows: list[Optional[FileStatistics]] = [None] * len(files)

        with ProcessPoolExecutor(max_workers=workers) as executor:
            futures = {
                executor.submit(_count_file_worker, (str(path), seg_config, encoding)): i
                for i, path in enumerate(files)
            }
            for future in tqdm(
                as_completed(futures),
                total=len(futures),
                desc=f"Counting ({workers} workers)",
                disable=not self.config.processing.show_progress,
            ):
                rows[futures[future]] = future.result()

        return rows

    def write_output(self, rows: list[FileStatistics], output_path: Path) -> None:
        """Write rows as CSV or JSON records."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        columns = [f.name for f in fields(FileStatistics)]
        df = pd.DataFrame([asdict(row) for row in rows], columns=columns)
        if self.config.output.format == "json":
            df.to_json(output_path, orient="records", force_ascii=False, indent=2)
        else:
            df.to_csv(output_path, index=False)
        logger.info(f"Wrote {len(rows)} rows to {output_path}")

    def run(self) -> list[FileStatistics]:
        """Execute the pipeline.

        Returns:
            One FileStatistics row per input file, in input order
        """
        files = self.collect_files()
        logger.info(
            f"Counting {len(files)} files with {self.config.segmentation.engine} engine "
            f"(default locale {self.config.segmentation.default_locale})"
        )

        if self.config.processing.workers <= 1 or len(files) <= 1:
            rows = self._process_sequential(files)
        else:
            rows = self._process_parallel(files)

        failed = sum(1 for row in rows if row.error)
        if failed:
            logger.warning(f"{failed} of {len(rows)} files could not be counted")

        if self.config.output.output_path:
            self.write_output(rows, self.config.output.output_path)

        return rows
