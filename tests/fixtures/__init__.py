"""Test fixtures for timestamp and label columns.

This module provides utilities for generating synthetic recordings for
testing. No data files are committed - fixtures are generated
programmatically.
"""

import numpy as np


def generate_jittered_timestamps(
    num_samples: int = 100,
    fs: float = 60.0,
    jitter_ms: float = 0.0,
    start_ms: float = 0.0,
    seed: int = 42,
) -> np.ndarray:
    """Generate strictly increasing timestamps around a nominal rate.

    Args:
        num_samples: Number of samples.
        fs: Nominal sampling rate in Hz.
        jitter_ms: Half-width of the uniform jitter added to each spacing.
            Must stay below the sample period.
        start_ms: First timestamp.
        seed: Random seed for reproducibility.

    Returns:
        Float array of timestamps in milliseconds.
    """
    dt_ms = 1000.0 / fs
    rng = np.random.default_rng(seed)
    spacing = dt_ms + rng.uniform(-jitter_ms, jitter_ms, num_samples - 1)
    return start_ms + np.concatenate([[0.0], np.cumsum(spacing)])


def insert_gap(t_ms: np.ndarray, after_index: int, gap_ms: float) -> np.ndarray:
    """Shift every timestamp after ``after_index`` by ``gap_ms``.

    Args:
        t_ms: Timestamps.
        after_index: Last index before the gap.
        gap_ms: Extra time inserted.

    Returns:
        New timestamp array.
    """
    shifted = np.array(t_ms, dtype=np.float64)
    shifted[after_index + 1:] += gap_ms
    return shifted


def generate_label_blocks(blocks: list[tuple[str, int]]) -> list[str]:
    """Expand (label, count) pairs into a label column.

    Args:
        blocks: Sequence of (label, number of samples).

    Returns:
        Flat list of labels.
    """
    labels: list[str] = []
    for label, count in blocks:
        labels.extend([label] * count)
    return labels


def write_tsv(path, header: list[str], rows: list[list[str]]) -> None:
    """Write a tab-separated export file.

    Args:
        path: Destination path.
        header: Column headers.
        rows: Cell values per row.
    """
    lines = ["\t".join(header)] + ["\t".join(row) for row in rows]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
