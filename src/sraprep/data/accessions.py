"""Run accession parsing and the accession list file."""

import logging
from pathlib import Path
from typing import Iterable, List

import polars as pl

from ..errors import NoAccessionsError

logger = logging.getLogger(__name__)

RUN_PATTERN = "^SRR"


def parse_runinfo(text: str, pattern: str = RUN_PATTERN) -> List[str]:
    """
    Extract run accessions from SRA runinfo CSV.

    Takes the first column of every row and keeps the values matching
    pattern. Quotes are not interpreted, so an unbalanced quote in a later
    field cannot hide the accessions that follow it. Header rows (efetch
    repeats them between batches) never match. Order and duplicates are
    preserved.

    Args:
        text: runinfo CSV as returned by efetch
        pattern: Regex a run accession must match

    Returns:
        List of run accessions in query order
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        return []

    df = pl.read_csv(
        "\n".join(lines).encode(),
        has_header=False,
        infer_schema_length=0,
        quote_char=None,
        truncate_ragged_lines=True
    )
    runs = df.to_series(0).str.strip_chars()
    return runs.filter(runs.str.contains(pattern)).to_list()


def write_accessions(path: Path, accessions: Iterable[str]):
    """Write one accession per line, replacing any previous list."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        for acc in accessions:
            f.write(f"{acc}\n")


def read_accessions(path: Path) -> List[str]:
    """
    Read an accession list written by write_accessions.

    Raises:
        NoAccessionsError: If the file does not exist
    """
    path = Path(path)
    if not path.is_file():
        raise NoAccessionsError(
            f"Accession file not found: {path}. Run sraprep-fetch for this project first."
        )
    with open(path, 'r') as f:
        return [line.strip() for line in f if line.strip()]
