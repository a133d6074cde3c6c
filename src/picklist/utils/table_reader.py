"""Read exported sheet data into a header row and data rows."""

import csv
from pathlib import Path


def read_table(csv_file_path: str) -> list[list[str]]:
    """Read every row of a CSV export, header row included.

    Args:
        csv_file_path: Path to CSV file

    Returns:
        List of rows (an empty list for an empty file)

    Raises:
        FileNotFoundError: If CSV file doesn't exist
    """
    csv_path = Path(csv_file_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

    with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
        sample = f.read(4096)
        if not sample.strip():
            return []
        f.seek(0)

        # Try to detect delimiter, single-column exports fall back to commas
        try:
            delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t").delimiter
        except csv.Error:
            delimiter = ","

        return [row for row in csv.reader(f, delimiter=delimiter)]


def split_table(rows: list[list[str]]) -> tuple[list[str], list[list[str]]]:
    """Split raw rows into (header_row, data_rows)."""
    if not rows:
        return [], []
    return rows[0], rows[1:]
