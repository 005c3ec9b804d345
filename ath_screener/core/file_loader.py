"""Spreadsheet parsing into rows and headers.

Reads the first sheet of a CSV or Excel file with Polars and hands the
result to the analysis layer as plain row dicts. Parse failures are
reported as an error status with an empty dataset.
"""

import io
from pathlib import Path

import polars as pl
from loguru import logger

from ath_screener.core.domain_models import Dataset, UploadResult, UploadStatus

VALID_EXTENSIONS = (".csv", ".xlsx", ".xls")


def is_valid_file_type(filename: str) -> bool:
    """Check the file extension against the supported formats."""
    return Path(filename).suffix.lower() in VALID_EXTENSIONS


def read_table(source: bytes | Path, filename: str) -> pl.DataFrame:
    """Read the first sheet of a CSV/Excel source into a DataFrame.

    Raises whatever the underlying reader raises.
    """
    data = source.read_bytes() if isinstance(source, Path) else source
    buffer = io.BytesIO(data)

    if Path(filename).suffix.lower() == ".csv":
        # Keep every cell as parsed text/number; ragged rows become nulls.
        return pl.read_csv(buffer, infer_schema_length=None, truncate_ragged_lines=True)
    return pl.read_excel(buffer, sheet_id=1)


def process_file(source: bytes | Path, filename: str | None = None) -> UploadResult:
    """Parse an uploaded file into a Dataset.

    Args:
        source: Raw file content or a path on disk
        filename: Original file name, used to pick the reader. Defaults to
            the path's name.

    Returns:
        UploadResult with the dataset and a status message
    """
    if filename is None:
        filename = source.name if isinstance(source, Path) else ""

    if not is_valid_file_type(filename):
        logger.warning(f"Rejected file with unsupported type: {filename!r}")
        return UploadResult(
            status=UploadStatus(
                status="error",
                message="Please upload a CSV or Excel file (.csv, .xlsx, .xls)",
            )
        )

    logger.info(f"Processing file {filename}")
    try:
        df = read_table(source, filename)
    except Exception as e:
        logger.error(f"Error parsing {filename}: {e}")
        return UploadResult(status=UploadStatus(status="error", message="Failed to parse file"))

    if df.is_empty():
        logger.warning(f"{filename} contains no rows")
        return UploadResult(
            status=UploadStatus(status="error", message="The file appears to be empty")
        )

    dataset = Dataset.from_rows(df.to_dicts(), headers=df.columns)
    logger.info(f"Loaded {len(dataset):,} rows with {len(dataset.headers)} columns from {filename}")
    return UploadResult(
        dataset=dataset,
        status=UploadStatus(status="success", message="File uploaded successfully"),
    )
