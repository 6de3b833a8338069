import json
import logging
import os
import re
from datetime import datetime, time
from enum import Enum
from pathlib import Path
from typing import Any

import pandas as pd

from chart_mcp.core.config import Settings, settings as default_settings
from chart_mcp.core.errors import DataIOError, FormatError, ShapeError, ValidationError
from chart_mcp.data.schemas import KeyedRows, LoadedData, PositionalRows, derive_headers

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?$")


class FileType(str, Enum):
    CSV = ".csv"
    JSON = ".json"
    XLSX = ".xlsx"
    XLS = ".xls"


SUPPORTED_TYPES = tuple(file_type.value for file_type in FileType)


def coerce_value(raw: str) -> Any:
    """Turn a trimmed CSV field into an int or float when it is plainly numeric."""
    if _INT_RE.match(raw):
        return int(raw)
    if _FLOAT_RE.match(raw):
        return float(raw)
    return raw


def _is_blank(value: Any) -> bool:
    if isinstance(value, str):
        return not value.strip()
    return bool(pd.isna(value))


def _cell_text(value: Any) -> str:
    if isinstance(value, datetime):
        if value.time() == time.min:
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip() if isinstance(value, str) else str(value)


class DataLoader:
    def __init__(self, settings: Settings | None = None):
        self.settings = settings or default_settings
        self.max_file_size = self.settings.max_file_size_bytes

    def validate_file(self, file_path: Path) -> None:
        """Check existence, size, type and read permission, in that order."""
        if not file_path.exists():
            raise DataIOError(f"File not found: {file_path}")
        if not file_path.is_file():
            raise DataIOError(f"Not a valid file: {file_path}")

        try:
            size = file_path.stat().st_size
        except OSError as exc:
            raise DataIOError(f"Cannot stat file {file_path}: {exc}") from exc
        if size > self.max_file_size:
            raise ValidationError(
                f"File size exceeds maximum limit of {self.settings.MAX_FILE_SIZE}MB: {file_path.name}"
            )

        ext = file_path.suffix.lower()
        if ext not in SUPPORTED_TYPES:
            raise ValidationError(
                f"Unsupported file type: {ext or '(none)'}. "
                f"Supported types are: {', '.join(SUPPORTED_TYPES)}"
            )

        if not os.access(file_path, os.R_OK):
            raise DataIOError(f"File is not readable: {file_path}")

    def load(self, file_path: str | Path) -> LoadedData:
        path = Path(file_path)
        self.validate_file(path)

        file_type = FileType(path.suffix.lower())
        if file_type is FileType.CSV:
            rows = KeyedRows(records=self._load_csv(path))
        elif file_type is FileType.JSON:
            rows = KeyedRows(records=self._load_json(path))
        else:
            rows = PositionalRows(records=self._load_excel(path))

        logger.info("Loaded %d rows from %s", len(rows), path.name)
        return LoadedData(
            headers=derive_headers(rows),
            rows=rows,
            source_file=path.name,
        )

    def _load_csv(self, path: Path) -> list[dict[str, Any]]:
        try:
            frame = pd.read_csv(
                path,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                index_col=False,
                encoding="utf-8-sig",
            )
        except pd.errors.EmptyDataError:
            return []
        except (pd.errors.ParserError, ValueError) as exc:
            raise FormatError(f"Error loading file {path}: CSV parsing error: {exc}") from exc
        except OSError as exc:
            raise DataIOError(f"Error loading file {path}: {exc}") from exc

        columns = [str(column).strip() for column in frame.columns]
        records: list[dict[str, Any]] = []
        for row_number, values in enumerate(frame.itertuples(index=False, name=None), start=1):
            # whitespace-only lines survive skip_blank_lines
            if all(_is_blank(value) for value in values):
                continue
            # with keep_default_na=False only fields absent from the line are NaN
            if not all(isinstance(value, str) for value in values):
                present = sum(isinstance(value, str) for value in values)
                raise FormatError(
                    f"Error loading file {path}: CSV parsing error: record {row_number} "
                    f"has {present} fields, expected {len(columns)}"
                )
            records.append(
                {column: coerce_value(value.strip()) for column, value in zip(columns, values)}
            )
        return records

    def _load_json(self, path: Path) -> list[dict[str, Any]]:
        try:
            data = json.loads(path.read_text(encoding="utf-8-sig"))
        except ValueError as exc:
            raise FormatError(f"Error loading file {path}: Invalid JSON format: {exc}") from exc
        except OSError as exc:
            raise DataIOError(f"Error loading file {path}: {exc}") from exc

        if not isinstance(data, list):
            raise ShapeError(f"Error loading file {path}: JSON file must contain an array of objects")
        for index, item in enumerate(data):
            if not isinstance(item, dict):
                raise ShapeError(
                    f"Error loading file {path}: JSON array element {index} is not an object"
                )
        return data

    def _load_excel(self, path: Path) -> list[list[str]]:
        try:
            frame = pd.read_excel(path, sheet_name=0, header=None, dtype=object)
        except Exception as exc:  # noqa: BLE001
            raise FormatError(f"Error loading file {path}: Excel parsing error: {exc}") from exc

        if frame.empty:
            raise ShapeError(f"Error loading file {path}: Excel file contains no data in its first worksheet")

        header = [value for value in frame.iloc[0].tolist() if not _is_blank(value)]
        if len(header) < 2:
            raise ShapeError(
                f"Error loading file {path}: Excel file must contain headers "
                "in the first row (at least two columns)"
            )

        records: list[list[str]] = []
        for values in frame.iloc[1:].itertuples(index=False, name=None):
            cells = [_cell_text(value) for value in values if not _is_blank(value)]
            if cells:
                records.append(cells)
        return records
