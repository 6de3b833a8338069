from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field


class KeyedRows(BaseModel):
    """Records keyed by column name (CSV and JSON sources)."""

    kind: Literal["keyed"] = "keyed"
    records: list[dict[str, Any]] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def __getitem__(self, index):
        return self.records[index]


class PositionalRows(BaseModel):
    """Records as lists of cell strings in column order (spreadsheet sources).

    Spreadsheet rows carry no column names, so data loaded from a workbook
    always reports empty headers.
    """

    kind: Literal["positional"] = "positional"
    records: list[list[str]] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def __getitem__(self, index):
        return self.records[index]


Rows = Annotated[Union[KeyedRows, PositionalRows], Field(discriminator="kind")]


class LoadedData(BaseModel):
    headers: list[str] = Field(default_factory=list)
    rows: Rows
    source_file: str

    def to_payload(self) -> dict[str, Any]:
        """Plain JSON-able mapping used for prompts and resource responses."""
        return {
            "headers": list(self.headers),
            "rows": list(self.rows.records),
            "sourceFile": self.source_file,
        }


def derive_headers(rows: KeyedRows | PositionalRows) -> list[str]:
    if isinstance(rows, KeyedRows) and rows.records:
        return [str(key) for key in rows.records[0].keys()]
    return []
