"""Pydantic schemas for the canonical table, column, index and foreign-key model.

Every reader produces these records and every dialect consumes them, so a new
backend only has to emit the same field set to plug into the DDL exporter.
"""
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class Table(_Record):
    name: str
    type: str = "BASE TABLE"


# ── Column sizing ─────────────────────────────────────────────────────────────

class Sized(_Record):
    kind: Literal["sized"] = "sized"
    length: int


class FixedPoint(_Record):
    kind: Literal["fixed_point"] = "fixed_point"
    precision: int
    scale: Optional[int] = None


class Unsized(_Record):
    kind: Literal["unsized"] = "unsized"


ColumnSize = Annotated[Union[Sized, FixedPoint, Unsized], Field(discriminator="kind")]


def size_from_catalog(
    length: Optional[int] = None,
    precision: Optional[int] = None,
    scale: Optional[int] = None,
) -> Union[Sized, FixedPoint, Unsized]:
    """Build the size variant from raw catalog values. Precision wins over length."""
    if precision is not None:
        return FixedPoint(precision=precision, scale=scale)
    if length is not None:
        return Sized(length=length)
    return Unsized()


class Column(_Record):
    name: str
    type: str
    size: ColumnSize = Field(default_factory=Unsized)
    nullable: bool = True
    default: Optional[str] = None
    primary: bool = False
    auto_increment: bool = False
    enum_values: Optional[list[str]] = None

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        # A primary key column is never null, whatever the catalog reports.
        if data.get("primary"):
            data["nullable"] = False
        if data.get("type") != "enum":
            data["enum_values"] = None
        return data

    @computed_field
    @property
    def length(self) -> Optional[int]:
        return self.size.length if isinstance(self.size, Sized) else None

    @computed_field
    @property
    def precision(self) -> Optional[int]:
        return self.size.precision if isinstance(self.size, FixedPoint) else None

    @computed_field
    @property
    def scale(self) -> Optional[int]:
        return self.size.scale if isinstance(self.size, FixedPoint) else None


class Index(_Record):
    name: str
    column_name: str
    is_unique: bool = False
    index_type: Literal["primary", "unique", "index"] = "index"
    sequence: int = 1


class ForeignKey(_Record):
    container: str
    constraint_name: str
    constraint_column: str
    ref_container: str
    ref_column: str
    on_update: str = "NO ACTION"
    on_delete: str = "NO ACTION"
    sequence: int = 1

    @field_validator("on_update", "on_delete", mode="before")
    @classmethod
    def _upper_action(cls, value):
        if value is None or str(value).strip() == "":
            return "NO ACTION"
        return " ".join(str(value).upper().split())


class TableMetadata(_Record):
    """Everything read for one table during a single export."""
    columns: list[Column] = Field(default_factory=list)
    indexes: Optional[list[Index]] = None
    foreign_keys: Optional[list[ForeignKey]] = None

    @property
    def primary_keys(self) -> list[str]:
        return [c.name for c in self.columns if c.primary]
