"""Pydantic models for report requests and results.

field names are snake_case in python but the dashboard speaks camelCase, so
every model serializes through the camel alias generator.
"""

from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

Number = int | float


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DateRange(CamelModel):
    """An inclusive date window, ISO YYYY-MM-DD strings.

    start <= end is not checked here - the api rejects inverted ranges and
    we pass caller supplied dates through untouched.
    """

    start_date: str
    end_date: str


class ReportSpec(CamelModel):
    """What to ask the api for: date ranges, dimensions and metrics."""

    date_ranges: list[DateRange]
    dimensions: list[str] = Field(default_factory=list)
    metrics: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_name_collisions(self) -> Self:
        """Reject a name used as both a dimension and a metric.

        flattened rows are keyed by field name, so a shared name would
        silently overwrite one value with the other.
        """
        shared = sorted(set(self.dimensions) & set(self.metrics))
        if shared:
            raise ValueError(
                f"Names used as both dimension and metric: {', '.join(shared)}"
            )
        return self


class SamplingMetadata(CamelModel):
    samples_read_count: int = 0
    sampling_space_size: int = 0


class ReportMeta(CamelModel):
    """Row count and sampling info reported alongside the rows."""

    row_count: int = 0
    samples_read_count: int = 0  # summed across sampling_metadatas
    sampling_metadatas: list[SamplingMetadata] = Field(default_factory=list)


class FlatRow(BaseModel):
    """One report row with its dimension and metric values.

    dimensions and metrics live in separate dicts so they can never clobber
    each other. to_record() is where they get merged for json output.
    """

    dimensions: dict[str, str | None] = Field(default_factory=dict)
    metrics: dict[str, Number] = Field(default_factory=dict)

    def get(self, name: str, default=None):
        """Look up a field by name, dimensions first."""
        if name in self.dimensions:
            return self.dimensions[name]
        return self.metrics.get(name, default)

    def to_record(self, rename: dict[str, str] | None = None) -> dict:
        """Merge into a flat dict, dimensions first then metrics, header order."""
        rename = rename or {}
        record: dict = {}
        for name, value in self.dimensions.items():
            record[rename.get(name, name)] = value
        for name, value in self.metrics.items():
            record[rename.get(name, name)] = value
        return record


class ReportResult(BaseModel):
    """Flattened rows plus response metadata."""

    meta: ReportMeta = Field(default_factory=ReportMeta)
    rows: list[FlatRow] = Field(default_factory=list)
