from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from bootcode.instructions import Opcode


class Query(str, Enum):
    LOOP = "loop"
    REPAIR = "repair"


class QueryReport(BaseModel):
    query: Query
    ok: bool
    output: int | None = None
    error: str | None = None
    # Set for repair queries: the instruction index that was flipped.
    mutated_index: int | None = None

    @model_validator(mode="after")
    def _output_or_error(self) -> "QueryReport":
        if self.ok and self.output is None:
            raise ValueError("successful report requires output")
        if not self.ok and not self.error:
            raise ValueError("failed report requires error")
        return self


class TraceStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    step: int = Field(ge=0)
    address: int = Field(ge=0)
    opcode: Opcode
    arg: int
    # Machine state after the instruction executed.
    accumulator: int
    pointer: int


class ManifestJob(BaseModel):
    id: str
    path: str
    queries: list[Query] = Field(default_factory=lambda: [Query.LOOP, Query.REPAIR])
    expect: dict[Query, int] = Field(default_factory=dict)

    @field_validator("id", "path")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must be non-empty")
        return v

    @model_validator(mode="after")
    def _check_queries(self) -> "ManifestJob":
        if not self.queries:
            raise ValueError("queries must be a non-empty list")
        missing = [q.value for q in self.expect if q not in self.queries]
        if missing:
            raise ValueError(f"expect names queries that are not run: {missing}")
        return self
