"""Diff records produced by a comparison pass.

Every record carries ``before``/``after`` values and a severity ``level``.
Operation-level and definition-level records are told apart by ``kind``.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

Level = Literal["warning", "error"]

PathDiffType = Literal[
    "operationId",
    "path",
    "parameters",
    "parameter",
    "pageable",
    "longrunning",
    "finalstate",
    "finalresult",
    "responses",
    "response",
    "tags",
    "summary",
    "externalDocs",
]

DefinitionDiffType = Literal["properties", "property", "required"]


class _DiffBase(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    before: Any = None
    after: Any = None
    level: Level


class PathDiff(_DiffBase):
    """A difference between two operations sharing an operationId."""

    kind: Literal["path"] = "path"
    operation_id: str
    type: PathDiffType
    parameter_name: str | None = None  # only for type="parameter"
    change_type: str | None = None  # presence / required / schema


class DefinitionDiff(_DiffBase):
    """A difference between two definitions sharing a name."""

    kind: Literal["definition"] = "definition"
    name: str  # dotted for inline schemas, e.g. Widget.properties
    type: DefinitionDiffType
    property_name: str | None = None
    change_type: str | None = None  # x-ms-client-flatten / reference


Diff = Annotated[Union[PathDiff, DefinitionDiff], Field(discriminator="kind")]

DiffList = TypeAdapter(list[Diff])
