from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class Position(BaseModel):
    model_config = ConfigDict(frozen=True)

    row: int
    column: int


class SourceFile(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    text: str


class BaseTypeRef(BaseModel):
    """One entry of a declaration's base list.

    ``simple_name`` is only set for bare identifiers (``IRequest``) and generic
    names (``IRequest<Unit>``). Qualified forms such as ``Ns.IRequest`` keep
    their source text but no simple name.
    """

    model_config = ConfigDict(frozen=True)

    simple_name: str | None
    text: str
    generic: bool = False
    type_arguments: list[str] = Field(default_factory=list)


class TypeDeclaration(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    kind: Literal["class", "record"]
    modifiers: list[str] = Field(default_factory=list)
    base_types: list[BaseTypeRef] = Field(default_factory=list)
    start: Position

    @property
    def line(self) -> int:
        return self.start.row + 1

    @property
    def is_public(self) -> bool:
        return "public" in self.modifiers


class HandlerLocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    file_path: str
    line: int = Field(ge=1)


class Found(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["found"] = "found"
    request_type: str
    location: HandlerLocation

    @property
    def message(self) -> str:
        return f"Handler for {self.request_type} at {self.location.file_path}:{self.location.line}"


class RequestTypeNotDetermined(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["request_type_not_determined"] = "request_type_not_determined"

    @property
    def message(self) -> str:
        return "Could not determine IRequest type in the active document."


class HandlerNotFound(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["handler_not_found"] = "handler_not_found"
    request_type: str

    @property
    def message(self) -> str:
        return f"No IRequestHandler found for {self.request_type}."


class ParseOrIOFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["parse_or_io_failure"] = "parse_or_io_failure"
    message: str


QueryResult = Annotated[
    Found | RequestTypeNotDetermined | HandlerNotFound | ParseOrIOFailure,
    Field(discriminator="status"),
]
