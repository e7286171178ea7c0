"""Modelos Pydantic v2 del dominio (schema v1) y del índice de búsqueda."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, ClassVar, Literal

from pydantic import (
    AfterValidator,
    AnyUrl,
    BaseModel,
    ConfigDict,
    NonNegativeInt,
    SerializerFunctionWrapHandler,
    StringConstraints,
    TypeAdapter,
    ValidationError,
    model_serializer,
    model_validator,
)
from pydantic.alias_generators import to_camel

_URL_ADAPTER = TypeAdapter(AnyUrl)


def _check_url(value: str) -> str:
    try:
        _URL_ADAPTER.validate_python(value)
    except ValidationError as exc:
        raise ValueError(f"URL inválida: {value!r}") from exc
    return value


def _check_iso_datetime(value: str) -> str:
    # Fecha y hora completas; una fecha sola ("2026-01-01") no es un timestamp.
    try:
        datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as exc:
        raise ValueError(f"fecha ISO-8601 inválida: {value!r}") from exc
    if "T" not in value.upper():
        raise ValueError(f"timestamp ISO-8601 sin hora: {value!r}")
    return value


NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
TrimmedStr = Annotated[str, StringConstraints(strip_whitespace=True)]
UrlStr = Annotated[str, AfterValidator(_check_url)]
IsoDatetimeStr = Annotated[str, AfterValidator(_check_iso_datetime)]


class DomainValidationError(ValueError):
    """Un único reporte agregado con todos los problemas de schema."""

    def __init__(self, exc: ValidationError) -> None:
        self.issues = [
            {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
            for err in exc.errors(include_url=False)
        ]
        self.error_count = exc.error_count()
        super().__init__(f"Dominio inválido ({self.error_count} problema/s):\n{exc}")


class _Schema(BaseModel):
    """Base común: alias camelCase en JSON y opcionales omitidos si no existen."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    # Campos opcionales que se omiten del JSON cuando valen None
    # (los nullable del schema se serializan como null).
    omit_if_none: ClassVar[tuple[str, ...]] = ()

    @model_serializer(mode="wrap")
    def _omit_unset(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        for name in self.omit_if_none:
            for key in (name, to_camel(name)):
                if key in data and data[key] is None:
                    del data[key]
        return data

    def to_json(self, *, indent: int | None = None) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)


# ---------- Dominio ----------

class Section(_Schema):
    id: NonEmptyStr
    title: NonEmptyStr
    parent_id: TrimmedStr | None
    depth: NonNegativeInt
    order: NonNegativeInt
    path: NonEmptyStr
    description_html: TrimmedStr | None = None

    @model_validator(mode="after")
    def _check_path(self) -> Section:
        expected = f"{self.parent_id}/{self.id}" if self.parent_id else self.id
        if self.path != expected:
            raise ValueError(f"path {self.path!r} no coincide con {expected!r}")
        return self


class Item(_Schema):
    omit_if_none: ClassVar[tuple[str, ...]] = ("url",)

    id: NonEmptyStr
    section_id: NonEmptyStr
    title: NonEmptyStr
    url: UrlStr | None = None
    description: TrimmedStr | None = None
    description_html: TrimmedStr | None = None
    order: NonNegativeInt = 0
    tags: list[str] = []


class DomainMeta(_Schema):
    omit_if_none: ClassVar[tuple[str, ...]] = (
        "title",
        "description",
        "description_html",
        "language",
        "frontmatter",
    )

    title: str | None = None
    description: str | None = None
    description_html: str | None = None
    generated_at: IsoDatetimeStr
    source: NonEmptyStr
    language: str | None = None
    frontmatter: dict[str, Any] | None = None


class Domain(_Schema):
    schema_version: Literal[1] = 1
    meta: DomainMeta
    sections: list[Section]
    items: list[Item]

    @model_validator(mode="after")
    def _check_section_refs(self) -> Domain:
        section_ids = {s.id for s in self.sections}
        missing = [
            f"items[{i}].sectionId {item.section_id!r} no existe en sections"
            for i, item in enumerate(self.items)
            if item.section_id not in section_ids
        ]
        if missing:
            raise ValueError("; ".join(missing))
        return self


def validate_domain(data: dict[str, Any]) -> Domain:
    """Valida un dominio completo; cualquier fallo se reporta agregado."""
    try:
        return Domain.model_validate(data)
    except ValidationError as exc:
        raise DomainValidationError(exc) from exc


def load_domain(raw: str | bytes) -> Domain:
    """Reconstruye y re-valida un dominio desde su JSON."""
    try:
        return Domain.model_validate_json(raw)
    except ValidationError as exc:
        raise DomainValidationError(exc) from exc


# ---------- Índice de búsqueda ----------

class FieldWeights(_Schema):
    title: int | float
    description: int | float
    tags: int | float


class IndexMeta(_Schema):
    omit_if_none: ClassVar[tuple[str, ...]] = ("source", "repo", "ref", "path")

    source: str | None = None
    repo: str | None = None
    ref: str | None = None
    path: str | None = None
    generated_at: str
    field_weights: FieldWeights


class IndexStats(_Schema):
    docs: int
    terms: int


class IndexedDoc(_Schema):
    omit_if_none: ClassVar[tuple[str, ...]] = ("url",)

    title: str
    url: str | None = None
    section_id: str


class Posting(_Schema):
    id: str
    f: int | float


class SearchIndex(_Schema):
    schema_version: Literal[1] = 1
    meta: IndexMeta
    stats: IndexStats
    docs: dict[str, IndexedDoc]
    terms: dict[str, list[Posting]]
