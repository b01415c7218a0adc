from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, List, Literal, Optional, TypeVar, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

T = TypeVar("T")

MUTATING_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


class Identity(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    display_name: str = Field(validation_alias=AliasChoices("display_name", "displayName", "name", "nomUser"))
    role: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _collapse_backend_shape(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        payload = dict(data)
        if payload.get("id") is not None:
            payload["id"] = str(payload["id"])
        if not any(payload.get(key) for key in ("display_name", "displayName", "name", "nomUser")):
            parts = [str(payload[key]) for key in ("prenom", "nom") if payload.get(key)]
            if parts:
                payload["display_name"] = " ".join(parts)
        roles = payload.get("roles")
        if not payload.get("role") and isinstance(roles, list) and roles:
            payload["role"] = str(roles[0])
        return payload


class Group(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int | str
    name: str = Field(validation_alias=AliasChoices("name", "nomEntreprise", "nom_entreprise"))


class SessionData(BaseModel):
    token: str
    identity: Identity


class LoginResponse(BaseModel):
    token: str
    user: Identity


@dataclass(frozen=True)
class RequestDescriptor:
    method: str
    path: str
    params: dict[str, Any] | None = None
    json_body: Any = None
    notify: bool = True

    @property
    def normalized_method(self) -> str:
        return self.method.upper()


class PaginatedResult(BaseModel, Generic[T]):
    items: List[T] = Field(default_factory=list)
    total_count: int = 0
    page_index: int = 0
    page_size: int = 10
    synthetic: bool = False

    @property
    def backend_page(self) -> int:
        return self.page_index + 1

    @property
    def has_next(self) -> bool:
        return (self.page_index + 1) * self.page_size < self.total_count


class FallbackDataset(PaginatedResult[T], Generic[T]):
    synthetic: Literal[True] = True
    entity_kind: str
    reason: str | None = None


@dataclass
class PaginatedQuery:
    search_term: str = ""
    debounced_search_term: str = ""
    page_index: int = 0
    page_size: int = 10
    extra_filters: dict[str, Any] = field(default_factory=dict)

    @property
    def backend_page(self) -> int:
        return self.page_index + 1

    def snapshot(self) -> "PaginatedQuery":
        return PaginatedQuery(
            search_term=self.search_term,
            debounced_search_term=self.debounced_search_term,
            page_index=self.page_index,
            page_size=self.page_size,
            extra_filters=dict(self.extra_filters),
        )


class ValidationStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"


class EndpointDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    method: str
    path: str
    name: str = Field(validation_alias=AliasChoices("name", "human_name", "humanName"))
    category: str

    @property
    def is_mutating(self) -> bool:
        return self.method.upper() in MUTATING_METHODS


class ValidationResult(BaseModel):
    endpoint: str
    method: str
    category: str
    name: str | None = None
    status: ValidationStatus
    http_code: Optional[int] = None
    message: Optional[str] = None
    elapsed_ms: Optional[int] = None


class CategoryCounts(BaseModel):
    success: int = 0
    warning: int = 0
    error: int = 0
    total: int = 0


class ValidationReport(BaseModel):
    total: int
    successful: int
    failed: int
    warnings: int
    by_category: dict[str, CategoryCounts] = Field(default_factory=dict)
    results: List[ValidationResult] = Field(default_factory=list)


@dataclass(frozen=True)
class Resolved(Generic[T]):
    value: T
    via: int


@dataclass(frozen=True)
class NotFound:
    entity_id: str


@dataclass(frozen=True)
class TransportFailure:
    cause: Exception


ResolutionOutcome = Union[Resolved[Any], NotFound, TransportFailure]
