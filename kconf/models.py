"""Pydantic schemas for kubeconfig documents.

Only the fields the merge logic touches are typed. Every model accepts extra keys
(``exec``, ``proxy-url``, ``extensions``, ...) and writes them back unchanged, so a
load-merge-write cycle never drops data it does not understand.
"""

from __future__ import annotations

from enum import Enum
from typing import Any
from typing import ClassVar

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import SerializerFunctionWrapHandler
from pydantic import field_validator
from pydantic import model_serializer


class _KubeModel(BaseModel):
    """Base for all kubeconfig models: wire aliases in, wire aliases out."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    @model_serializer(mode="wrap")
    def _omit_unset_fields(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        # Only declared optional fields are dropped when None; extra keys are kept verbatim
        declared = set()
        for name, info in type(self).model_fields.items():
            declared.add(name)
            if info.alias:
                declared.add(info.alias)
        return {key: value for key, value in data.items() if not (value is None and key in declared)}

    def to_dict(self) -> dict[str, Any]:
        """Serialize using kubeconfig keys, omitting unset optional fields."""
        return self.model_dump(by_alias=True)


class ClusterInfo(_KubeModel):
    """Connection details for a cluster."""

    server: str
    certificate_authority_data: str | None = Field(None, alias="certificate-authority-data")
    certificate_authority: str | None = Field(None, alias="certificate-authority")
    insecure_skip_tls_verify: bool | None = Field(None, alias="insecure-skip-tls-verify")


class UserInfo(_KubeModel):
    """Credentials for a user. All fields are optional and independent."""

    client_certificate_data: str | None = Field(None, alias="client-certificate-data")
    client_key_data: str | None = Field(None, alias="client-key-data")
    client_certificate: str | None = Field(None, alias="client-certificate")
    client_key: str | None = Field(None, alias="client-key")
    token: str | None = None
    username: str | None = None
    password: str | None = None


class ContextInfo(_KubeModel):
    """Cluster and user references (by name) plus an optional namespace."""

    cluster: str
    user: str
    namespace: str | None = None


class NamedEntity(_KubeModel):
    """A named entry in one of the three kubeconfig collections.

    Subclasses declare which attribute holds the payload so the merger can
    replace it without knowing the concrete kind.
    """

    payload_field: ClassVar[str]

    name: str

    @property
    def payload(self) -> _KubeModel:
        return getattr(self, self.payload_field)

    def replace_payload(self, other: NamedEntity) -> None:
        """Take over ``other``'s payload, keeping this entry's identity."""
        setattr(self, self.payload_field, other.payload)


class NamedCluster(NamedEntity):
    payload_field: ClassVar[str] = "cluster"

    cluster: ClusterInfo


class NamedUser(NamedEntity):
    payload_field: ClassVar[str] = "user"

    user: UserInfo


class NamedContext(NamedEntity):
    payload_field: ClassVar[str] = "context"

    context: ContextInfo


class KubeConfig(_KubeModel):
    """A kubeconfig document.

    ``current_context`` is the active selection. ``preferences`` and any other
    unrecognised top-level keys are passed through untouched.
    """

    api_version: str = Field("v1", alias="apiVersion")
    kind: str = "Config"
    clusters: list[NamedCluster] = Field(default_factory=list)
    contexts: list[NamedContext] = Field(default_factory=list)
    users: list[NamedUser] = Field(default_factory=list)
    current_context: str | None = Field(None, alias="current-context")
    preferences: dict[str, Any] | None = None

    @field_validator("clusters", "contexts", "users", mode="before")
    @classmethod
    def _null_collection_is_empty(cls, value: Any) -> Any:
        # kubectl writes `clusters: null` for an emptied config
        return [] if value is None else value

    def find_context(self, name: str) -> NamedContext | None:
        return next((c for c in self.contexts if c.name == name), None)


class EntityKind(str, Enum):
    """The three named collections of a kubeconfig."""

    CLUSTER = "cluster"
    CONTEXT = "context"
    USER = "user"

    @property
    def attribute(self) -> str:
        """Name of the KubeConfig attribute holding this kind's entries."""
        return f"{self.value}s"

    def collection(self, document: KubeConfig) -> list[Any]:
        """Return the (mutable) list of entries of this kind in ``document``."""
        return getattr(document, self.attribute)


def empty_kubeconfig() -> KubeConfig:
    """Create a fresh kubeconfig with no entries."""
    return KubeConfig(preferences={})


__all__ = [
    "ClusterInfo",
    "ContextInfo",
    "EntityKind",
    "KubeConfig",
    "NamedCluster",
    "NamedContext",
    "NamedEntity",
    "NamedUser",
    "UserInfo",
    "empty_kubeconfig",
]
