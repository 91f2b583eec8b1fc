"""Modelos mínimos do payload e dos headers de entrega do GitHub."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


@dataclass(frozen=True, slots=True)
class DeliveryIdentity:
    """Identidade de uma entrega (X-GitHub-Delivery / X-GitHub-Event)."""

    delivery_id: str
    event_type: str


class PackageInfo(BaseModel):
    """Subobjeto `package` — só o campo usado pelo filtro."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    package_type: str | None = None


class PackageEvent(BaseModel):
    """Visão parcial de um evento `package` do GitHub.

    Campos desconhecidos são ignorados para tolerar a evolução do payload.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    package: PackageInfo | None = Field(default=None)

    @model_validator(mode="before")
    @classmethod
    def _null_as_empty(cls, data: Any) -> Any:
        """Body `null` equivale a objeto vazio (categoria vazia)."""
        return {} if data is None else data

    @property
    def package_type(self) -> str:
        """Categoria do pacote ("" quando ausente)."""
        if self.package is None:
            return ""
        return self.package.package_type or ""
