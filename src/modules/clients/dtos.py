"""Client directory DTOs.

``ClientRecord`` mirrors the payload returned by the external client API.
The API names the tax id ``cpf``; unknown fields are ignored.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ClientRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    tax_id: str = Field(alias="cpf")
    name: Optional[str] = None
    email: Optional[str] = None
