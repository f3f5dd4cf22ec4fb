"""Wire formats of the ranking and returns (RTO) collaborators."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, Field, field_validator


class RankingRequest(BaseModel):
    catalog_ids: list[str]
    user_id: str


class RankedCatalog(BaseModel):
    catalog_id: str
    pctr_score: float = 0.0

    @field_validator("catalog_id", mode="before")
    @classmethod
    def _stringify_id(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class RankingResponse(BaseModel):
    success: bool
    ranked_catalogs: list[RankedCatalog] = Field(default_factory=list)
    total_catalogs: int = 0


class RTOItem(BaseModel):
    catalog_id: int
    product_id: int | None = None
    order_date: str | None = None
    rto_count: int = 0


class RTOResponse(BaseModel):
    success: bool
    code: str | None = None
    rto_list: dict[str, RTOItem] = Field(default_factory=dict)
    total_items: int = 0


@dataclass(frozen=True)
class RankedCandidate:
    """One entry of the ranking service's answer, position taken from list order."""

    catalog_id: str
    score: float
    position: int


@dataclass(frozen=True)
class RankedOrder:
    """Final candidate order handed to enrichment."""

    catalog_ids: list[str]
    personalized: bool
