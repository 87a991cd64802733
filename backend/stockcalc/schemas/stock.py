from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from stockcalc.errors import ErrorCode


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Quote(_CamelModel):
    symbol: str
    current_price: float
    previous_close: float
    last_updated: str | None = None


class ErrorDetail(_CamelModel):
    code: ErrorCode
    message: str


class StockResponse(_CamelModel):
    success: bool
    data: Quote | None = None
    error: ErrorDetail | None = None

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TargetSet(BaseModel):
    five: float
    ten: float
    fifteen: float


class PriceTargets(BaseModel):
    gains: TargetSet
    losses: TargetSet
