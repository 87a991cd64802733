from pydantic import BaseModel, Field


class QuoteSnapshot(BaseModel):
    provider: str
    symbol: str
    payload: dict = Field(default_factory=dict)
    status: str = "ok"
    http_status: int | None = None
