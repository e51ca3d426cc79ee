from datetime import datetime
from typing import Any, List
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SplitInput(BaseModel):
    username: str | None = None
    # left untyped: non-numeric shares are filtered out by validation,
    # not rejected with the whole request
    share: Any = None


class ExpenseCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    description: str | None = None
    amount: float | None = Field(None, strict=True)
    split_between: List[SplitInput] | None = Field(None, alias="splitBetween")


class SplitOut(BaseModel):
    username: str
    share: float


class ExpenseOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    description: str
    amount: float
    paid_by: str
    split_between: List[SplitOut]
    created_at: datetime
