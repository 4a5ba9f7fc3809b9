# backend/tradelink/schemas/base.py

from typing import Generic, List, TypeVar
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """JSON bodies use camelCase (``matchId``); snake_case is accepted too."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class PageMeta(CamelModel):
    total: int
    page: int
    limit: int
    total_pages: int


T = TypeVar("T")


class Page(CamelModel, Generic[T]):
    data: List[T]
    meta: PageMeta


class Message(CamelModel):
    message: str
