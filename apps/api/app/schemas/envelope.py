"""Response envelope shared by every endpoint."""

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel

DataT = TypeVar("DataT")
ItemT = TypeVar("ItemT")


class PageMeta(BaseModel):
    page: int
    limit: int
    total: int


class Page(BaseModel, Generic[ItemT]):
    items: list[ItemT]
    meta: PageMeta


class SuccessResponse(BaseModel, Generic[DataT]):
    status: Literal["success"] = "success"
    message: str
    data: DataT


class MessageResponse(BaseModel):
    status: Literal["success"] = "success"
    message: str
