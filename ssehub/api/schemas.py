from __future__ import annotations
from pydantic import BaseModel, field_validator


class PublishReq(BaseModel):
    message: str

    @field_validator("message")
    @classmethod
    def single_line(cls, v: str) -> str:
        if "\n" in v or "\r" in v:
            raise ValueError("message must be a single line")
        return v


class PublishOut(BaseModel):
    message: str
    delivered: int


class HealthOut(BaseModel):
    status: str
    app: str
    subscribers: int
    published: int
    dropped: int
