import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer

# Money is kept as Decimal in memory and rendered as a JSON number on the wire
# and on disk, matching the files the original server wrote.
Amount = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_record(cls, data: dict):
        return cls.model_validate(data)

    def to_record(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
