from __future__ import annotations

from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict


class BaseSchema(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RecordModel(BaseModel):
    # Provider rows may carry columns we do not read.
    model_config = ConfigDict(extra="ignore")
