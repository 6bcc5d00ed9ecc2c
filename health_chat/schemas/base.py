"""
Shared pydantic configuration for API schemas.

Field names are snake_case in Python and camelCase on the wire
(`user_id` <-> `userId`), matching the JSON the web client sends.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
