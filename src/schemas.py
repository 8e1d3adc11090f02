from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exposing camelCase keys on the wire while accepting snake_case input"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
