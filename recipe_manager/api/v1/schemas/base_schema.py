"""Base class with Pydantic config for all schemas."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """Base class with Pydantic config for all schemas.

    Fields are declared in snake_case and exchanged in camelCase. Schemas can be built
    straight from ORM objects, surrounding whitespace is stripped from strings and
    unknown keys are dropped.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
        str_strip_whitespace=True,
        extra="ignore",
    )
