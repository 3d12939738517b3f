from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema whose fields travel as camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
