from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base schema using camelCase on the wire and snake_case in Python.

    Input accepts either spelling; output is produced with
    model_dump(by_alias=True).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
