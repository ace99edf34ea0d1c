"""Shared pydantic base for API and store records.

Attributes are snake_case in Python; the browser client speaks camelCase, so
every model accepts and emits camelCase aliases.
"""

from datetime import datetime
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


def reject_null(value: Any) -> Any:
    if value is None:
        raise ValueError("may be omitted but not set to null")
    return value


# Partial-update fields for attributes the stored record requires: leaving
# them out keeps the stored value, sending null or "" is a 422.
UpdateStr = Annotated[
    Optional[Annotated[str, StringConstraints(min_length=1)]],
    BeforeValidator(reject_null),
]
UpdateDatetime = Annotated[Optional[datetime], BeforeValidator(reject_null)]
UpdateBool = Annotated[Optional[bool], BeforeValidator(reject_null)]
