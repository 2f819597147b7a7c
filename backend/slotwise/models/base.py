"""Shared pydantic base for slotwise records."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class SlotwiseModel(BaseModel):
    """Base model accepting both snake_case names and camelCase aliases.

    Upstream collaborators (calendar adapters, the conversation layer) send
    camelCase JSON; Python callers use field names.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        revalidate_instances="always",
    )
