from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel as PydanticBaseModel
from pydantic import ConfigDict
from pydantic.alias_generators import to_camel


class AppBaseModel(PydanticBaseModel):
    """Base model for request/response payloads."""

    model_config = ConfigDict(
        from_attributes=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )


class RecordModel(AppBaseModel):
    """Base model for records stored in the JSON collections.

    Records written by older clients carry numeric ids and unknown keys, so
    numbers are accepted as ids and extra keys are dropped.
    """

    model_config = ConfigDict(
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    def to_row(self) -> dict:
        """Serialize to the camelCase row shape used by the store."""
        return self.model_dump(by_alias=True, mode="json")


def unique_ids(values: Iterable[str] | None) -> list[str]:
    """Drop empty and repeated ids, keeping first-seen order."""
    result: list[str] = []
    for value in values or []:
        if value is None:
            continue
        value = str(value).strip()
        if value and value not in result:
            result.append(value)
    return result
