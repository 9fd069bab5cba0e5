"""
Base schema shared by every wire model.

Wire keys are camelCase (the backend's contract); Python attributes are
snake_case. Unknown keys sent by the server are ignored.
"""

from typing import Any, Dict, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from .exceptions import ClientValidationError

ModelT = TypeVar("ModelT", bound="WireModel")


class WireModel(BaseModel):
    """Pydantic base with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_wire(self, partial: bool = False) -> Dict[str, Any]:
        """
        Serialize for a request body.

        Args:
            partial: Send only the fields that were explicitly set (PATCH/PUT
                of a subset). Otherwise fields that are None are omitted.
        """
        if partial:
            return self.model_dump(by_alias=True, exclude_unset=True, mode="json")
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


def validate_form(model_cls: Type[ModelT], data: Union[ModelT, Dict[str, Any]]) -> ModelT:
    """
    Validate form data against a request schema.

    Accepts an already-built model (returned unchanged) or a dict with either
    camelCase or snake_case keys.

    Raises:
        ClientValidationError: If the data does not satisfy the schema
    """
    if isinstance(data, model_cls):
        return data
    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        raise ClientValidationError.from_pydantic(e) from e
