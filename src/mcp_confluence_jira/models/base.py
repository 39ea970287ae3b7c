"""
Base model for backend API payloads.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T", bound="ApiModel")


class ApiModel(BaseModel):
    """
    Base class for models built from backend JSON.

    Subclasses read raw responses in ``from_api_response`` and emit the
    caller-facing shape from ``to_simplified_dict``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @classmethod
    def from_api_response(cls: type[T], data: dict[str, Any], **kwargs: Any) -> T:
        raise NotImplementedError("Subclasses must implement from_api_response")

    def to_simplified_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
