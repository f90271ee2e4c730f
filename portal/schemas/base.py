# portal/schemas/base.py
from typing import Annotated, Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

M = TypeVar("M", bound=BaseModel)


class APIModel(BaseModel):
    """Records exchanged with the upstream API: camelCase on the wire,
    snake_case in Python, either accepted on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_api(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class MessageResponse(APIModel):
    message: str = ""


def parse_list(model: Type[M], data: Any) -> List[M]:
    return TypeAdapter(List[model]).validate_python(data or [])


def _blank_to_none(v: Any) -> Any:
    if v is None or (isinstance(v, str) and not v.strip()):
        return None
    return v


# form inputs arrive as strings; "" means "not given"
OptionalAmount = Annotated[Optional[Annotated[float, Field(ge=0)]], BeforeValidator(_blank_to_none)]


def parse_message(response: Any) -> MessageResponse:
    """Write endpoints answer ``{message}``; some answer nothing at all."""
    if not response.content:
        return MessageResponse()
    data = response.json()
    return MessageResponse.model_validate(data if isinstance(data, dict) else {})
