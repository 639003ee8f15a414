from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, TypedDict, Union

from pydantic import BaseModel, ConfigDict, Field


Scalar = Union[str, int, float]
QueryObject = Dict[str, str]

# "from" is a keyword, so the functional syntax is required here.
RangeValue = TypedDict("RangeValue", {"from": Optional[Any], "to": Optional[Any]})

KeyTransform = Callable[[str], str]
ApplyCallback = Callable[[QueryObject], Any]
ChangeListener = Callable[[str, Any], None]


class FilterFactoryOptions(BaseModel):
    model_config = ConfigDict(extra="forbid")

    key_transform: Optional[KeyTransform] = Field(
        default=None,
        description="Rewrites filter names into query string keys, e.g. name -> filter[name]",
    )


class FilterOptions(BaseModel):
    model_config = ConfigDict(extra="forbid")

    delimiter: str = Field(default=",", min_length=1, description="Separator for multiple and range values")
    preserve_url_order: bool = Field(
        default=True,
        description="Order applied query objects by the key order of the current query string",
    )
    on_apply: Optional[ApplyCallback] = Field(
        default=None,
        description="Called with the serialized filters; may return an awaitable",
    )


class ClearRequest(BaseModel):
    names: List[str] = Field(default_factory=list)
    all: bool = Field(default=False, description="Clear every filter; names is ignored")
    trigger_apply: bool = True
