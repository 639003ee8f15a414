from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel


class FilterSnapshot(BaseModel):
    values: Dict[str, Any]
    query: Dict[str, str]
    in_flight: bool
