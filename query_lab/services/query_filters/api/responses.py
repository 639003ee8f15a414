"""
API response models for the Query Filters Service
"""

from pydantic import BaseModel
from typing import Any, Dict, Optional


class FiltersAPIResult(BaseModel):
    """
    Filter state returned by the filters endpoints
    """
    values: Dict[str, Any]
    query: Dict[str, str]
    ordered_query: Dict[str, str]
    query_string: str
    in_flight: bool = False
    applied: Optional[Any] = None


class HasAPIResult(BaseModel):
    """
    Membership check result
    """
    filter: str
    value: str
    known: bool
    matches: bool
