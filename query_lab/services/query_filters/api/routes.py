"""
API routes for the Query Filters Service
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, HTTPException, Request
from pydantic import ValidationError

from ..models.filter_models import ClearRequest
from ..src.filters import factory
from ..src.registry import FilterRegistry
from ..src.service import QueryFilters
from ..utils.http_callback import HttpApplyCallback
from ..utils.validation import FilterContractError
from .responses import FiltersAPIResult, HasAPIResult
from ....utility.constants_manager import ConstantsManager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/filters", tags=["filters"])


class PageNumber:
    """Positive page number; anything unparsable falls back to page 1."""

    default_value = 1

    def parse(self, raw: Optional[str], delimiter: str) -> int:
        try:
            page = int(raw) if raw else self.default_value
        except ValueError:
            return self.default_value
        return page if page > 0 else self.default_value

    def serialize(self, value: Any, delimiter: str) -> Optional[str]:
        return str(value) if value and value != self.default_value else None

    def matches(self, value: Any, candidate: Any) -> bool:
        return str(value) == str(candidate)


CATALOG_FILTERS = FilterRegistry({
    "search": factory.single(),
    "category": factory.single(),
    "brands": factory.multiple(),
    "price": factory.range(),
    "page": factory.custom(PageNumber()),
})


def build_filters(request: Request) -> QueryFilters:
    """
    Build the catalog filters from the request's query string

    Args:
        request: Incoming request; only its query string is read

    Returns:
        QueryFilters configured from the environment
    """
    constants = ConstantsManager()
    apply_url = constants.get_apply_url()
    return QueryFilters(
        CATALOG_FILTERS,
        request.url,
        delimiter=constants.get_delimiter(),
        preserve_url_order=constants.get_preserve_url_order(),
        on_apply=HttpApplyCallback(apply_url) if apply_url else None,
    )


def to_result(filters: QueryFilters, applied: Any = None) -> FiltersAPIResult:
    return FiltersAPIResult(
        values=filters.data(),
        query=filters.serialize(),
        ordered_query=filters.serialize_ordered(),
        query_string=str(filters.to_search_params()),
        in_flight=filters.in_flight,
        applied=applied,
    )


@router.get("/state", response_model=FiltersAPIResult)
async def filters_state(request: Request):
    """
    Parse the query string into filter values and serialize them back
    """
    try:
        return to_result(build_filters(request))
    except (ValidationError, FilterContractError) as e:
        logger.error(f"Invalid filter configuration: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error in filters state: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/has/{name}/{value}", response_model=HasAPIResult)
async def filters_has(name: str, value: str, request: Request):
    """
    Check whether a value is selected in a filter
    """
    try:
        filters = build_filters(request)
        return HasAPIResult(
            filter=name,
            value=value,
            known=name in filters,
            matches=filters.has(name, value),
        )
    except (ValidationError, FilterContractError) as e:
        logger.error(f"Invalid filter configuration: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error in filters has: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/clear", response_model=FiltersAPIResult)
async def filters_clear(body: ClearRequest, request: Request):
    """
    Reset filters to their defaults and optionally apply the result

    ``all`` clears every filter; an empty ``names`` list clears nothing.
    """
    try:
        filters = build_filters(request)
        names = list(filters.registry.names()) if body.all else body.names
        filters.clear(names, trigger_apply=False)

        applied = None
        if names and body.trigger_apply and filters.options.on_apply is not None:
            task = filters.apply()
            if task is not None:
                applied = await task
        return to_result(filters, applied)
    except HTTPException:
        raise
    except (ValidationError, FilterContractError) as e:
        logger.error(f"Invalid filter configuration: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error in filters clear: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))
