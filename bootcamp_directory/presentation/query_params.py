import re
from typing import Any, Dict, Iterable, Tuple

from fastapi import Request

from bootcamp_directory.infrastructure.logging.logger import Logger

logger = Logger.get_logger(__name__)

_BRACKETED = re.compile(r"^(?P<field>[^\[\]]+)\[(?P<operator>[^\[\]]*)\]$")


def _is_unsafe(key: str) -> bool:
    return "$" in key or "." in key


def parse_query_params(items: Iterable[Tuple[str, str]]) -> Dict[str, Any]:
    """Build a filter mapping from raw query-string pairs.

    ``price[lte]=100`` becomes ``{"price": {"lte": "100"}}``; plain keys map to
    their value (the last one wins when repeated). Keys carrying ``$`` or ``.``
    are dropped so operator injection through the query string is impossible.
    """
    params: Dict[str, Any] = {}
    for key, value in items:
        match = _BRACKETED.match(key)
        field, operator = (match.group("field"), match.group("operator")) if match else (key, None)

        if _is_unsafe(field) or (operator and _is_unsafe(operator)):
            logger.warning(f"Dropped unsafe query parameter: {key}")
            continue

        if operator:
            existing = params.get(field)
            if not isinstance(existing, dict):
                existing = params[field] = {}
            existing[operator] = value
        else:
            params[field] = value
    return params


def advanced_query(request: Request) -> Dict[str, Any]:
    return parse_query_params(request.query_params.multi_items())
