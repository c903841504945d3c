from typing import Any, Mapping, Union

ROUTER_BASE_PREFIX = "/api/v1"

BASE_RESPONSES: Mapping[int, dict[str, Any]] = {
    400: {"description": "Bad request. Check the location expression."},
    404: {"description": "Resource not found."},
    500: {"description": "Internal server error."},
}

BASE_400_RESPONSE: Mapping[Union[int, str], dict[str, Any]] = {400: BASE_RESPONSES[400]}
BASE_404_RESPONSE: Mapping[Union[int, str], dict[str, Any]] = {404: BASE_RESPONSES[404]}
BASE_500_RESPONSE: Mapping[Union[int, str], dict[str, Any]] = {500: BASE_RESPONSES[500]}

PUBLIC_ERROR_RESPONSES = {**BASE_404_RESPONSE, **BASE_500_RESPONSE}
