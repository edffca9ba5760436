"""JSON and JSONP response rendering."""

import json
import re
from typing import Any

from fastapi import Response, status

_CALLBACK = re.compile(r"^[A-Za-z_$][\w$.]*$")


def is_valid_callback(callback: str) -> bool:
    return bool(_CALLBACK.match(callback))


def jsonp_response(
    callback: str, content: Any, status_code: int = status.HTTP_200_OK
) -> Response:
    """Wrap ``content`` in a call to ``callback``."""
    body = json.dumps(content)
    return Response(
        content=f"{callback}({body})",
        status_code=status_code,
        media_type="application/javascript",
    )
