import math
from typing import Tuple

from flask import request, abort

MAX_LIMIT = 100


def parse_pagination(default_limit: int = 10) -> Tuple[int, int]:
    """Read ?page=&limit= from the query string; out-of-range values are a 400."""
    try:
        page = int(request.args.get("page", "1"))
        limit = int(request.args.get("limit", str(default_limit)))
    except ValueError:
        abort(400, description="page and limit must be integers")
    if page < 1:
        abort(400, description="Page must be greater than 0")
    if limit < 1 or limit > MAX_LIMIT:
        abort(400, description=f"Limit must be between 1 and {MAX_LIMIT}")
    return page, limit


def page_meta(page: int, limit: int, total: int) -> dict:
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "total_pages": math.ceil(total / limit),
    }
