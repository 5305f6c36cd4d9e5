"""
Offset pagination over SQLAlchemy queries
"""
import math
from typing import Any, Callable, Dict, Optional

from sqlalchemy.orm import Query

from app.config import settings


def clamp_page_size(size: Optional[int]) -> int:
    if size is None or size < 1:
        return settings.DEFAULT_PAGE_SIZE
    return min(size, settings.MAX_PAGE_SIZE)


def paginate(query: Query, page: int = 0, size: Optional[int] = None,
             transform: Optional[Callable[[Any], Any]] = None) -> Dict[str, Any]:
    """
    Run ``query`` for one page.

    Args:
        query: Ordered query.
        page: 0-based page index.
        size: Page size, bounded by MAX_PAGE_SIZE.
        transform: Optional per-row conversion.

    Returns:
        Dict shaped like the Page schema.
    """
    page = max(page or 0, 0)
    size = clamp_page_size(size)
    total = query.count()
    rows = query.offset(page * size).limit(size).all()
    if transform is not None:
        rows = [transform(r) for r in rows]
    return {
        "content": rows,
        "page": page,
        "size": size,
        "total_elements": total,
        "total_pages": math.ceil(total / size) if total else 0,
    }
