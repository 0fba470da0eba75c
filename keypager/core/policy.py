from __future__ import annotations

import logging
from dataclasses import replace

from keypager.core.plan import PageRequest
from keypager.utils.settings import PaginationSettings

logger = logging.getLogger(__name__)


def apply_page_size_policy(
    req: PageRequest, settings: PaginationSettings | None = None
) -> PageRequest:
    """Bound a request before compiling it.

    Requests without first/last get ``first = default_page_size``; counts
    above ``max_page_size`` are clamped. The request is otherwise unchanged.

    Raises:
        InvalidPageRequestError: If first/last are conflicting or not positive
    """
    req.validate()
    settings = settings or PaginationSettings()

    if req.first is None and req.last is None:
        logger.debug("No page size requested, using first=%d", settings.default_page_size)
        return replace(req, first=settings.default_page_size)

    changes: dict[str, int] = {}
    for name in ("first", "last"):
        value = getattr(req, name)
        if value is not None and value > settings.max_page_size:
            logger.debug("Clamping %s=%d to %d", name, value, settings.max_page_size)
            changes[name] = settings.max_page_size
    return replace(req, **changes) if changes else req
