"""Settings resolution utilities for pagination configuration."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any

from keypager.utils.exceptions import InvalidPageRequestError

DEFAULT_ID_FIELD = "id"
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


@dataclass(frozen=True)
class PaginationSettings:
    """Explicit pagination configuration.

    Attributes:
        id_field: Unique row identifier used when no ordering is requested
        default_page_size: Page size applied when neither first nor last is given
        max_page_size: Upper bound for first/last
    """

    id_field: str = DEFAULT_ID_FIELD
    default_page_size: int = DEFAULT_PAGE_SIZE
    max_page_size: int = MAX_PAGE_SIZE

    def __post_init__(self) -> None:
        if not self.id_field:
            raise ValueError("id_field cannot be empty")
        if self.default_page_size < 1:
            raise InvalidPageRequestError("default_page_size must be >= 1")
        if self.max_page_size < self.default_page_size:
            raise InvalidPageRequestError(
                "max_page_size must be >= default_page_size"
            )


class SettingsResolver:
    """Resolves pagination settings from an inner Settings class."""

    @staticmethod
    def resolve(obj: Any, base: PaginationSettings | None = None) -> PaginationSettings:
        """Build PaginationSettings from ``obj.Settings``.

        Recognised attributes are the PaginationSettings field names; anything
        else on the inner class is ignored.

        Args:
            obj: Class (or instance) that may carry an inner Settings class
            base: Settings to start from, defaults to PaginationSettings()

        Returns:
            Resolved settings
        """
        resolved = base or PaginationSettings()
        settings = getattr(obj, "Settings", None)
        if settings is None:
            return resolved
        overrides = {
            f.name: getattr(settings, f.name)
            for f in fields(PaginationSettings)
            if hasattr(settings, f.name)
        }
        return replace(resolved, **overrides) if overrides else resolved

    @staticmethod
    def get_id_field(obj: Any) -> str:
        """Get the identifier field from Settings or the default."""
        return SettingsResolver.resolve(obj).id_field
