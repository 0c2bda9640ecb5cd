from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


class Pagination(BaseModel):
    """Pagination block attached to list responses."""

    model_config = ConfigDict(populate_by_name=True)

    current_page: int = 0
    from_: int = Field(0, alias="from")
    last_page: int = 0
    per_page: int = 0
    to: int = 0
    total: int = 0

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.last_page

    @property
    def next_page(self) -> int:
        """Next page number, or 0 when on the last page."""
        return self.current_page + 1 if self.has_next_page else 0

    @property
    def has_previous_page(self) -> bool:
        return self.current_page > 1

    @property
    def previous_page(self) -> int:
        """Previous page number, or 0 when on the first page."""
        return self.current_page - 1 if self.has_previous_page else 0


@dataclass(frozen=True)
class ListOptions:
    page: int | None = None
    per_page: int | None = None

    def to_params(self) -> dict[str, int]:
        params = {}
        if self.page:
            params["page"] = self.page
        if self.per_page:
            params["per_page"] = self.per_page
        return params
