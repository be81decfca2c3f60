from dataclasses import dataclass, field
from math import ceil
from typing import Callable, Generic, TypeVar
from taskboard.domain.errors import TaskValidationError

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 2000
DEFAULT_SORT = "createdAt"

# nazwa z API (camelCase) -> atrybut Task
SORT_FIELDS = {
    "title": "title",
    "description": "description",
    "status": "status",
    "createdAt": "created_at",
    "createdBy": "created_by",
    "updatedAt": "updated_at",
    "modifiedBy": "modified_by",
}


def resolve_sort_field(sort: str | None) -> str:
    """
    Zamienia nazwę pola sortowania na atrybut `Task`.

    Akceptuje nazwy z API (`createdAt`) oraz nazwy atrybutów (`created_at`).
    Brak wartości -> `created_at`.

    :raises TaskValidationError: Gdy pole nie jest sortowalne.
    """
    name = (sort or DEFAULT_SORT).strip()
    if name in SORT_FIELDS:
        return SORT_FIELDS[name]
    if name in SORT_FIELDS.values():
        return name
    raise TaskValidationError(
        "sort", f"Unsupported sort field '{name}'. Must be one of: {', '.join(SORT_FIELDS)}"
    )


@dataclass(frozen=True)
class PageRequest:
    """Opis żądanej strony: numer (od 0), rozmiar i pole sortowania (zawsze rosnąco)."""
    page: int = 0
    size: int = DEFAULT_PAGE_SIZE
    sort: str = DEFAULT_SORT

    def __post_init__(self):
        if self.page < 0:
            raise TaskValidationError("page", "Page index must not be less than zero")
        if self.size < 1:
            raise TaskValidationError("size", "Page size must not be less than one")

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass(frozen=True)
class Page(Generic[T]):
    """Wycinek posortowanej listy + metadane (łączna liczba rekordów, numer i rozmiar strony)."""
    content: list[T]
    total_elements: int
    request: PageRequest = field(default_factory=PageRequest)

    @property
    def number(self) -> int:
        return self.request.page

    @property
    def size(self) -> int:
        return self.request.size

    @property
    def total_pages(self) -> int:
        return ceil(self.total_elements / self.size) if self.size > 0 else 1

    @property
    def number_of_elements(self) -> int:
        return len(self.content)

    @property
    def is_first(self) -> bool:
        return self.number == 0

    @property
    def is_last(self) -> bool:
        return self.number + 1 >= self.total_pages

    def map(self, fn: Callable[[T], R]) -> "Page[R]":
        return Page(content=[fn(item) for item in self.content], total_elements=self.total_elements, request=self.request)
