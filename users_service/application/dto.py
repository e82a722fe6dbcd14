from dataclasses import dataclass, field
from typing import Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")

@dataclass
class UserDTO:
    id: int | None
    first_name: str
    last_name: str
    email: str
    phone: str
    address: str | None = None

@dataclass
class Page(Generic[T]):
    items: list[T] = field(default_factory=list)
    page: int = 0
    size: int = 10
    total: int = 0

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return -(-self.total // self.size)

    @property
    def is_first(self) -> bool:
        return self.page == 0

    @property
    def is_last(self) -> bool:
        return self.page + 1 >= self.total_pages

    def map(self, fn: Callable[[T], U]) -> "Page[U]":
        return Page(items=[fn(i) for i in self.items], page=self.page, size=self.size, total=self.total)
