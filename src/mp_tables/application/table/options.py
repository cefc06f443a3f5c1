"""Table – configuration surface of :class:`TableController`."""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Sequence

from mp_tables.application.pagination import Filter, PaginationMode, Sort
from mp_tables.application.table.merge import FilterBehavior

__all__ = [
    "FilterOptions",
    "PaginationOptions",
    "ProcessingMode",
    "SorterOptions",
    "TableOptions",
]


class ProcessingMode(str, Enum):
    """Where filtering/sorting happens."""
    SERVER = "server"
    OFF = "off"


@dataclasses.dataclass(frozen=True)
class PaginationOptions:
    mode: PaginationMode = PaginationMode.OFFSET
    current_page: int | None = None
    page_size: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "mode", PaginationMode(self.mode))

    @property
    def is_enabled(self) -> bool:
        return self.mode is not PaginationMode.OFF

    @property
    def is_cursor(self) -> bool:
        return self.mode is PaginationMode.CURSOR


@dataclasses.dataclass(frozen=True)
class SorterOptions:
    initial: Sequence[Sort] | None = None
    permanent: Sequence[Sort] = ()
    mode: ProcessingMode = ProcessingMode.SERVER

    def __post_init__(self) -> None:
        object.__setattr__(self, "permanent", tuple(self.permanent))
        object.__setattr__(self, "mode", ProcessingMode(self.mode))


@dataclasses.dataclass(frozen=True)
class FilterOptions:
    initial: Sequence[Filter] | None = None
    permanent: Sequence[Filter] = ()
    default_behavior: FilterBehavior | None = None
    mode: ProcessingMode = ProcessingMode.SERVER

    def __post_init__(self) -> None:
        object.__setattr__(self, "permanent", tuple(self.permanent))
        object.__setattr__(self, "mode", ProcessingMode(self.mode))
        if self.default_behavior is not None:
            object.__setattr__(self, "default_behavior", FilterBehavior(self.default_behavior))


@dataclasses.dataclass(frozen=True)
class TableOptions:
    """Per-controller options.

    ``None`` fields fall back to :class:`~mp_tables.config.TableSettings`.
    """
    pagination: PaginationOptions = dataclasses.field(default_factory=PaginationOptions)
    sorters: SorterOptions = dataclasses.field(default_factory=SorterOptions)
    filters: FilterOptions = dataclasses.field(default_factory=FilterOptions)
    sync_with_location: bool | None = None
