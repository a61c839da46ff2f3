"""Mutable session state fragments stored in the resource registry.

``FocusState`` tracks which panel owns the cursor, ``TextEntryState`` is the
line-editing buffer behind the "open file" prompt, and ``FileListState`` is
the ordered list of open file identifiers.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from .resources import mutator

DEFAULT_NAVIGATION_REGIONS: tuple[str, ...] = ("files", "view")
DEFAULT_ENTRY_REGIONS: tuple[str, ...] = ("entry",)


@dataclass(frozen=True)
class LaunchArgs:
    """File identifiers exactly as given on the command line."""

    files: tuple[str, ...] = ()


@dataclass
class FocusState:
    """Cursor over two region sets: navigation panels and the entry prompt.

    Only one set is active at a time and ``cursor`` is always a member of it.
    ``toggle`` swaps the active set; ``set_cursor`` jumps between navigation
    regions and is ignored while the entry set is active.
    """

    navigation: tuple[str, ...] = DEFAULT_NAVIGATION_REGIONS
    entry: tuple[str, ...] = DEFAULT_ENTRY_REGIONS
    cursor: str = ""
    entry_active: bool = False
    last_navigation: str | None = None

    def __post_init__(self) -> None:
        self.navigation = tuple(self.navigation)
        self.entry = tuple(self.entry)
        if not self.navigation or not self.entry:
            raise ValueError("both region sets need at least one region")
        regions = self.navigation + self.entry
        if len(set(regions)) != len(regions):
            raise ValueError(f"region names must be unique across sets: {regions!r}")
        if not self.cursor:
            self.cursor = self.entry[0] if self.entry_active else self.navigation[0]
        if self.cursor not in self.active_set:
            raise ValueError(f"cursor {self.cursor!r} is not in the active region set")

    @property
    def active_set(self) -> tuple[str, ...]:
        return self.entry if self.entry_active else self.navigation

    @mutator
    def toggle(self) -> None:
        if self.entry_active:
            self.entry_active = False
            self.cursor = self.last_navigation or self.navigation[0]
            return
        self.last_navigation = self.cursor
        self.entry_active = True
        self.cursor = self.entry[0]

    @mutator
    def set_cursor(self, region: str) -> None:
        # Arrow navigation is ignored during text entry.
        if self.entry_active:
            return
        if region not in self.navigation:
            raise ValueError(f"unknown navigation region: {region!r}")
        self.cursor = region

    def is_focused(self, region: str) -> bool:
        return self.cursor == region


@dataclass
class TextEntryState:
    active: bool = False
    _buffer: list[str] = field(default_factory=list)

    @classmethod
    def from_text(cls, text: str, *, active: bool = False) -> TextEntryState:
        return cls(active, list(text))

    @property
    def buffer(self) -> tuple[str, ...]:
        return tuple(self._buffer)

    @property
    def text(self) -> str:
        return "".join(self._buffer)

    @mutator
    def push(self, ch: str) -> None:
        self._buffer.append(ch)

    @mutator
    def pop(self) -> None:
        if self._buffer:
            self._buffer.pop()

    @mutator
    def clear(self) -> None:
        self._buffer.clear()

    @mutator
    def take(self) -> str:
        """Empty the buffer and return what it held."""
        taken, self._buffer = self._buffer, []
        return "".join(taken)

    @mutator
    def toggle(self) -> None:
        self.active = not self.active

    def __bool__(self) -> bool:
        return self.active


@dataclass
class FileListState:
    """Open file identifiers in insertion order; duplicates are kept."""

    _names: list[str] = field(default_factory=list)

    @classmethod
    def from_names(cls, names) -> FileListState:
        return cls(list(names))

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._names)

    @property
    def last(self) -> str | None:
        return self._names[-1] if self._names else None

    @mutator
    def insert(self, name: str) -> None:
        self._names.append(name)

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)
