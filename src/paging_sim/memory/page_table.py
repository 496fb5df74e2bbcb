"""Page table — one process's map from logical pages to physical frames.

A process believes its memory is one contiguous run of pages numbered
from 0.  The page table is what makes that belief true: entry *i*
names the physical frame that backs logical page *i*.

::

    logical page    0     1     2
                    |     |     |
    page table    [ 7,    2,    5 ]
                    |     |     |
    physical      frame 7  frame 2  frame 5

The table is built once, when the process is created, and never
changes afterwards — there is no paging out and no remapping here.
"""

from collections.abc import Iterable, Iterator


class UnmappedPageError(Exception):
    """Raised when a logical page has no frame behind it."""


class PageTable:
    """Ordered, immutable mapping of logical page → physical frame."""

    def __init__(self, frames: Iterable[int]) -> None:
        """Create a page table from frames listed in page order."""
        self._frames: tuple[int, ...] = tuple(frames)

    def translate(self, page: int) -> int:
        """Translate a logical page number to its physical frame.

        Raises:
            UnmappedPageError: If the page is outside the table.

        """
        if not 0 <= page < len(self._frames):
            msg = f"Page {page} is not mapped"
            raise UnmappedPageError(msg)
        return self._frames[page]

    @property
    def frames(self) -> tuple[int, ...]:
        """Return the frames in page order."""
        return self._frames

    def mappings(self) -> list[tuple[int, int]]:
        """Return ``(page, frame)`` rows in page order."""
        return list(enumerate(self._frames))

    def __len__(self) -> int:
        """Return the number of mapped pages."""
        return len(self._frames)

    def __iter__(self) -> Iterator[int]:
        """Iterate over frames in page order."""
        return iter(self._frames)

    def __eq__(self, other: object) -> bool:
        """Compare by mapped frames."""
        if not isinstance(other, PageTable):
            return NotImplemented
        return self._frames == other._frames

    def __hash__(self) -> int:
        """Hash by mapped frames."""
        return hash(self._frames)

    def __repr__(self) -> str:
        """Return a debug-friendly representation."""
        return f"PageTable({list(self._frames)})"
