"""Memory geometry — the sizes that shape physical memory.

Before a single frame can be handed out, the operator decides three
numbers:

- **memory size** — how many bytes of physical RAM exist.
- **page size** — how big each page (and therefore each frame) is.
- **max process size** — the largest process anyone may create.

All three must be powers of two.  Real hardware insists on this
because an address splits cleanly into (page number, offset) only when
the page size is a power of two: the low bits are the offset, the high
bits are the page number, and no division is ever needed.

Cross-field rules:
    - A page cannot be bigger than the whole of memory.
    - A process cannot be bigger than the whole of memory.
    - A process cannot be bigger than the configured maximum.
"""

from dataclasses import dataclass


class InvalidGeometryError(ValueError):
    """Raise when a size is not a power of two or breaks an ordering rule."""


def is_power_of_two(number: int) -> bool:
    """Return True if *number* is a positive power of two.

    A power of two has exactly one bit set, so clearing the lowest set
    bit (``n & (n - 1)``) leaves zero.
    """
    return number > 0 and (number & (number - 1)) == 0


def check_memory_size(memory_size: int) -> None:
    """Validate the physical memory size.

    Raises:
        InvalidGeometryError: If the size is not a power of two.

    """
    if not is_power_of_two(memory_size):
        msg = "Size must be a power of 2."
        raise InvalidGeometryError(msg)


def check_page_size(page_size: int, *, memory_size: int) -> None:
    """Validate the page/frame size against the memory size.

    Raises:
        InvalidGeometryError: If the size is not a power of two or
            exceeds the memory size.

    """
    if not is_power_of_two(page_size):
        msg = "Page size must be a power of 2."
        raise InvalidGeometryError(msg)
    if page_size > memory_size:
        msg = "Page size cannot exceed total memory size."
        raise InvalidGeometryError(msg)


def check_max_process_size(max_process_size: int, *, memory_size: int) -> None:
    """Validate the maximum process size against the memory size.

    Raises:
        InvalidGeometryError: If the size is not a power of two or
            exceeds the memory size.

    """
    if not is_power_of_two(max_process_size):
        msg = "Maximum process size must be a power of 2."
        raise InvalidGeometryError(msg)
    if max_process_size > memory_size:
        msg = "Maximum process size cannot exceed total memory size."
        raise InvalidGeometryError(msg)


def check_process_size(size: int, *, max_process_size: int) -> None:
    """Validate a requested process size.

    Raises:
        InvalidGeometryError: If the size is not a power of two or
            exceeds the configured maximum.

    """
    if not is_power_of_two(size):
        msg = "Process size must be a power of 2."
        raise InvalidGeometryError(msg)
    if size > max_process_size:
        msg = f"Process size exceeds the maximum allowed size of {max_process_size} bytes."
        raise InvalidGeometryError(msg)


def check_process_bounds(size: int, *, max_process_size: int) -> None:
    """Check only that a process size is positive and within the maximum.

    The kernel relies on this alone; the power-of-two rule is applied
    by whoever collects the size from the operator.

    Raises:
        InvalidGeometryError: If the size is not in ``1..max_process_size``.

    """
    if size <= 0:
        msg = "Process size must be positive."
        raise InvalidGeometryError(msg)
    if size > max_process_size:
        msg = f"Process size exceeds the maximum allowed size of {max_process_size} bytes."
        raise InvalidGeometryError(msg)


@dataclass(frozen=True)
class MemoryGeometry:
    """The validated shape of physical memory.

    Attributes:
        memory_size: Total physical memory in bytes.
        page_size: Size of one page/frame in bytes.
        max_process_size: Largest process size accepted, in bytes.

    """

    memory_size: int
    page_size: int
    max_process_size: int

    @property
    def total_frames(self) -> int:
        """Return how many frames the memory splits into."""
        return self.memory_size // self.page_size

    def pages_for(self, size: int) -> int:
        """Return the number of pages needed to hold *size* bytes (ceiling)."""
        return -(-size // self.page_size)

    def validate(self) -> None:
        """Check every field and the cross-field ordering rules.

        Raises:
            InvalidGeometryError: On the first rule that fails.

        """
        check_memory_size(self.memory_size)
        check_page_size(self.page_size, memory_size=self.memory_size)
        check_max_process_size(self.max_process_size, memory_size=self.memory_size)
