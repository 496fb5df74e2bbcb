"""Frame pool — page-based physical memory allocation.

Physical memory is one flat byte buffer divided into fixed-size
**frames** (the physical counterpart of logical pages).  The frame
pool tracks which frames are free and hands them out on request.

Each process later records the frames it was given in its **page
table**: logical page 0 lives in ``page_table[0]``, page 1 in
``page_table[1]``, and so on.  The process sees contiguous memory
starting at 0; the frames themselves may be scattered anywhere.

Why pages instead of variable-size blocks?
    Fixed-size allocation eliminates **external fragmentation** — the
    situation where total free memory is sufficient but no single
    contiguous block is large enough.  With pages, any free frame can
    satisfy any request.

Why a free *stack* instead of a set or bitmap?
    The pool pops from the end of a list, so a fresh pool hands out
    the highest-numbered frames first.  That makes allocation order
    predictable, which is what you want when watching a simulator.

The pool arbitrates *ownership* only.  It never writes into its own
buffer — whoever receives frames is responsible for filling them.
There is no way to give a single frame back: frames leave the pool
once and only return when the whole pool is released at shutdown.
"""


class InsufficientFramesError(Exception):
    """Raise when an allocation asks for more frames than are free."""


class InsufficientPhysicalMemoryError(Exception):
    """Raise when a process cannot be created for lack of free frames.

    Raised by the kernel, chained to the pool's ``InsufficientFramesError``.
    """


class FramePool:
    """Own the physical byte buffer and the free-frame stack.

    The pool owns two data structures:
    - A zero-initialised **bytearray** of ``total_size`` bytes.
    - A **free list** of frame numbers, used as a stack.
    """

    def __init__(self, *, total_size: int, page_size: int) -> None:
        """Create a frame pool with every frame free.

        Args:
            total_size: Total physical memory in bytes.
            page_size: Size of one frame in bytes.

        """
        self._total_size = total_size
        self._page_size = page_size
        self._total_frames = total_size // page_size
        self._memory = bytearray(total_size)
        self._free: list[int] = list(range(self._total_frames))

    @property
    def total_size(self) -> int:
        """Return the physical memory size in bytes."""
        return self._total_size

    @property
    def page_size(self) -> int:
        """Return the frame size in bytes."""
        return self._page_size

    @property
    def total_frames(self) -> int:
        """Return the total number of physical frames."""
        return self._total_frames

    @property
    def free_frames(self) -> int:
        """Return the number of currently unallocated frames."""
        return len(self._free)

    @property
    def memory(self) -> bytearray:
        """Return the physical buffer, for the frame owner to write into."""
        return self._memory

    def free_frame_indices(self) -> list[int]:
        """Return a copy of the free list in stack order (top last)."""
        return list(self._free)

    def is_free(self, frame: int) -> bool:
        """Return True if *frame* is still in the free list.

        A plain linear scan, exactly like looking down a list of empty
        shelves.  No per-frame owner is tracked.
        """
        return frame in self._free

    def frame_offset(self, frame: int) -> int:
        """Return the byte offset of *frame* inside the physical buffer.

        Raises:
            IndexError: If the frame number is out of range.

        """
        if not 0 <= frame < self._total_frames:
            msg = f"Frame {frame} out of range (0..{self._total_frames - 1})"
            raise IndexError(msg)
        return frame * self._page_size

    def read_frame(self, frame: int) -> bytes:
        """Return a snapshot of the bytes stored in *frame*."""
        start = self.frame_offset(frame)
        return bytes(self._memory[start : start + self._page_size])

    def allocate(self, required_frames: int) -> list[int]:
        """Remove frames from the free stack and return them.

        The request is all-or-nothing: either every frame is handed
        out, or the pool is left untouched.

        Args:
            required_frames: Number of frames wanted.

        Returns:
            The allocated frame numbers, in the order they were popped.

        Raises:
            ValueError: If required_frames is negative.
            InsufficientFramesError: If fewer than required_frames are free.

        """
        if required_frames < 0:
            msg = f"Cannot allocate a negative number of frames ({required_frames})"
            raise ValueError(msg)
        if required_frames > len(self._free):
            msg = f"Cannot allocate {required_frames} frames: only {len(self._free)} free"
            raise InsufficientFramesError(msg)

        return [self._free.pop() for _ in range(required_frames)]

    def release(self) -> None:
        """Drop the buffer and the free list (shutdown only)."""
        self._memory = bytearray()
        self._free.clear()
