"""Tests for the inspection views and their text renderings."""

from paging_sim.memory.page_table import PageTable
from paging_sim.process.registry import Process
from paging_sim.views import (
    FrameStatus,
    MemoryReport,
    PageTableReport,
    format_hexdump,
    format_memory_report,
    format_page_table_report,
    format_process_created,
)

FREE = FrameStatus.FREE
OCCUPIED = FrameStatus.OCCUPIED


def _report() -> MemoryReport:
    """Build a 4-frame report with frame 0 free."""
    return MemoryReport(
        total_size=2048,
        page_size=512,
        total_frames=4,
        free_frames=1,
        frames=(FREE, OCCUPIED, OCCUPIED, OCCUPIED),
    )


def _process() -> Process:
    """Build a 2-page process backed by frames 3 and 2."""
    return Process(pid=1, size=1024, num_pages=2, page_table=PageTable([3, 2]))


class TestMemoryReport:
    """Verify the physical memory view."""

    def test_free_percent(self) -> None:
        """One free frame of four is 25%."""
        expected_percent = 25.0
        assert _report().free_percent == expected_percent

    def test_free_percent_with_no_frames(self) -> None:
        """An empty pool reports 0% rather than dividing by zero."""
        report = MemoryReport(
            total_size=0, page_size=256, total_frames=0, free_frames=0, frames=()
        )
        assert report.free_percent == 0.0

    def test_format(self) -> None:
        """The text report lists totals then one status line per frame."""
        text = format_memory_report(_report())
        assert text.splitlines() == [
            "=== Physical Memory Status ===",
            "Total Physical Memory: 2048 bytes",
            "Page Size: 512 bytes",
            "Total Number of Frames: 4",
            "Free Frames: 1 (25.00%)",
            "",
            "Frame Status:",
            "Frame\tStatus",
            "0\tFree",
            "1\tOccupied",
            "2\tOccupied",
            "3\tOccupied",
        ]

    def test_percent_uses_two_decimals(self) -> None:
        """Percentages are always printed with two decimals."""
        report = MemoryReport(
            total_size=768, page_size=256, total_frames=3, free_frames=1,
            frames=(FREE, OCCUPIED, OCCUPIED),
        )
        assert "Free Frames: 1 (33.33%)" in format_memory_report(report)

    def test_to_dict(self) -> None:
        """The dict form is JSON-friendly."""
        data = _report().to_dict()
        assert data["free_percent"] == 25.0  # noqa: PLR2004
        assert data["frames"] == ["Free", "Occupied", "Occupied", "Occupied"]


class TestPageTableReport:
    """Verify the page table view."""

    def test_from_process(self) -> None:
        """Rows come from the page table in page order."""
        report = PageTableReport.from_process(_process())
        assert report.rows == ((0, 3), (1, 2))
        assert report.num_pages == 2  # noqa: PLR2004

    def test_format(self) -> None:
        """The text report has a header then one row per page."""
        text = format_page_table_report(PageTableReport.from_process(_process()))
        assert text.splitlines() == [
            "Page Table for Process ID 1:",
            "Process Size: 1024 bytes",
            "Number of Pages: 2",
            "Page\tFrame",
            "0\t3",
            "1\t2",
        ]

    def test_to_dict(self) -> None:
        """The dict form lists page/frame pairs."""
        data = PageTableReport.from_process(_process()).to_dict()
        assert data["page_table"] == [{"page": 0, "frame": 3}, {"page": 1, "frame": 2}]


class TestFormatting:
    """Verify the remaining text helpers."""

    def test_process_created(self) -> None:
        """The confirmation names the pid, size, and page count."""
        text = format_process_created(_process())
        assert text.splitlines() == [
            "Process created successfully!",
            "Process ID: 1",
            "Process Size: 1024 bytes",
            "Number of Pages: 2",
        ]

    def test_hexdump_offsets(self) -> None:
        """Each line starts with its absolute offset."""
        lines = format_hexdump(bytes(range(20)), base=0x200).splitlines()
        expected_lines = 2
        assert len(lines) == expected_lines
        assert lines[0].startswith("00000200  00 01 02")
        assert lines[1] == "00000210  10 11 12 13"

    def test_hexdump_empty(self) -> None:
        """No data gives no lines."""
        assert format_hexdump(b"") == ""
