"""paging_sim — a fixed-size page memory allocation simulator.

Configure a physical memory, create processes that claim frames, and
watch page tables and the free-frame list change.  Built for teaching:
every step is visible through the shell, the REPL menu, or the web UI.
"""
