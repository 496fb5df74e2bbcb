"""Bootloader — configuration loading, POST, and kernel start-up.

Before the simulator can hand out a single frame it needs to know the
shape of memory.  The bootloader is responsible for getting from
"nothing" to "running kernel":

    Config → POST → Kernel boot → Ready

1. **Config** — read the geometry from a JSON file, take an explicit
   ``SimulatorConfig``, or fall back to defaults.
2. **POST** (Power-On Self-Test) — check the geometry makes sense:
   every size a power of two, pages and processes no bigger than
   memory.  A machine with impossible memory does not boot.
3. **Kernel boot** — build the kernel from the checked geometry.

A config file looks like::

    {"memory_size": 2048, "page_size": 512, "max_process_size": 1024, "seed": 7}

Only the keys present override the defaults.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from paging_sim.geometry import InvalidGeometryError, MemoryGeometry
from paging_sim.kernel import ContentGenerator, Kernel

if TYPE_CHECKING:
    from pathlib import Path

DEFAULT_MEMORY_SIZE = 1024
DEFAULT_PAGE_SIZE = 256
DEFAULT_MAX_PROCESS_SIZE = 512


class BootStage(StrEnum):
    """Represent the current phase of the boot chain."""

    CONFIG = "config"
    POST = "post"
    KERNEL = "kernel"
    READY = "ready"


class BootError(RuntimeError):
    """Raise when the boot chain cannot continue.

    Examples: unreadable config file, geometry that fails POST.
    """


@dataclass(frozen=True)
class SimulatorConfig:
    """Everything needed to start a simulator.

    Attributes:
        memory_size: Physical memory in bytes.
        page_size: Page/frame size in bytes.
        max_process_size: Largest process size accepted, in bytes.
        seed: Seed for the default content generator (None = unseeded).

    """

    memory_size: int = DEFAULT_MEMORY_SIZE
    page_size: int = DEFAULT_PAGE_SIZE
    max_process_size: int = DEFAULT_MAX_PROCESS_SIZE
    seed: int | None = None

    @property
    def geometry(self) -> MemoryGeometry:
        """Return the memory geometry described by this config."""
        return MemoryGeometry(
            memory_size=self.memory_size,
            page_size=self.page_size,
            max_process_size=self.max_process_size,
        )

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> SimulatorConfig:
        """Build a config from a mapping, keeping defaults for missing keys.

        Raises:
            BootError: If a value has the wrong type.

        """
        defaults = cls()
        try:
            seed = data.get("seed", defaults.seed)
            return cls(
                memory_size=_as_int(data.get("memory_size", defaults.memory_size)),
                page_size=_as_int(data.get("page_size", defaults.page_size)),
                max_process_size=_as_int(
                    data.get("max_process_size", defaults.max_process_size)
                ),
                seed=None if seed is None else _as_int(seed),
            )
        except TypeError as e:
            msg = f"Invalid config: {e}"
            raise BootError(msg) from e


def _as_int(value: object) -> int:
    """Return *value* if it is a real int (bools rejected)."""
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"expected an integer, got {value!r}"
        raise TypeError(msg)
    return value


class Bootloader:
    """Load configuration and start a kernel.

    Usage::

        bootloader = Bootloader(config_path=Path("sim.json"))
        kernel = bootloader.boot()  # full chain, returns running kernel

    """

    def __init__(
        self,
        *,
        config: SimulatorConfig | None = None,
        config_path: Path | None = None,
        content_generator: ContentGenerator | None = None,
    ) -> None:
        """Create a bootloader.

        Args:
            config: Explicit configuration.  Ignored if config_path is set.
            config_path: Path to a JSON config file.
            content_generator: Passed through to the kernel.

        """
        self._config = config
        self._config_path = config_path
        self._content_generator = content_generator
        self._stage: BootStage = BootStage.CONFIG
        self._boot_log: list[str] = []
        self._kernel: Kernel | None = None

    @property
    def stage(self) -> BootStage:
        """Return the current boot stage."""
        return self._stage

    @property
    def boot_log(self) -> list[str]:
        """Return the accumulated boot log messages."""
        return list(self._boot_log)

    @property
    def kernel(self) -> Kernel | None:
        """Return the booted kernel, or None if boot has not completed."""
        return self._kernel

    def boot(self) -> Kernel:
        """Run the full boot chain and return a running kernel.

        Raises:
            BootError: If the config cannot be loaded or POST fails.

        """
        self._stage = BootStage.CONFIG
        config = self.load_config()
        source = str(self._config_path) if self._config_path is not None else "built-in"
        self._boot_log.append(f"[BOOT] Config: {source} ... OK")

        self._stage = BootStage.POST
        geometry = config.geometry
        try:
            geometry.validate()
        except InvalidGeometryError as e:
            self._boot_log.append(f"[POST] Geometry ... FAIL ({e})")
            msg = f"POST failed: {e}"
            raise BootError(msg) from e
        self._boot_log.append(
            f"[POST] Memory: {geometry.memory_size} bytes, "
            f"{geometry.total_frames} frames ... OK"
        )

        self._stage = BootStage.KERNEL
        kernel = Kernel(
            geometry=geometry,
            content_generator=self._content_generator,
            seed=config.seed,
        )
        kernel.boot()
        self._kernel = kernel

        self._stage = BootStage.READY
        return kernel

    def load_config(self) -> SimulatorConfig:
        """Return the configuration from file, explicit value, or defaults.

        Raises:
            BootError: If the config file cannot be read or parsed.

        """
        if self._config_path is not None:
            try:
                data = json.loads(self._config_path.read_text())
            except (OSError, json.JSONDecodeError) as e:
                msg = f"Cannot load config: {e}"
                raise BootError(msg) from e
            if not isinstance(data, dict):
                msg = "Cannot load config: top level must be a JSON object"
                raise BootError(msg)
            return SimulatorConfig.from_dict(data)

        if self._config is not None:
            return self._config
        return SimulatorConfig()
