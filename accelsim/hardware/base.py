"""
Sample source abstraction for accelsim.

Every sample source goes through the same lifecycle: `initialize` before the
first read, `shutdown` when done. Both are idempotent and serialised so a
service and a test harness can share one source.
"""

import asyncio
import structlog
from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple

class BaseHardware(ABC):
    """
    Lifecycle shared by all sample sources.

    Subclasses implement `_initialize_impl` and `_shutdown_impl`; failures in
    either are logged and re-raised, leaving the initialized flag unchanged.
    """

    def __init__(self, config: Optional[Any] = None, name: Optional[str] = None):
        self.config = config
        self.name = name or self.__class__.__name__
        self.logger = structlog.get_logger(hardware=self.name)
        self._initialized = False
        self._lock = asyncio.Lock()

    def is_initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        """Prepare the source for reading. A second call only logs a warning."""
        async with self._lock:
            if self._initialized:
                self.logger.warning("Already initialized")
                return
            try:
                await self._initialize_impl()
            except Exception as e:
                self.logger.error(f"Initialization failed: {e}")
                raise
            self._initialized = True
            self.logger.info("Initialized")

    async def shutdown(self) -> None:
        """Release the source. Shutting down an uninitialized source only logs a warning."""
        async with self._lock:
            if not self._initialized:
                self.logger.warning("Shutdown requested before initialization")
                return
            try:
                await self._shutdown_impl()
            except Exception as e:
                self.logger.error(f"Shutdown failed: {e}")
                raise
            self._initialized = False
            self.logger.info("Shut down")

    @abstractmethod
    async def _initialize_impl(self) -> None:
        pass

    @abstractmethod
    async def _shutdown_impl(self) -> None:
        pass

class AccelerometerHardware(BaseHardware):
    """Anything the accelerometer service can read samples from."""

    @abstractmethod
    async def read_sample(self) -> Tuple[float, float, float]:
        """
        Read the next raw sample.

        Returns:
            (x, y, z) in milli-g, in the sensor's raw axes

        Raises:
            RuntimeError: If the source is not initialized or has no more samples
        """
        pass
