"""
Simulated accelerometer sample sources.

ScriptedAccelerometer replays a fixed trajectory, which is what tests and
demos use to drive the sensor deterministically. NoisyAccelerometer holds a
resting posture with Gaussian noise and can break into shake bursts, which is
what the application runs by default.
"""

import numpy as np
from typing import Iterable, List, Optional, Sequence, Tuple
from .base import AccelerometerHardware
from accelsim.core.config import SimulatorConfig

RawSample = Tuple[float, float, float]

class ScriptedAccelerometer(AccelerometerHardware):
    """Replays a scripted sequence of samples, one per read."""

    def __init__(self, samples: Iterable[Sequence[float]], loop: bool = False,
                 name: Optional[str] = None):
        """
        Args:
            samples: The (x, y, z) samples to replay, in milli-g
            loop: Start again from the first sample once exhausted
            name: Optional name for this hardware instance
        """
        super().__init__(None, name or "ScriptedAccelerometer")
        self._samples: List[RawSample] = [tuple(s) for s in samples]
        self._loop = loop
        self._position = 0

    async def _initialize_impl(self) -> None:
        self._position = 0

    async def _shutdown_impl(self) -> None:
        pass

    @property
    def remaining(self) -> int:
        return len(self._samples) - self._position

    async def read_sample(self) -> RawSample:
        if not self._initialized:
            raise RuntimeError("Hardware not initialized")
        if self._position >= len(self._samples):
            if not self._loop or not self._samples:
                raise RuntimeError("Simulation exhausted")
            self._position = 0
        sample = self._samples[self._position]
        self._position += 1
        return sample

class NoisyAccelerometer(AccelerometerHardware):
    """
    A device at rest with sensor noise, occasionally shaken.

    While a shake burst runs the x axis swings between +amplitude and
    -amplitude every tick, which is enough zero crossings to latch the shake
    detector.
    """

    def __init__(self, config: Optional[SimulatorConfig] = None,
                 burst_length: int = 8, name: Optional[str] = None):
        """
        Args:
            config: Simulator settings; defaults are read from the environment
            burst_length: Ticks in one shake burst
            name: Optional name for this hardware instance
        """
        config = config or SimulatorConfig()
        super().__init__(config, name or "NoisyAccelerometer")
        self.base = np.array(config.base_sample, dtype=float)
        self.burst_length = burst_length
        self._rng = np.random.default_rng(config.seed)
        self._burst_remaining = 0

    async def _initialize_impl(self) -> None:
        self._burst_remaining = 0

    async def _shutdown_impl(self) -> None:
        pass

    @property
    def shaking(self) -> bool:
        return self._burst_remaining > 0

    async def read_sample(self) -> RawSample:
        if not self._initialized:
            raise RuntimeError("Hardware not initialized")

        sample = self.base.copy()
        if self._burst_remaining == 0 and self._rng.random() < self.config.shake_probability:
            self._burst_remaining = self.burst_length
            self.logger.debug("Shake burst started", ticks=self.burst_length)

        if self._burst_remaining > 0:
            sign = 1.0 if self._burst_remaining % 2 == 0 else -1.0
            sample[0] = sign * self.config.shake_amplitude
            self._burst_remaining -= 1

        if self.config.noise_std > 0:
            sample += self._rng.normal(0.0, self.config.noise_std, size=3)

        return float(sample[0]), float(sample[1]), float(sample[2])
