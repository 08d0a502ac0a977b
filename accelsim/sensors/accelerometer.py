"""
Accelerometer sensor model.

The Accelerometer owns the current sample and the gesture pipeline. Each call
to `update` is one sensor tick:

1. The sample is validated, floored to whole milli-g and stored.
2. The shake detector observes the raw axis values.
3. The posture classifier turns the sample and shake latch into an
   instantaneous gesture.
4. The gesture filter decides whether a new stable gesture is committed; if so
   a gesture event is emitted.
5. A data update event is emitted, every tick.

Events leave through the `event_sink(event_id, value)` callable given to the
constructor, and the first use of the sensor calls `request_refresh()` so the
surrounding display loop knows the sensor is in use. Nothing here blocks or
yields; callers sharing an instance must serialise `update` against reads.
"""

import math
import dataclasses
import structlog
from typing import Callable, Optional
from accelsim.core.config import GestureThresholds
from .constants import (
    ACCELEROMETER_EVT_DATA_UPDATE, CoordinateSystem, Gesture, ID_ACCELEROMETER,
    ID_GESTURE, MAX_SAMPLE_RANGE, MIN_SAMPLE_RANGE, SAMPLE_LIMIT
)
from .coordinates import Sample, axis_x, axis_y, axis_z
from .gesture import GestureFilter
from .pitch_roll import PitchRollCalculator, to_degrees
from .posture import PostureClassifier
from .shake import ShakeDetector, ShakeState

EventSink = Callable[[int, int], None]
RefreshRequester = Callable[[], None]

def _check_axis(name: str, value: float) -> int:
    if not math.isfinite(value):
        raise ValueError(f"Sample axis {name} must be finite, got {value!r}")
    if abs(value) > SAMPLE_LIMIT:
        raise ValueError(f"Sample axis {name} out of range: {value!r}")
    return math.floor(value)

def _clamp_range(sample_range: float) -> int:
    if not math.isfinite(sample_range):
        raise ValueError(f"Sample range must be finite, got {sample_range!r}")
    return int(max(MIN_SAMPLE_RANGE, min(MAX_SAMPLE_RANGE, sample_range)))

class Accelerometer:
    """
    Behavioural model of a triaxial accelerometer driver.
    """

    def __init__(self,
                 event_sink: EventSink,
                 request_refresh: RefreshRequester,
                 thresholds: Optional[GestureThresholds] = None,
                 sample_range: int = 2):
        """
        Initialize the accelerometer.

        Args:
            event_sink: Called with (event_id, value) for every raised event
            request_refresh: Called once, when the sensor is first used
            thresholds: Driver thresholds, defaults to the device values
            sample_range: Initial sample range in g
        """
        self._event_sink = event_sink
        self._request_refresh = request_refresh
        self.thresholds = thresholds or GestureThresholds()
        self.logger = structlog.get_logger(sensor="accelerometer")

        self._sample = Sample(0, 0, -1023)
        self._generation = 0
        self._sample_range = _clamp_range(sample_range)
        self._active = False

        self._shake = ShakeDetector(self.thresholds)
        self._classifier = PostureClassifier(self.thresholds)
        self._filter = GestureFilter(self.thresholds)
        self._pitch_roll = PitchRollCalculator()

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def sample_range(self) -> int:
        return self._sample_range

    @property
    def sample(self) -> Sample:
        return self._sample

    @property
    def current_gesture(self) -> Gesture:
        """Instantaneous gesture from the most recent tick."""
        return self._filter.state.current

    @property
    def last_gesture(self) -> Gesture:
        """Last gesture committed and reported."""
        return self._filter.state.last

    @property
    def shake_state(self) -> ShakeState:
        return dataclasses.replace(self._shake.state)

    def activate(self) -> None:
        """Mark the sensor as in use; the first call requests a display refresh."""
        if not self._active:
            self._active = True
            self.logger.debug("Accelerometer activated")
            self._request_refresh()

    def set_sample_range(self, sample_range: float) -> None:
        """
        Set the sample range in g, clamped to the supported range.

        Raises:
            ValueError: If the range is not a finite number
        """
        self.activate()
        self._sample_range = _clamp_range(sample_range)

    def update(self, x: float, y: float, z: float) -> None:
        """
        Store a new sample and advance the gesture pipeline by one tick.

        Args:
            x, y, z: Raw axis values in milli-g, floored to integers

        Raises:
            ValueError: If any axis is not finite or is out of range
        """
        self._sample = Sample(_check_axis("x", x), _check_axis("y", y), _check_axis("z", z))
        self._generation += 1
        self.activate()

        self._update_gesture()

        self._event_sink(ID_ACCELEROMETER, ACCELEROMETER_EVT_DATA_UPDATE)

    def _update_gesture(self) -> None:
        x, y, z = self._sample
        self._shake.observe(x, y, z)
        posture = self._classifier.classify(x, y, z, self._shake.shaken)

        committed = self._filter.update(posture)
        if committed is not None:
            self.logger.info("Gesture committed", gesture=committed.name)
            self._event_sink(ID_GESTURE, int(committed))

    def instantaneous_acceleration_squared(self) -> int:
        """Combined force on the device, squared, from the raw sample."""
        x, y, z = self._sample
        return x * x + y * y + z * z

    def get_x(self, system: CoordinateSystem = CoordinateSystem.SIMPLE_CARTESIAN) -> int:
        """
        Read the X axis of the latest sample.

        Args:
            system: Coordinate system to read in, SIMPLE_CARTESIAN by default

        Returns:
            The force measured in the X axis, in milli-g
        """
        self.activate()
        return axis_x(self._sample, system)

    def get_y(self, system: CoordinateSystem = CoordinateSystem.SIMPLE_CARTESIAN) -> int:
        """Read the Y axis of the latest sample, in milli-g."""
        self.activate()
        return axis_y(self._sample, system)

    def get_z(self, system: CoordinateSystem = CoordinateSystem.SIMPLE_CARTESIAN) -> int:
        """Read the Z axis of the latest sample, in milli-g."""
        self.activate()
        return axis_z(self._sample, system)

    def get_pitch_radians(self) -> float:
        return self._pitch_roll.pitch_radians(self._sample, self._generation)

    def get_roll_radians(self) -> float:
        return self._pitch_roll.roll_radians(self._sample, self._generation)

    def get_pitch(self) -> int:
        """Rotation compensated pitch of the device, in whole degrees."""
        self.activate()
        return to_degrees(self.get_pitch_radians())

    def get_roll(self) -> int:
        """Rotation compensated roll of the device, in whole degrees."""
        self.activate()
        return to_degrees(self.get_roll_radians())
