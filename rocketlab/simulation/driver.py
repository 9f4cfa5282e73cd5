"""Drivers that call MissionController.step() at some cadence.

The controller never assumes a frame rate. A driver decides how often to
step and what elapsed time to report:

- run_fixed_step: synthetic, constant dt (tests, batch runs)
- RealTimeDriver: paces frames against a wall clock and reports the
  measured delta, like a display-refresh callback

Example:
    >>> from rocketlab.simulation import MissionController, RealTimeDriver
    >>>
    >>> controller = MissionController()
    >>> controller.launch()
    >>> RealTimeDriver(controller, frame_rate=60.0).run(max_duration=30.0)
"""

import logging
import time
from collections.abc import Callable

from beartype import beartype

from rocketlab.simulation.controller import MissionController

logger = logging.getLogger(__name__)


@beartype
def run_fixed_step(
    controller: MissionController,
    dt: float | int = 1.0 / 60.0,
    max_steps: int = 1_000_000,
) -> int:
    """Step a launched mission with a constant dt until it stops.

    Args:
        controller: Controller with a running mission
        dt: Step size reported to the controller [s]
        max_steps: Safety cap on the number of steps

    Returns:
        Number of steps taken
    """
    if dt < 0:
        raise ValueError(f"dt must be non-negative, got {dt}")

    steps = 0
    while controller.is_running and steps < max_steps:
        controller.step(dt)
        steps += 1

    if controller.is_running:
        logger.warning("Step limit reached: %d steps", max_steps)
    return steps


class RealTimeDriver:
    """Frame-paced driver measuring elapsed time from a wall clock.

    Args:
        controller: Controller to drive
        frame_rate: Target frames per second
        clock: Monotonic clock returning seconds
        sleep: Function that waits a number of seconds
    """

    @beartype
    def __init__(
        self,
        controller: MissionController,
        frame_rate: float | int = 60.0,
        clock: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if frame_rate <= 0:
            raise ValueError(f"Frame rate must be positive, got {frame_rate}")

        self.controller = controller
        self.frame_period = 1.0 / frame_rate
        self._clock = clock
        self._sleep = sleep

    def run(self, max_duration: float | int | None = None) -> int:
        """Drive the controller until the mission stops.

        Args:
            max_duration: Optional wall-clock limit [s]

        Returns:
            Number of frames stepped
        """
        frames = 0
        start = last = self._clock()

        while self.controller.is_running:
            if max_duration is not None and last - start >= max_duration:
                logger.info("Real-time run stopped after %.1f s", last - start)
                break

            frame_end = last + self.frame_period
            remaining = frame_end - self._clock()
            if remaining > 0:
                self._sleep(remaining)

            now = self._clock()
            self.controller.step(now - last)
            last = now
            frames += 1

        return frames
