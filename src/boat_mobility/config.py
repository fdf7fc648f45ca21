"""
Configuration dataclasses for the boat mobility controller.
"""

import math
from dataclasses import dataclass
from typing import Optional

# Upper bound on a single tick duration (seconds). A stalled host clock can
# hand over a very long frame; anything above this is integrated as max_dt.
DEFAULT_MAX_DT: float = 0.25


@dataclass(frozen=True)
class BoatControl:
    """
    Tuning constants of one boat, fixed at spawn time.

    Attributes:
        max_speed: Maximum speed magnitude (m/s), forward or astern.
            Typical for a rowing boat: 3–6 m/s.
        acceleration: Maximum rate of speed change while rowing (m/s²).
        turn_speed: Yaw rate at full helm (rad/s).
        drag: Drag coefficient (1/s) applied while coasting. Each tick
            multiplies the speed by max(1 - drag * dt, 0).
    """
    max_speed: float = 5.0
    acceleration: float = 3.0
    turn_speed: float = 1.5
    drag: float = 1.0

    def __post_init__(self):
        for name in ("max_speed", "acceleration", "turn_speed", "drag"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite, got {value!r}")
        if self.max_speed <= 0:
            raise ValueError("max_speed must be > 0")
        if self.acceleration < 0:
            raise ValueError("acceleration must be >= 0")
        if self.turn_speed < 0:
            raise ValueError("turn_speed must be >= 0")
        if self.drag < 0:
            raise ValueError("drag must be >= 0")


DEFAULT_BOAT_CONTROL = BoatControl()


@dataclass
class BoatMobilityConfiguration:
    """
    Configuration parameters for the BoatMobilityHandler and BoatFrameLoop.

    Attributes:
        update_rate: Time interval (in seconds) between controller ticks when
            the driver owns the clock (simulator handler, fixed-step loop).
            Typical: 0.01–0.05 s.
        control: Tuning constants given to every boat spawned by the driver.
        max_dt: Largest tick duration accepted from the host clock; longer
            ticks are clamped to this value.
        send_telemetry: If True, emit/record telemetry after pose updates.
        telemetry_decimation: Emit telemetry every N controller ticks (default: 1).
        telemetry_csv_path: Optional CSV file that recorded telemetry is
            appended to when the frame loop is flushed.
    """
    update_rate: float
    control: BoatControl = DEFAULT_BOAT_CONTROL
    max_dt: float = DEFAULT_MAX_DT
    send_telemetry: bool = True
    telemetry_decimation: int = 1
    telemetry_csv_path: Optional[str] = None

    def __post_init__(self):
        if not self.update_rate > 0:
            raise ValueError("update_rate must be > 0")
        if not self.max_dt > 0:
            raise ValueError("max_dt must be > 0")
        if self.telemetry_decimation < 1:
            raise ValueError("telemetry_decimation must be >= 1")
