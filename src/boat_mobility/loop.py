"""Explicit frame loop for boats outside of any simulator.

The loop owns an arena of vehicles (indexed by vehicle id), samples each
vehicle's held keys, and runs the controller once per vehicle per tick.
The elapsed time either comes from the caller or from the configured
fixed ``update_rate``; the loop never reads a wall clock on its own.
"""

import logging
import os
from typing import Callable, Dict, List, Optional, Tuple

import pandas as pd

from .config import BoatControl, BoatMobilityConfiguration
from .controller import HeldKeys, advance_vehicle
from .core import clamp_dt
from .vehicle import Vehicle, spawn_vehicle

logger = logging.getLogger(__name__)

TELEMETRY_COLUMNS = [
    "t",
    "node_id",
    "x", "y", "z",
    "yaw",
    "speed",
    "target_speed",
    "is_rowing",
    "vx", "vy", "vz",
]

InputSource = Callable[[int], HeldKeys]


def telemetry_row(t: float, vehicle: Vehicle) -> list:
    """Flatten a vehicle's state into one telemetry row."""
    x, y, z = vehicle.pose.position
    vx, vy, vz = vehicle.velocity.lin
    return [
        t,
        vehicle.vehicle_id,
        x, y, z,
        vehicle.pose.yaw,
        vehicle.state.current_speed,
        vehicle.state.target_speed,
        vehicle.state.is_rowing,
        vx, vy, vz,
    ]


class BoatFrameLoop:
    """Fixed-order frame loop over an arena of boats.

    Usage:
        loop = BoatFrameLoop(BoatMobilityConfiguration(update_rate=0.05))
        boat_id = loop.spawn()
        loop.set_input(boat_id, {BoatKey.FORWARD})
        loop.run(100)
        df = loop.telemetry_frame()
    """

    def __init__(
        self,
        config: BoatMobilityConfiguration,
        input_source: Optional[InputSource] = None,
    ):
        self._config = config
        self._input_source = input_source
        self._vehicles: List[Vehicle] = []
        self._held: Dict[int, HeldKeys] = {}
        self._tick_counter = 0
        self._time = 0.0
        self._telemetry_rows: List[list] = []

    @property
    def time(self) -> float:
        """Accumulated (clamped) simulation time in seconds."""
        return self._time

    @property
    def tick_count(self) -> int:
        return self._tick_counter

    @property
    def vehicles(self) -> Tuple[Vehicle, ...]:
        return tuple(self._vehicles)

    def spawn(
        self,
        position: Tuple[float, float, float] = (0.0, 0.0, 0.0),
        yaw: float = 0.0,
        control: Optional[BoatControl] = None,
    ) -> int:
        """Add a boat at rest and return its vehicle id."""
        vehicle_id = len(self._vehicles)
        vehicle = spawn_vehicle(
            vehicle_id,
            control=control if control is not None else self._config.control,
            position=position,
            yaw=yaw,
        )
        self._vehicles.append(vehicle)
        self._held[vehicle_id] = frozenset()
        logger.info("Spawned boat %s at %s (yaw=%.3f)", vehicle_id, vehicle.pose.position, yaw)
        return vehicle_id

    def vehicle(self, vehicle_id: int) -> Vehicle:
        if not 0 <= vehicle_id < len(self._vehicles):
            raise KeyError(f"Unknown vehicle id: {vehicle_id!r}")
        return self._vehicles[vehicle_id]

    def set_input(self, vehicle_id: int, held: HeldKeys) -> None:
        """Set the held keys used for a boat until replaced.

        Ignored for boats when an ``input_source`` was given to the loop.
        """
        self.vehicle(vehicle_id)
        self._held[vehicle_id] = held

    def _held_for(self, vehicle_id: int) -> HeldKeys:
        if self._input_source is not None:
            return self._input_source(vehicle_id)
        return self._held[vehicle_id]

    def tick(self, dt: Optional[float] = None) -> float:
        """Run one frame for every boat.

        Args:
            dt: Elapsed seconds from the host clock. Defaults to the
                configured update_rate.

        Returns:
            The clamped tick duration that was integrated.
        """
        if dt is None:
            dt = self._config.update_rate
        applied_dt = clamp_dt(dt, self._config.max_dt)
        if applied_dt != dt:
            logger.debug("Frame %s: clamped dt %r to %r", self._tick_counter, dt, applied_dt)

        for vehicle in self._vehicles:
            advance_vehicle(vehicle, self._held_for(vehicle.vehicle_id), applied_dt)

        self._time += applied_dt
        self._tick_counter += 1

        if self._should_record_telemetry():
            for vehicle in self._vehicles:
                self._telemetry_rows.append(telemetry_row(self._time, vehicle))

        return applied_dt

    def run(self, n_ticks: int, clock: Optional[Callable[[], float]] = None) -> None:
        """Run ``n_ticks`` frames, pulling dt from ``clock`` when provided."""
        for _ in range(n_ticks):
            self.tick(clock() if clock is not None else None)

    def _should_record_telemetry(self) -> bool:
        if not self._config.send_telemetry:
            return False
        return (self._tick_counter % self._config.telemetry_decimation) == 0

    def telemetry_frame(self) -> pd.DataFrame:
        """Return the recorded telemetry as a DataFrame."""
        return pd.DataFrame(self._telemetry_rows, columns=TELEMETRY_COLUMNS)

    def flush_telemetry(self) -> None:
        """Append recorded telemetry to the configured CSV and clear it."""
        csv_path = self._config.telemetry_csv_path
        if not csv_path or not self._telemetry_rows:
            return
        try:
            df = self.telemetry_frame()
            file_exists = os.path.exists(csv_path)
            df.to_csv(csv_path, mode="a", header=not file_exists, index=False)
        except OSError as exc:
            logger.warning("Failed to write telemetry CSV (%s): %r", exc, csv_path)
            return
        self._telemetry_rows = []
