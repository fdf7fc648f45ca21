"""
Helm protocol driving a boat through BoatMobilityHandler.

Plays back a scripted sequence of held keys (standing in for a keyboard)
and records the boat trajectory from telemetry.
"""

import logging
import os
from typing import Optional

import pandas as pd

from gradysim.protocol.interface import IProtocol
from gradysim.protocol.messages.telemetry import Telemetry

from boat_mobility import KeyBindings
from config_param import HELM_SCRIPT, HELM_TIMER_STR


class HelmProtocol(IProtocol):
    """Protocol that holds helm keys through BoatMobilityHandler."""

    def __init__(self):
        super().__init__()
        self._logger = logging.getLogger(__name__)
        self.node_id = None
        self.initial_position = None
        self.boat_handler = None
        self.df = None

        self._bindings = KeyBindings()
        self._script = list(HELM_SCRIPT)
        self._script_index = 0
        self._held_names = ()

        self._csv_path: Optional[str] = os.environ.get("BOAT_TELEMETRY_CSV_PATH")

    def initialize(self):
        """Look up the boat handler and start the helm script."""
        self.node_id = self.provider.get_id()

        handlers = getattr(self.provider, "handlers", {}) or {}
        self.boat_handler = handlers.get("BoatMobilityHandler")
        if not self.boat_handler:
            self._logger.warning("Node %s: BoatMobilityHandler not found; helm disabled", self.node_id)
            return

        self.initial_position = self.boat_handler.get_node_position(self.node_id)
        self.df = pd.DataFrame(columns=[
            "t",
            "x", "y", "z",
            "yaw",
            "speed",
            "is_rowing",
        ])
        self._record()

        self._script_index = 0
        self._apply_script_step()

    def _apply_script_step(self):
        duration, names = self._script[self._script_index]
        self._held_names = names
        self.boat_handler.set_keys(self.node_id, self._bindings.resolve(names))
        self._logger.info(
            "Node %s: helm step %d holding %s for %.1f s",
            self.node_id,
            self._script_index,
            "+".join(names) or "nothing",
            duration,
        )
        self.provider.schedule_timer(HELM_TIMER_STR, self.provider.current_time() + duration)

    def handle_timer(self, timer: str):
        """Advance the helm script; the last step is held until the end."""
        if timer == HELM_TIMER_STR and self.boat_handler:
            if self._script_index < len(self._script) - 1:
                self._script_index += 1
                self._apply_script_step()

    def handle_packet(self, message: str):
        pass

    def _record(self):
        # Controller frame (y up), same columns as the frame-loop export
        t = self.provider.current_time()
        vehicle = self.boat_handler.get_node_vehicle(self.node_id)
        if vehicle is None:
            return
        pos = vehicle.pose.position
        self.df.loc[len(self.df)] = [
            t, pos[0], pos[1], pos[2], vehicle.pose.yaw, vehicle.state.current_speed, vehicle.state.is_rowing
        ]

    def handle_telemetry(self, telemetry: Telemetry) -> None:
        """Collect time, pose and speed on telemetry."""
        if not self.boat_handler or self.df is None:
            return
        self._record()

    def _flush_csv(self):
        if not self._csv_path or self.df is None or self.df.empty:
            return
        try:
            df = self.df.assign(node_id=self.node_id)
            file_exists = os.path.exists(self._csv_path)
            df.to_csv(self._csv_path, mode="a", header=not file_exists, index=False)
        except OSError as exc:
            self._logger.warning(
                "Node %s: failed to write telemetry CSV (%s): %r",
                self.node_id,
                exc,
                self._csv_path,
            )

    def finish(self):
        """Print a summary, write telemetry and plot the trajectory."""
        if not self.boat_handler or self.initial_position is None:
            return

        final_position = self.boat_handler.get_node_position(self.node_id)
        state = self.boat_handler.get_node_state(self.node_id)
        dx = final_position[0] - self.initial_position[0]
        dy = final_position[1] - self.initial_position[1]

        print()
        print("=" * 60)
        print("SIMULATION RESULTS")
        print("=" * 60)
        print(f"Boat {self.node_id}")
        print(f"  Initial position: ({self.initial_position[0]:.2f}, {self.initial_position[1]:.2f}, {self.initial_position[2]:.2f})")
        print(f"  Final position:   ({final_position[0]:.2f}, {final_position[1]:.2f}, {final_position[2]:.2f})")
        print(f"  Net displacement: {(dx**2 + dy**2)**0.5:.2f} m")
        print(f"  Final heading:    {self.boat_handler.get_node_yaw(self.node_id):.3f} rad")
        print(f"  Final speed:      {state.current_speed:.2f} m/s")
        print("=" * 60)

        self._flush_csv()

        if self.df is not None and len(self.df) > 1:
            try:
                import matplotlib.pyplot as plt

                fig, (ax_xz, ax_speed) = plt.subplots(2, 1, figsize=(10, 9))

                ax_xz.plot(self.df["x"], self.df["z"], label="track")
                ax_xz.set_xlabel("x (m)")
                ax_xz.set_ylabel("z (m)")
                ax_xz.set_aspect("equal", adjustable="datalim")
                ax_xz.grid(True)
                ax_xz.legend(loc="best")

                ax_speed.plot(self.df["t"], self.df["speed"], label="speed")
                ax_speed.fill_between(
                    self.df["t"],
                    0.0,
                    1.0,
                    where=self.df["is_rowing"].astype(bool),
                    transform=ax_speed.get_xaxis_transform(),
                    alpha=0.15,
                    label="rowing",
                )
                ax_speed.set_xlabel("time (s)")
                ax_speed.set_ylabel("speed (m/s)")
                ax_speed.grid(True)
                ax_speed.legend(loc="best")

                fig.suptitle(f"Boat {self.node_id}: track and speed")
                plt.tight_layout(rect=(0, 0, 1, 0.96))
                plt.show()
            except ImportError:
                print("matplotlib not available; skipping plots")
