"""Core-only example (no GrADyS-SIM runtime required).

This script drives one boat with `boat_mobility.BoatFrameLoop`:

- rowing acceleration toward full speed
- a right turn while rowing
- coasting under drag
- both thrust keys held (rows down to a stop)

It intentionally does NOT build a GrADyS-SIM NG simulation. For the full
integration example (handler + helm protocol + visualization), use
`main.py` at the repository root.

Usage:
    python examples/ex_rowing_boat.py
"""

import logging
import math

from boat_mobility import BoatFrameLoop, BoatMobilityConfiguration, KeyBindings

# (seconds, physical keys held)
MANOEUVRES = [
    (3.0, ("W",)),
    (2.0, ("W", "D")),
    (3.0, ()),
    (1.0, ("W", "S")),
]


def simulate_rowing_boat():
    """Run the manoeuvres and print the boat state after each one."""
    print("Core-only demo: rowing, turning, coasting")

    config = BoatMobilityConfiguration(
        update_rate=0.05,
        telemetry_csv_path="boat_telemetry.csv",
    )
    loop = BoatFrameLoop(config)
    boat_id = loop.spawn()
    bindings = KeyBindings()

    for duration, keys in MANOEUVRES:
        loop.set_input(boat_id, bindings.resolve(keys))
        loop.run(int(round(duration / config.update_rate)))

        boat = loop.vehicle(boat_id)
        x, _, z = boat.pose.position
        print(
            f"t={loop.time:5.2f}s  keys={'+'.join(keys) or '-':5s}  "
            f"pos=({x:6.2f}, {z:6.2f})  "
            f"heading={math.degrees(boat.pose.yaw):7.2f}°  "
            f"speed={boat.state.current_speed:5.2f} m/s"
        )

    loop.flush_telemetry()
    print(f"Telemetry appended to {config.telemetry_csv_path}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    simulate_rowing_boat()
