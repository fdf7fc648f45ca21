"""Rowing boat example with visualization.

This script builds a GrADyS-SIM simulation with a single boat controlled by
BoatMobilityHandler. The held helm keys are played back by HelmProtocol
from the script in config_param.HELM_SCRIPT.

Run:
    python main.py

Set BOAT_TELEMETRY_CSV_PATH to also append telemetry to a CSV file, then
plot it with plot_telemetry.py.
"""

import logging

# Suppress websockets handshake warnings
logging.getLogger('websockets').setLevel(logging.CRITICAL)

from gradysim.simulator.handler.communication import CommunicationHandler, CommunicationMedium
from gradysim.simulator.handler.timer import TimerHandler
from gradysim.simulator.handler.visualization import VisualizationHandler, VisualizationConfiguration
from gradysim.simulator.simulation import SimulationBuilder, SimulationConfiguration
from boat_mobility import BoatControl, BoatMobilityConfiguration, BoatMobilityHandler
from config_param import (
    BOAT_ACCELERATION,
    BOAT_DRAG,
    BOAT_MAX_DT,
    BOAT_MAX_SPEED,
    BOAT_SEND_TELEMETRY,
    BOAT_START_POSITION,
    BOAT_TELEMETRY_DECIMATION,
    BOAT_TURN_SPEED,
    BOAT_UPDATE_RATE,
    COMMUNICATION_DELAY,
    COMMUNICATION_FAILURE_RATE,
    COMMUNICATION_TRANSMISSION_RANGE,
    SIM_DEBUG,
    SIM_DURATION,
    SIM_REAL_TIME,
    VIS_OPEN_BROWSER,
    VIS_UPDATE_RATE,
)
from protocol import HelmProtocol


# ============================================================
# Boat presets (choose by editing ONE variable)
#
# Profiles: Dinghy, Rowboat, Longboat, Custom
# - Rowboat is the stock boat (5 m/s, 3 m/s², 1.5 rad/s, drag 1.0).
# - Custom uses the values from config_param.py.
# ============================================================

BOAT_PROFILE: str = "Rowboat"  # Choose boat profile here


BOAT_PRESETS: dict[str, BoatControl] = {
    "Dinghy": BoatControl(max_speed=3.0, acceleration=4.0, turn_speed=2.5, drag=1.5),
    "Rowboat": BoatControl(max_speed=5.0, acceleration=3.0, turn_speed=1.5, drag=1.0),
    "Longboat": BoatControl(max_speed=7.0, acceleration=1.5, turn_speed=0.6, drag=0.4),
    "Custom": BoatControl(
        max_speed=BOAT_MAX_SPEED,
        acceleration=BOAT_ACCELERATION,
        turn_speed=BOAT_TURN_SPEED,
        drag=BOAT_DRAG,
    ),
}


def main():
    """Execute the rowing boat simulation."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    builder = SimulationBuilder(
        SimulationConfiguration(
            duration=SIM_DURATION,
            debug=SIM_DEBUG,
            real_time=SIM_REAL_TIME
        )
    )

    medium = CommunicationMedium(
        transmission_range=COMMUNICATION_TRANSMISSION_RANGE,
        delay=COMMUNICATION_DELAY,
        failure_rate=COMMUNICATION_FAILURE_RATE
    )
    builder.add_handler(CommunicationHandler(medium))
    builder.add_handler(TimerHandler())

    profile = (BOAT_PROFILE or "").strip()
    control = BOAT_PRESETS.get(profile)
    if control is None:
        valid = ", ".join(sorted(BOAT_PRESETS.keys()))
        raise ValueError(f"Unknown BOAT_PROFILE={BOAT_PROFILE!r}. Valid options: {valid}")

    print(
        "Boat preset: "
        f"{profile} "
        f"(update_rate={BOAT_UPDATE_RATE}, max_speed={control.max_speed}, "
        f"acceleration={control.acceleration}, turn_speed={control.turn_speed}, "
        f"drag={control.drag})"
    )
    boat_config = BoatMobilityConfiguration(
        update_rate=BOAT_UPDATE_RATE,
        control=control,
        max_dt=BOAT_MAX_DT,
        send_telemetry=BOAT_SEND_TELEMETRY,
        telemetry_decimation=BOAT_TELEMETRY_DECIMATION,
    )
    builder.add_handler(BoatMobilityHandler(boat_config))

    vis_config = VisualizationConfiguration(
        open_browser=VIS_OPEN_BROWSER,
        update_rate=VIS_UPDATE_RATE
    )
    builder.add_handler(VisualizationHandler(vis_config))

    builder.add_node(HelmProtocol, BOAT_START_POSITION)

    simulation = builder.build()
    print("=" * 60)
    print("Starting rowing boat simulation")
    print(f"Starting position: {BOAT_START_POSITION}")
    print("=" * 60)
    try:
        simulation.start_simulation()
    except (BrokenPipeError, EOFError) as e:
        logging.getLogger(__name__).debug(f"Ignored visualization shutdown error: {e}")
    finally:
        print("=" * 60)
        print("Simulation completed!")
        print("=" * 60)


if __name__ == "__main__":
    main()
