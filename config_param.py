"""Centralized parameter/config constants for the project.

This module is intended to be the single source of truth for shared
configuration parameters used by the simulation entrypoints and the helm
protocol.
"""

# --------------------------------------------------------------------------------------
# 1) Simulation framework (timing + simulator timers)
# --------------------------------------------------------------------------------------

SIM_DURATION: float = 60            # Simulation duration (seconds)
SIM_REAL_TIME: bool = True          # Run in real time
SIM_DEBUG: bool = False             # Enable simulator debug mode

# Timer ID used by the helm protocol to advance its manoeuvre script
HELM_TIMER_STR: str = "helm_timer"

# --------------------------------------------------------------------------------------
# 2) Communication + visualization (medium + UI)
# --------------------------------------------------------------------------------------

COMMUNICATION_TRANSMISSION_RANGE: float = 200  # Communication range (meters)
COMMUNICATION_DELAY: float = 0.0               # Communication delay (seconds)
COMMUNICATION_FAILURE_RATE: float = 0.0        # Packet loss probability [0.0, 1.0]

VIS_OPEN_BROWSER: bool = True       # Open the visualization in a browser
VIS_UPDATE_RATE: float = 0.1        # Visualization update period (seconds)

# --------------------------------------------------------------------------------------
# 3) Boat mobility model (BoatMobility)
# --------------------------------------------------------------------------------------

BOAT_UPDATE_RATE: float = 0.02      # Controller tick (seconds)
BOAT_MAX_DT: float = 0.25           # Longest tick accepted from the host clock (seconds)
BOAT_MAX_SPEED: float = 5.0         # Max speed, forward or astern (m/s)
BOAT_ACCELERATION: float = 3.0      # Rowing acceleration (m/s²)
BOAT_TURN_SPEED: float = 1.5        # Yaw rate at full helm (rad/s)
BOAT_DRAG: float = 1.0              # Coasting drag coefficient (1/s)
BOAT_SEND_TELEMETRY: bool = True    # Enable telemetry
BOAT_TELEMETRY_DECIMATION: int = 5  # Send telemetry every N ticks

# Initial boat position (simulator coordinates: x east, y north, z up)
BOAT_START_POSITION: tuple = (0.0, 0.0, 0.0)

# --------------------------------------------------------------------------------------
# 4) Helm script
# --------------------------------------------------------------------------------------

# Each entry is (duration in seconds, physical keys held). The helm protocol
# resolves the physical keys through the default key bindings.
HELM_SCRIPT: list = [
    (6.0, ("W",)),
    (3.0, ("W", "D")),
    (6.0, ("W",)),
    (4.0, ()),
    (3.0, ("W", "S")),
    (4.0, ("S", "A")),
    (8.0, ()),
]

# Telemetry CSV (optional). Overridden by env var BOAT_TELEMETRY_CSV_PATH.
TELEMETRY_CSV_FILENAME: str = "boat_telemetry.csv"
