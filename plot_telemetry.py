"""Plot boat telemetry from boat_telemetry.csv.

Creates one figure per node_id with:
- track in the horizontal (x, z) plane
- speed vs t (rowing intervals shaded)
- unwrapped heading vs t

Run:
    python plot_telemetry.py [path/to/boat_telemetry.csv]

By default, reads ./boat_telemetry.csv (same directory as this script).
Both the frame-loop export and the helm protocol export are accepted.
"""

from __future__ import annotations

import os
import sys

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

from config_param import TELEMETRY_CSV_FILENAME


def main() -> int:
    if len(sys.argv) > 1:
        csv_path = sys.argv[1]
    else:
        script_dir = os.path.dirname(os.path.abspath(__file__))
        csv_path = os.path.join(script_dir, TELEMETRY_CSV_FILENAME)

    if not os.path.exists(csv_path):
        print(f"CSV not found: {csv_path}")
        return 1

    df = pd.read_csv(csv_path)

    required_cols = {"node_id", "t", "x", "z", "yaw", "speed", "is_rowing"}
    missing = required_cols - set(df.columns)
    if missing:
        print(f"Missing columns in CSV: {sorted(missing)}")
        return 1

    if df.empty:
        print("CSV is empty.")
        return 0

    # Ensure numeric types and sort by time.
    df = df.copy()
    df["node_id"] = pd.to_numeric(df["node_id"], errors="coerce").astype("Int64")
    for col in ("t", "x", "z", "yaw", "speed"):
        df[col] = pd.to_numeric(df[col], errors="coerce")
    df["is_rowing"] = df["is_rowing"].astype(str).str.lower().isin(("true", "1"))
    df = df.dropna(subset=["node_id", "t", "x", "z", "yaw", "speed"]).sort_values("t")

    node_ids = sorted(df["node_id"].unique())
    if len(node_ids) == 0:
        print("No valid rows to plot.")
        return 0

    for node_id in node_ids:
        df_node = df[df["node_id"] == node_id].sort_values("t")

        fig, (ax_track, ax_speed, ax_yaw) = plt.subplots(3, 1, figsize=(10, 11))
        fig.suptitle(f"Boat telemetry - node_id={int(node_id)}")

        ax_track.plot(df_node["x"], df_node["z"], linewidth=1.2)
        ax_track.plot(df_node["x"].iloc[0], df_node["z"].iloc[0], "o", label="start")
        ax_track.plot(df_node["x"].iloc[-1], df_node["z"].iloc[-1], "s", label="end")
        ax_track.set_xlabel("x (m)")
        ax_track.set_ylabel("z (m)")
        ax_track.set_aspect("equal", adjustable="datalim")
        ax_track.grid(True, alpha=0.3)
        ax_track.legend(loc="best")

        ax_speed.plot(df_node["t"], df_node["speed"], linewidth=1.2, label="speed")
        ax_speed.fill_between(
            df_node["t"],
            0.0,
            1.0,
            where=df_node["is_rowing"].to_numpy(),
            transform=ax_speed.get_xaxis_transform(),
            alpha=0.15,
            label="rowing",
        )
        ax_speed.axhline(0.0, color="k", linewidth=0.8, alpha=0.4)
        ax_speed.set_ylabel("speed (m/s)")
        ax_speed.grid(True, alpha=0.3)
        ax_speed.legend(loc="best")

        # Heading is stored wrapped to (-pi, pi]; unwrap for a continuous curve.
        yaw = np.unwrap(df_node["yaw"].to_numpy())
        ax_yaw.plot(df_node["t"], np.degrees(yaw), linewidth=1.0)
        ax_yaw.set_ylabel("heading (deg)")
        ax_yaw.set_xlabel("t (s)")
        ax_yaw.grid(True, alpha=0.3)

        fig.tight_layout()

    plt.show()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
