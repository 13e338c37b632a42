"""Demo: saturate a wheel with a sustained pitch command, then discharge it.

Run: python3 examples/wheel_saturation_demo.py
"""

import logging
from pathlib import Path

import numpy as np

from rwsat import ResourcePool, SaturatableReactionWheel, Tank, WheelConfig


def main():
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    cfg = WheelConfig.from_json_file(Path(__file__).with_name("example_wheel_config.json"))
    wheel = SaturatableReactionWheel(cfg)
    print(wheel.describe())

    orientation = np.eye(3)
    dt = 0.02

    print("\nHolding full pitch for 10 s:")
    for tick in range(1, 501):
        torque = wheel.step(dt, orientation, (1.0, 0.0, 0.0))
        if tick % 100 == 0:
            snap = wheel.telemetry()
            print(
                f"  t={snap.sim_time:5.2f}s  m_a={snap.momentum[0]:7.3f}  "
                f"sat={snap.saturation_fraction_display[0]:5.1%}  pitch torque={torque[0]:6.2f} N*m"
            )

    pool = ResourcePool(
        [
            Tank("LiquidFuel", 1.0, scope="stack"),
            Tank("Oxidizer", 1.2, scope="stack"),
        ]
    )
    wheel.set_discharge(True)
    print("\nDischarging:")
    tick = 0
    while wheel.discharge_engaged and tick < 5000:
        wheel.step(dt, orientation, supply=pool)
        tick += 1
    snap = wheel.telemetry()
    print(
        f"  stopped after {tick * dt:.2f}s  m=({snap.momentum[0]:.4f}, "
        f"{snap.momentum[1]:.4f}, {snap.momentum[2]:.4f})"
    )
    print(
        f"  LiquidFuel left={pool.total('LiquidFuel'):.4f}  "
        f"Oxidizer left={pool.total('Oxidizer'):.4f}"
    )


if __name__ == "__main__":
    main()
