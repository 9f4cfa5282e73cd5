#!/usr/bin/env python
"""Vertical ascent/descent demonstration.

This example walks through a full mission:
1. Check the vehicle with the quick calculators
2. Launch from the control panel inputs
3. Throttle back mid-flight
4. Fly to touchdown and summarize
5. Plot the strip charts and the post-flight dashboard

The vehicle carries 10 t of fuel and 1 t of payload.
"""

import logging
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

from rocketlab import (
    ConsoleSink,
    ControlPanel,
    FlightLog,
    MissionController,
    MultiSink,
    delta_v,
    format_flight_summary,
    thrust_to_weight,
)
from rocketlab.plotting import plot_flight_log, plot_strip_charts


def main() -> None:
    """Run the ascent demonstration."""
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    print("=" * 60)
    print("VERTICAL ASCENT SIMULATION")
    print("=" * 60)

    # =========================================================================
    # 1. Vehicle check
    # =========================================================================
    print("\n1. Checking vehicle...")

    panel = ControlPanel(fuel="10", payload="1", throttle="100")
    run = panel.run_configuration()

    twr = thrust_to_weight(run.max_thrust, run.initial_total_mass)
    dv = delta_v(run.specific_impulse, run.initial_total_mass, run.dry_mass)

    print(f"   Liftoff mass:   {run.initial_total_mass:.0f} kg")
    print(f"   Dry mass:       {run.dry_mass:.0f} kg")
    print(f"   TWR:            {twr.ratio:.1f} ({twr.verdict.value})")
    print(f"   Ideal delta-V:  {dv:.0f} m/s")

    # =========================================================================
    # 2. Launch
    # =========================================================================
    print("\n2. Launching...")

    log = FlightLog()
    controller = MissionController(
        sink=MultiSink(log, ConsoleSink(every=600)),
        controls=panel,
    )
    controller.press()

    # =========================================================================
    # 3. Fly at 60 Hz, throttling back after 3 seconds
    # =========================================================================
    dt = 1.0 / 60.0
    while controller.is_running:
        if controller.state.mission_time > 3.0:
            panel.throttle = "60"
        controller.step(dt)

    # =========================================================================
    # 4. Summary
    # =========================================================================
    print("\n4. Results:")
    print(format_flight_summary(log.summary()))
    print(f"   Control now reads: {controller.action_label}")

    # =========================================================================
    # 5. Plots
    # =========================================================================
    print("\n5. Saving plots...")

    output_dir = Path("outputs/ascent_demo")
    output_dir.mkdir(parents=True, exist_ok=True)

    history = controller.history
    fig = plot_strip_charts(history.altitude, history.velocity, capacity=history.capacity)
    fig.savefig(output_dir / "strip_charts.png", dpi=100)
    print(f"   Plot saved: {output_dir}/strip_charts.png")

    fig = plot_flight_log(log, title=f"Ascent: {run.fuel_mass_initial / 1000:.0f} t fuel")
    fig.savefig(output_dir / "flight_dashboard.png", dpi=100)
    print(f"   Plot saved: {output_dir}/flight_dashboard.png")

    print("\n" + "=" * 60)
    print("SIMULATION COMPLETE")
    print("=" * 60)


if __name__ == "__main__":
    main()
