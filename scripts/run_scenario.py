"""CLI for replaying carsim scenarios defined in JSON configs."""
from __future__ import annotations

import argparse
import json
import logging
from collections import defaultdict
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Optional

from carsim import CarConfig, ElevatorController, ElevatorState

logger = logging.getLogger("run_scenario")


def build_controller(config: Dict) -> ElevatorController:
    car_cfg = config.get("car", {})
    return ElevatorController(CarConfig(**car_cfg), queue_name=config.get("queue", "fcfs"))


def _schedule_requests(config: Dict, duration: int) -> Dict[int, List[int]]:
    schedule: Dict[int, List[int]] = defaultdict(list)
    for request in config.get("requests", []):
        floor = request.get("floor")
        tick = request.get("tick", 0)
        if floor is None:
            logger.warning("Skipping request without a floor: %r", request)
            continue
        if isinstance(tick, bool) or not isinstance(tick, int) or not 0 <= tick < duration:
            logger.warning("Skipping request at tick %r outside [0, %d): %r", tick, duration, request)
            continue
        schedule[tick].append(floor)
    return schedule


def run_scenario(controller: ElevatorController, config: Dict) -> Dict:
    duration = config.get("duration", 5000)
    stop_when_idle = config.get("stop_when_idle", True)
    schedule = _schedule_requests(config, duration)
    last_request_tick = max(schedule, default=-1)

    arrivals: List[Dict] = []
    transitions: List[Dict] = []
    controller.on_event("arrival", arrivals.append)
    controller.on_event(
        "transition",
        lambda event: transitions.append(
            {
                "tick": event["tick"],
                "from": event["from"].value,
                "to": event["to"].value,
                "position": event["position"],
            }
        ),
    )

    for tick in range(duration):
        for floor in schedule.get(tick, []):
            controller.request_floor(floor)
        if stop_when_idle and tick > last_request_tick and controller.state is ElevatorState.IDLE:
            break
        controller.tick()
    else:
        if controller.state is not ElevatorState.IDLE:
            logger.warning("Scenario stopped after %d ticks with the car still %s", duration, controller.state.value)

    return {
        "ticks": controller.ticks,
        "arrivals": arrivals,
        "transitions": transitions,
        "final_state": controller.state.value,
        "final_position": controller.position,
        "pending_requests": list(controller.pending_requests),
        "status": controller.status().render(),
    }


def save_results(output_path: Optional[Path], data: Dict) -> None:
    if not output_path:
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(data, indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config", type=Path, help="Path to a JSON scenario configuration file")
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional file path to write the arrival and transition trace as JSON",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level, e.g. DEBUG or INFO")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    config = json.loads(args.config.read_text())
    controller = build_controller(config)
    trace = run_scenario(controller, config)

    results = {
        "scenario": config.get("name", args.config.stem),
        "description": config.get("description"),
        "car": asdict(controller.config),
        **trace,
    }

    save_results(args.output, results)

    print(f"Scenario: {results['scenario']}")
    if results["description"]:
        print(results["description"])
    print(f"Ticks run: {results['ticks']}")
    print("Arrivals:")
    for arrival in results["arrivals"]:
        print(f"  tick {arrival['tick']}: floor {arrival['floor']}")
    print(f"Final state: {results['final_state']} ({results['status'].strip()})")
    if args.output:
        print(f"Saved trace to {args.output}")


if __name__ == "__main__":
    main()
