"""CLI for running offline LiftJudge scenarios defined in JSON configs."""
from __future__ import annotations

import argparse
import json
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Optional

from judge import Judge
from scheduler import InProcessChannel, get_scheduler
from simulation import Scenario, ScenarioParameters, generate_scenario, load_scenario


def build_scenario(config: Dict, base_dir: Path) -> Scenario:
    scenario_file = config.get("scenario_file")
    if scenario_file:
        return load_scenario(base_dir / scenario_file)
    params_cfg = config.get("parameters", {})
    parameters = ScenarioParameters(**params_cfg)
    return generate_scenario(config.get("seed", 0), parameters)


def run_simulation(judge: Judge, config: Dict) -> List[Dict]:
    interval = max(1, config.get("snapshot_interval", 10))
    snapshots: List[Dict] = []

    judge.start()
    while not judge.finished:
        judge.play_turn()
        if judge.current_turn % interval == 0:
            metrics = asdict(judge.simulation.metrics_snapshot())
            snapshots.append(metrics)
    return snapshots


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
        help="Optional file path to write metrics snapshots as JSON",
    )
    args = parser.parse_args()

    config = json.loads(args.config.read_text())
    scenario = build_scenario(config, args.config.parent)
    scheduler_cfg = config.get("scheduler", {})
    scheduler_name = scheduler_cfg.get("name", "greedy")
    scheduler = get_scheduler(scheduler_name, **scheduler_cfg.get("options", {}))

    judge = Judge(scenario, InProcessChannel(scheduler))
    snapshots = run_simulation(judge, config)
    result = judge.result()

    results = {
        "scenario": config.get("name", args.config.stem),
        "description": config.get("description"),
        "turns": result.turns,
        "scheduler": scheduler_name,
        "score": result.score,
        "final_metrics": asdict(result.metrics),
        "metrics_over_time": snapshots,
    }

    save_results(args.output, results)

    print(f"Scenario: {results['scenario']}")
    if results["description"]:
        print(results["description"])
    print(f"Scheduler: {results['scheduler']}")
    print(f"Turns: {results['turns']}")
    print(f"Score: {results['score']}")
    print("Final metrics:")
    for key, value in results["final_metrics"].items():
        print(f"  {key}: {value}")
    if args.output:
        print(f"Saved metrics to {args.output}")


if __name__ == "__main__":
    main()
