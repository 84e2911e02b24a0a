#!/usr/bin/env python3
"""
Demo script for chinook patrol planning.

Loads a configuration and a map, spawns a few chinooks and prints the first
waypoints of each patrol path.

Usage:
    python scripts/demo.py
    python scripts/demo.py --config config/chinook_patrol.yaml --agents 5 --seed 7
"""

import argparse
import logging
from pathlib import Path

import numpy as np

from chinook_patrol.core import AgentBrain, AIState, CargoAgent, load_config, load_map_yaml
from chinook_patrol.deployment import ChinookPatrolPlugin, TickScheduler
from chinook_patrol.navigation import HostPathFinder

DEFAULT_MAP = Path(__file__).resolve().parent.parent / "configs" / "sample_map.yaml"


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Chinook patrol planning demo")
    parser.add_argument("--config", type=str, default="config/chinook_patrol.yaml",
                        help="Plugin configuration (created with defaults if missing)")
    parser.add_argument("--map", type=str, default=str(DEFAULT_MAP), help="Map YAML file")
    parser.add_argument("--agents", type=int, default=3, help="Chinooks to spawn")
    parser.add_argument("--waypoints", type=int, default=8, help="Waypoints to print per chinook")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--log-level", type=str, default="INFO", help="Logging level")
    return parser.parse_args()


def run_demo(args):
    """Run demo."""
    config = load_config(args.config)
    monuments, drop_zones = load_map_yaml(args.map)

    rng = np.random.default_rng(args.seed)
    scheduler = TickScheduler()
    plugin = ChinookPatrolPlugin(config, scheduler, rng=rng)
    plugin.on_server_initialized(monuments, drop_zones)

    agents = []
    for agent_id in range(1, args.agents + 1):
        brain = AgentBrain(
            path_finder=HostPathFinder(plugin.eligible_set.points, rng),
            current_state=AIState.PATROL,
        )
        agent = CargoAgent(agent_id=agent_id, brain=brain)
        plugin.on_entity_spawned(agent)
        agents.append(agent)

    scheduler.run_tick()

    print("=" * 80)
    print(f"{len(plugin.eligible_set)} eligible waypoints, {args.agents} chinooks")
    print("=" * 80)

    for agent in agents:
        brain = agent.brain
        print(f"\nChinook {agent.agent_id} | crates: {agent.num_crates} | "
              f"heading to: {_fmt(brain.main_interest_point)}")
        for step in range(args.waypoints):
            print(f"  {step + 1:2d}. {_fmt(brain.path_finder.next_waypoint())}")


def _fmt(location):
    if location is None:
        return "-"
    if location.is_zero:
        return "(no destination)"
    return f"({location.x:8.1f}, {location.z:8.1f})"


def main():
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))
    run_demo(args)


if __name__ == "__main__":
    main()
