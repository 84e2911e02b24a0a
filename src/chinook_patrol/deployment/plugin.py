"""
Chinook patrol plugin.

Glue between the host server and the patrol planner. The plugin:
1. Builds the eligible waypoint set once the server has loaded the map
2. Attaches a fresh patrol path to every patrolling chinook that spawns
3. Optionally randomizes the number of crates each chinook drops

Usage:
    from chinook_patrol.deployment import ChinookPatrolPlugin, TickScheduler

    scheduler = TickScheduler()
    plugin = ChinookPatrolPlugin(load_config("config/chinook_patrol.yaml"), scheduler)
    plugin.on_server_initialized(monuments, drop_zones)

    plugin.on_entity_spawned(chinook)
    scheduler.run_tick()  # path attached here
"""

import logging
from typing import Iterable, Optional, Sequence

import numpy as np

from chinook_patrol.core.config import FilterRules, PatrolConfig
from chinook_patrol.core.types import (
    AgentBrain,
    AIState,
    CargoAgent,
    DropZone,
    WaypointCandidate,
)
from chinook_patrol.deployment.hooks import ON_BETTER_CHINOOK_PATROL, HookRegistry
from chinook_patrol.deployment.scheduler import TickScheduler
from chinook_patrol.navigation import PathFinder, PatrolPath, PatrolPathGenerator
from chinook_patrol.planning import DropZoneReport, EligibleWaypointSet, build_eligible_set

logger = logging.getLogger(__name__)


class ChinookPatrolPlugin:
    """
    Attaches shuffled patrol paths to spawned chinooks.

    Attributes:
        config: Plugin configuration
        rules: Filter rules parsed from the configuration
        scheduler: Tick scheduler used to defer attachment
        hooks: Hook registry used for the attachment veto
        eligible_set: Waypoints shared by all patrol paths of the session
        report: Drop zone report of the eligible set
    """

    def __init__(
        self,
        config: Optional[PatrolConfig] = None,
        scheduler: Optional[TickScheduler] = None,
        hooks: Optional[HookRegistry] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        """
        Initialize plugin.

        Args:
            config: Plugin configuration (uses defaults if None)
            scheduler: Host tick scheduler (creates a private one if None)
            hooks: Hook registry (creates a private one if None)
            rng: Random generator for paths and crate counts
        """
        self.config = config or PatrolConfig()
        self.rules: FilterRules = self.config.to_filter_rules()
        self.scheduler = scheduler or TickScheduler()
        self.hooks = hooks or HookRegistry()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.path_generator = PatrolPathGenerator(self.rng)

        self.eligible_set = EligibleWaypointSet()
        self.report = DropZoneReport()

    def on_server_initialized(
        self,
        monuments: Iterable[WaypointCandidate],
        drop_zones: Sequence[DropZone] = (),
    ) -> EligibleWaypointSet:
        """
        Build the eligible waypoint set for this session.

        Args:
            monuments: Every monument on the map
            drop_zones: Every cargo drop zone on the map

        Returns:
            The eligible waypoint set
        """
        self.eligible_set, self.report = build_eligible_set(monuments, self.rules, drop_zones)
        logger.info(self.report.format())
        return self.eligible_set

    def on_entity_spawned(self, agent: CargoAgent) -> None:
        """
        Schedule patrol attachment for a newly spawned chinook.

        Reinforcement chinooks and chinooks without a brain are ignored.
        Attachment runs on the next tick so the host finishes setting up
        the brain first.
        """
        if agent.is_reinforcement:
            return

        brain = agent.brain
        if brain is None:
            return

        self.scheduler.next_tick(lambda: self.attach(agent, brain))

    def attach(self, agent: CargoAgent, brain: AgentBrain) -> Optional[PatrolPath]:
        """
        Install a new patrol path on a chinook brain.

        Returns:
            The installed path, or None if attachment was skipped
        """
        # Without a path finder, another plugin is probably controlling it
        if not isinstance(brain.path_finder, PathFinder):
            return None

        if self.hooks.is_vetoed(ON_BETTER_CHINOOK_PATROL, agent):
            return None

        # Nothing on the brain changes until both draws succeed
        num_crates = self.config.crate_drop_range.sample(self.rng)
        path = self.path_generator.generate(self.eligible_set)

        brain.path_finder = path

        # A brain already patrolling keeps flying to its old target otherwise
        if brain.current_state == AIState.PATROL:
            brain.main_interest_point = path.next_waypoint()

        if num_crates is not None:
            agent.num_crates = num_crates

        logger.debug(
            f"Chinook {agent.agent_id}: attached patrol path with {len(path)} waypoints, "
            f"{agent.num_crates} crates"
        )
        return path
