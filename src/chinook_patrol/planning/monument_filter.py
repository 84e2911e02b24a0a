"""
Monument eligibility filter.

Decides whether a monument may be visited by a patrolling chinook. Rules are
evaluated in a fixed order and the first match wins:

1. Safe zone rejection
2. Force-allow name patterns (partial, then exact)
3. Disallow name patterns (partial, then exact)
4. Disallowed tiers
5. Disallowed categories
6. Otherwise allowed

Name patterns are compared case-insensitively against the monument's
effective name. Blank patterns never match.
"""

from typing import Iterable, Optional, Tuple

from chinook_patrol.core.config import FilterRules
from chinook_patrol.core.types import WaypointCandidate


def _is_blank(pattern: Optional[str]) -> bool:
    return pattern is None or not str(pattern).strip()


def matches_partial(name: str, patterns: Iterable[Optional[str]]) -> bool:
    """True if any non-blank pattern is a case-insensitive substring of name."""
    lowered = name.lower()
    return any(
        not _is_blank(pattern) and str(pattern).lower() in lowered
        for pattern in patterns
    )


def matches_exact(name: str, patterns: Iterable[Optional[str]]) -> bool:
    """True if any non-blank pattern equals name, ignoring case."""
    lowered = name.lower()
    return any(
        not _is_blank(pattern) and str(pattern).lower() == lowered
        for pattern in patterns
    )


def is_eligible(candidate: WaypointCandidate, rules: FilterRules) -> bool:
    """
    Decide whether a monument may be used as a patrol waypoint.

    Args:
        candidate: Monument to evaluate
        rules: Filter rules

    Returns:
        True if the monument is eligible

    Example:
        >>> rules = FilterRules(disallowed_categories=frozenset({MonumentCategory.CAVE}),
        ...                     force_allowed_name_partial=("cave_large",))
        >>> is_eligible(large_cave, rules)  # force-allow wins over category
        True
    """
    if rules.disallow_safe_zones and candidate.is_safe_zone:
        return False

    name = candidate.effective_name

    if matches_partial(name, rules.force_allowed_name_partial):
        return True
    if matches_exact(name, rules.force_allowed_name_exact):
        return True

    if matches_partial(name, rules.disallowed_name_partial):
        return False
    if matches_exact(name, rules.disallowed_name_exact):
        return False

    if candidate.tier & rules.disallowed_tiers:
        return False

    if candidate.category in rules.disallowed_categories:
        return False

    return True


class MonumentFilter:
    """
    Filter bound to one set of rules.

    Attributes:
        rules: Filter rules applied to every candidate
    """

    def __init__(self, rules: FilterRules):
        self.rules = rules

    def allows(self, candidate: WaypointCandidate) -> bool:
        """Return True if the candidate passes the filter."""
        return is_eligible(candidate, self.rules)

    def check(self, candidate: WaypointCandidate) -> Tuple[bool, str]:
        """
        Evaluate a candidate and resolve its display name.

        Returns:
            (allowed, name) where name is the candidate's effective name
        """
        return self.allows(candidate), candidate.effective_name

    def __call__(self, candidate: WaypointCandidate) -> bool:
        return self.allows(candidate)
