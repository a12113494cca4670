"""
Search configuration for the route-search engine.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

# Links longer than the reference distance divided by this factor are pruned
DEFAULT_DISTANCE_SLACK = 1.1


class ReferenceDistancePolicy(Enum):
    """
    How the reference straight distance of a search is chosen.

    A city may map to several airports. The reference distance bounds
    every branch of a search, so one scalar is picked for the whole
    search from the source and destination airport sets.
    """

    FIRST_MATCH = "first"
    """Distance between the first source and first destination airport."""

    MIN = "min"
    """Shortest distance over all source/destination airport pairs."""

    MAX = "max"
    """Longest distance over all source/destination airport pairs."""

    MEAN = "mean"
    """Average distance over all source/destination airport pairs."""


@dataclass(frozen=True)
class SearchConfig:
    """
    Immutable route-search settings.

    Attributes:
        distance_slack: Margin applied to each link distance before it
            is compared with the reference distance.
        reference_policy: How the reference distance is chosen.
    """

    distance_slack: float = DEFAULT_DISTANCE_SLACK
    reference_policy: ReferenceDistancePolicy = ReferenceDistancePolicy.FIRST_MATCH

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.distance_slack <= 0:
            raise ValueError(
                f"distance_slack must be > 0, got {self.distance_slack}"
            )

    @classmethod
    def create(
        cls,
        distance_slack: Optional[float] = None,
        reference_policy: Union[str, ReferenceDistancePolicy, None] = None,
    ) -> "SearchConfig":
        """
        Factory method accepting policy names.

        Args:
            distance_slack: Pruning margin. Defaults to 1.1.
            reference_policy: Policy or its value ('first', 'min', 'max', 'mean').

        Returns:
            Validated SearchConfig instance.
        """
        if reference_policy is None:
            reference_policy = ReferenceDistancePolicy.FIRST_MATCH
        elif not isinstance(reference_policy, ReferenceDistancePolicy):
            reference_policy = ReferenceDistancePolicy(reference_policy.lower())

        return cls(
            distance_slack=(
                DEFAULT_DISTANCE_SLACK if distance_slack is None else distance_slack
            ),
            reference_policy=reference_policy,
        )
