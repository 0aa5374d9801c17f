"""Configuration for shardplan.

Values are read from environment variables when the module is imported.
"""
import os
from dataclasses import dataclass, field


@dataclass
class ShardPlanConfig:
    """Planner configuration loaded from environment variables."""

    # Sentinel row count used when no per-shard cap can be applied
    max_row_count: int = field(
        default_factory=lambda: int(
            os.environ.get("SHARDPLAN_MAX_ROW_COUNT", "2147483647")
        )
    )

    # Bound pagination parameters: allow whole-number floats such as 5.0
    accept_float_parameters: bool = field(
        default_factory=lambda: os.environ.get(
            "SHARDPLAN_ACCEPT_FLOAT_PARAMETERS", "true"
        ).lower()
        == "true"
    )


config = ShardPlanConfig()
