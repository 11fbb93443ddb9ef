"""Class-based analytics for water usage sessions and goals."""

from dataclasses import dataclass

from .const import DEFAULT_CO2_KG_PER_LITER, DEFAULT_COST_PER_LITER

GOAL_STATUS_ON_TRACK = "on_track"
GOAL_STATUS_WARNING = "warning"
GOAL_STATUS_EXCEEDED = "exceeded"


@dataclass(frozen=True)
class ImpactConfig:
    """Conversion factors from litres to cost and emissions, plus the
    daily-goal status bands as percentages of the target."""

    cost_per_liter: float = DEFAULT_COST_PER_LITER
    co2_kg_per_liter: float = DEFAULT_CO2_KG_PER_LITER

    # Goal status thresholds, percent of target consumed
    goal_on_track_max_percent: float = 70.0
    goal_warning_max_percent: float = 90.0


class UsageAnalyzer:
    """Derives cost, emissions and goal metrics from water volumes."""

    def __init__(self, config: ImpactConfig | None = None) -> None:
        """Initialize the UsageAnalyzer with an ImpactConfig."""
        self.config = config or ImpactConfig()

    def estimated_cost(self, volume_liters: float) -> float:
        return volume_liters * self.config.cost_per_liter

    def co2_equivalent(self, volume_liters: float) -> float:
        return volume_liters * self.config.co2_kg_per_liter

    @staticmethod
    def format_duration(seconds: int) -> str:
        """Format whole seconds as mm:ss. Minutes are not wrapped at 60."""
        minutes, secs = divmod(max(0, int(seconds)), 60)
        return f"{minutes:02d}:{secs:02d}"

    def goal_progress(self, consumed_liters: float, target_liters: float) -> float:
        """
        Percentage of the target consumed, capped at 100.
        A non-positive target counts as fully consumed once anything is used.
        """
        if target_liters <= 0:
            return 100.0 if consumed_liters > 0 else 0.0
        return round(min(consumed_liters / target_liters * 100.0, 100.0), 1)

    def goal_status(self, consumed_liters: float, target_liters: float) -> str:
        progress = self.goal_progress(consumed_liters, target_liters)
        if progress <= self.config.goal_on_track_max_percent:
            return GOAL_STATUS_ON_TRACK
        if progress <= self.config.goal_warning_max_percent:
            return GOAL_STATUS_WARNING
        return GOAL_STATUS_EXCEEDED
