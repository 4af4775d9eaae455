"""Latency and error rate estimation service.

Derives p50/p95 latency and an error rate from the worst observed
utilization, the payload size and the saturation state of a run.
"""

from dataclasses import dataclass

from archsim.domain.services.capacity_model import clamp


@dataclass(frozen=True)
class LatencyEstimate:
    """Estimated latency percentiles and error rate.

    Attributes:
        p50_latency_ms: Median latency
        p95_latency_ms: 95th percentile latency (always above p50)
        error_rate_percent: Error rate in [0, 100]
    """

    p50_latency_ms: float
    p95_latency_ms: float
    error_rate_percent: float


class LatencyEstimator:
    """Estimates latency and errors from utilization.

    Strategy:
    - p50 grows with payload size, burstiness and utilization^1.6
    - p95 is p50 times a tail factor in [1.44, 2.04]
    - Saturated runs lose the demand share above capacity as errors
    - Unsaturated runs only start erroring past 88% utilization, capped at 8%
    """

    DEFAULT_UTILIZATION_PERCENT: float = 45.0

    BASE_LATENCY_MS: float = 24.0
    MIN_P50_MS: float = 18.0
    PAYLOAD_PENALTY_MS_PER_KB: float = 0.28
    UTILIZATION_EXPONENT: float = 1.6
    UTILIZATION_SCALE_MS: float = 190.0
    BURST_PENALTY_MS: float = 6.0

    TAIL_BASE: float = 1.44
    TAIL_UTILIZATION_DIVISOR: float = 180.0
    TAIL_CAP: float = 0.6

    ERROR_ONSET_UTILIZATION: float = 88.0
    ERROR_SLOPE: float = 0.18
    MAX_UNSATURATED_ERROR_PERCENT: float = 8.0

    def estimate(
        self,
        adjusted_demand_rps: float,
        system_capacity_rps: float,
        max_utilization_percent: float | None,
        payload_kb: float,
        burst_factor: float,
    ) -> LatencyEstimate:
        """Estimate latency percentiles and error rate.

        Args:
            adjusted_demand_rps: Burst-adjusted peak demand
            system_capacity_rps: System-wide capacity ceiling
            max_utilization_percent: Utilization of the top bottleneck, or None
                when no component crossed the bottleneck threshold
            payload_kb: Average payload size
            burst_factor: Burstiness multiplier used for the run

        Returns:
            LatencyEstimate for the run
        """
        max_utilization = (
            max_utilization_percent
            if max_utilization_percent is not None
            else self.DEFAULT_UTILIZATION_PERCENT
        )
        saturated = adjusted_demand_rps > system_capacity_rps

        payload_penalty_ms = payload_kb * self.PAYLOAD_PENALTY_MS_PER_KB
        p50_latency_ms = max(
            self.MIN_P50_MS,
            self.BASE_LATENCY_MS
            + payload_penalty_ms
            + (max_utilization / 100) ** self.UTILIZATION_EXPONENT * self.UTILIZATION_SCALE_MS
            + burst_factor * self.BURST_PENALTY_MS,
        )
        p95_latency_ms = p50_latency_ms * (
            self.TAIL_BASE + min(max_utilization / self.TAIL_UTILIZATION_DIVISOR, self.TAIL_CAP)
        )

        if saturated:
            error_rate_percent = clamp(
                (adjusted_demand_rps - system_capacity_rps) / adjusted_demand_rps * 100, 0, 100
            )
        else:
            error_rate_percent = clamp(
                max(0.0, (max_utilization - self.ERROR_ONSET_UTILIZATION) * self.ERROR_SLOPE),
                0,
                self.MAX_UNSATURATED_ERROR_PERCENT,
            )

        return LatencyEstimate(
            p50_latency_ms=p50_latency_ms,
            p95_latency_ms=p95_latency_ms,
            error_rate_percent=error_rate_percent,
        )
