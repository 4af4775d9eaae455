"""Component capacity model.

Converts one component's declared hardware and scaling attributes into an
effective sustained throughput capacity in requests per second.
"""

from archsim.domain.entities.architecture import Component, VerticalTier


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value into [lower, upper]."""
    return min(upper, max(lower, value))


class CapacityModel:
    """Computes effective capacity for a single component.

    Formula:
        per_replica = ops * vertical_factor * cpu_boost * memory_boost
        effective   = max(1, per_replica * replicas * 0.94 * stateful_penalty)

    The 0.94 replica efficiency models fixed replica-coordination overhead and
    the stateful penalty models replication/consistency cost. These are fixed
    tuning parameters.
    """

    VERTICAL_MULTIPLIER: dict[VerticalTier, float] = {
        VerticalTier.SMALL: 0.75,
        VerticalTier.MEDIUM: 1.0,
        VerticalTier.LARGE: 1.45,
        VerticalTier.XLARGE: 1.9,
    }
    REPLICA_EFFICIENCY: float = 0.94
    STATEFUL_PENALTY: float = 0.86

    CPU_BASE: float = 0.65
    CPU_PER_CORE: float = 0.12
    CPU_BOOST_RANGE: tuple[float, float] = (0.6, 1.45)

    MEMORY_BASE: float = 0.72
    MEMORY_PER_GB: float = 0.045
    MEMORY_BOOST_RANGE: tuple[float, float] = (0.65, 1.5)

    # Floor that keeps downstream divisions safe
    MIN_CAPACITY_RPS: float = 1.0

    def effective_capacity(self, component: Component) -> float:
        """Compute the effective capacity of a component.

        Args:
            component: Component with capacity, scaling and behavior attributes

        Returns:
            Effective capacity in requests per second, never below 1
        """
        vertical_factor = self.VERTICAL_MULTIPLIER[VerticalTier(component.scaling.vertical_tier)]
        stateful_penalty = self.STATEFUL_PENALTY if component.behavior.stateful else 1.0
        cpu_boost = self.cpu_boost(component.capacity.cpu_cores)
        memory_boost = self.memory_boost(component.capacity.memory_gb)

        per_replica_capacity = (
            component.capacity.ops_per_second * vertical_factor * cpu_boost * memory_boost
        )
        scaled_capacity = (
            per_replica_capacity * component.scaling.replicas * self.REPLICA_EFFICIENCY
        )

        return max(self.MIN_CAPACITY_RPS, scaled_capacity * stateful_penalty)

    def cpu_boost(self, cpu_cores: float) -> float:
        """Multiplier contributed by CPU cores."""
        return clamp(self.CPU_BASE + cpu_cores * self.CPU_PER_CORE, *self.CPU_BOOST_RANGE)

    def memory_boost(self, memory_gb: float) -> float:
        """Multiplier contributed by memory."""
        return clamp(
            self.MEMORY_BASE + memory_gb * self.MEMORY_PER_GB, *self.MEMORY_BOOST_RANGE
        )
