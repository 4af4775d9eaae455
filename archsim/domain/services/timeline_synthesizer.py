"""Turns a ranked bottleneck list into an ordered run narrative."""

from archsim.domain.entities.simulation_result import (
    Bottleneck,
    BottleneckSeverity,
    EventSeverity,
    TimelineEvent,
)


class TimelineSynthesizer:
    """Builds the timeline of a simulation run.

    Layout:
    - t=0: "Simulation started"
    - t=10, 25, 40: one event per leading bottleneck (at most three)
    - t=60 "System saturation reached" or t=45 "Run stabilized"
    """

    MAX_BOTTLENECK_EVENTS: int = 3
    FIRST_BOTTLENECK_SECOND: int = 10
    BOTTLENECK_SPACING_SECONDS: int = 15
    SATURATED_END_SECOND: int = 60
    STABLE_END_SECOND: int = 45

    def build(self, bottlenecks: list[Bottleneck], saturated: bool) -> list[TimelineEvent]:
        """Build timeline events from bottlenecks sorted by utilization.

        Args:
            bottlenecks: Bottlenecks, highest utilization first
            saturated: Whether the run saturated

        Returns:
            Events with contiguous sequence numbers starting at 0
        """
        events = [
            TimelineEvent(
                sequence=0,
                at_second=0,
                severity=EventSeverity.INFO,
                title="Simulation started",
                description="Queued architecture assumptions were loaded for execution.",
            )
        ]

        for index, bottleneck in enumerate(bottlenecks[: self.MAX_BOTTLENECK_EVENTS]):
            events.append(
                TimelineEvent(
                    sequence=index + 1,
                    at_second=self.FIRST_BOTTLENECK_SECOND + index * self.BOTTLENECK_SPACING_SECONDS,
                    severity=(
                        EventSeverity.CRITICAL
                        if bottleneck.severity == BottleneckSeverity.CRITICAL
                        else EventSeverity.WARNING
                    ),
                    title=f"Capacity pressure on {bottleneck.component_label}",
                    description=(
                        f"{bottleneck.component_label} reached "
                        f"{bottleneck.utilization_percent:.1f}% utilization."
                    ),
                    component_id=bottleneck.component_id,
                )
            )

        if saturated:
            events.append(
                TimelineEvent(
                    sequence=len(events),
                    at_second=self.SATURATED_END_SECOND,
                    severity=EventSeverity.CRITICAL,
                    title="System saturation reached",
                    description="Demand exceeded modeled capacity and error rate increased.",
                )
            )
        else:
            events.append(
                TimelineEvent(
                    sequence=len(events),
                    at_second=self.STABLE_END_SECOND,
                    severity=EventSeverity.INFO,
                    title="Run stabilized",
                    description="System stayed within modeled throughput capacity.",
                )
            )

        return events
