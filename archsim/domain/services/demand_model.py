"""Demand distribution model.

Maps a component type to the fraction of system-wide peak demand routed
through it, driven by the read/write mix of the traffic profile.
"""

from archsim.domain.entities.architecture import ComponentType, TrafficProfile


class DemandModel:
    """Computes per-component-type demand weights in (0, 1].

    Edge components (client, load balancer) see all traffic. Stateful tiers
    see a share that grows with the read or write ratio they serve.
    """

    UNCLASSIFIED_WEIGHT: float = 0.5

    def demand_weight(
        self,
        component_type: ComponentType | str,
        traffic_profile: TrafficProfile,
    ) -> float:
        """Compute the demand weight for a component type.

        Args:
            component_type: Component kind
            traffic_profile: Traffic profile carrying the read/write mix

        Returns:
            Fraction of peak demand routed through this kind of component
        """
        read_ratio = traffic_profile.read_percentage / 100
        write_ratio = traffic_profile.write_percentage / 100

        match component_type:
            case ComponentType.CLIENT | ComponentType.LOAD_BALANCER:
                return 1.0
            case ComponentType.API_GATEWAY:
                return 0.96
            case ComponentType.SERVICE:
                return 0.9
            case ComponentType.CACHE:
                return 0.25 + read_ratio * 0.7
            case ComponentType.DATABASE:
                return 0.3 + write_ratio * 0.68 + read_ratio * 0.12
            case ComponentType.QUEUE:
                return 0.2 + write_ratio * 0.7
            case ComponentType.CDN:
                return 0.18 + read_ratio * 0.64
            case ComponentType.OBJECT_STORE:
                return 0.15 + write_ratio * 0.62
            case _:
                return self.UNCLASSIFIED_WEIGHT
