"""Named traffic profile presets.

Presets give users a reasonable starting point for common workload shapes.
"""

from archsim.domain.entities.architecture import (
    Burstiness,
    RegionDistribution,
    TrafficProfile,
)

TRAFFIC_PROFILE_PRESETS: dict[str, TrafficProfile] = {
    "interview-default": TrafficProfile(
        baseline_rps=1500,
        peak_multiplier=3,
        read_percentage=80,
        write_percentage=20,
        payload_kb=12,
        region_distribution=RegionDistribution(us_east=50, us_west=20, europe=20, apac=10),
        burstiness=Burstiness.STEADY,
    ),
    "read-heavy": TrafficProfile(
        baseline_rps=3000,
        peak_multiplier=4,
        read_percentage=95,
        write_percentage=5,
        payload_kb=8,
        region_distribution=RegionDistribution(us_east=45, us_west=25, europe=20, apac=10),
        burstiness=Burstiness.SPIKY,
    ),
    "write-heavy": TrafficProfile(
        baseline_rps=2500,
        peak_multiplier=3,
        read_percentage=40,
        write_percentage=60,
        payload_kb=16,
        region_distribution=RegionDistribution(us_east=55, us_west=20, europe=15, apac=10),
        burstiness=Burstiness.SPIKY,
    ),
    "global-burst": TrafficProfile(
        baseline_rps=4000,
        peak_multiplier=6,
        read_percentage=70,
        write_percentage=30,
        payload_kb=20,
        region_distribution=RegionDistribution(us_east=30, us_west=20, europe=25, apac=25),
        burstiness=Burstiness.EXTREME,
    ),
}

DEFAULT_TRAFFIC_PROFILE: TrafficProfile = TRAFFIC_PROFILE_PRESETS["interview-default"]
