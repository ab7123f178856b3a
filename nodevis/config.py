from dataclasses import dataclass


@dataclass
class LayoutConfig:
    # Inward pull toward the world origin (0 disables it)
    cohesion_weight: float = 0.0

    # Sources are pushed toward x = -1, sinks toward x = +1
    outward_weight: float = 10.0

    # Short-range push between any two nodes closer than repulsion_distance
    repulsion_weight: float = 20.0
    repulsion_distance: float = 0.5

    # Nodes closer than this get a random push instead of a directed one
    overlap_epsilon: float = 0.01
    jitter_strength: float = 0.2

    # Horizontal push keeping edge sources left of their targets
    reorder_weight: float = 1.0

    # Spring pull between connected nodes further apart than cohesion_distance
    neighbor_cohesion_weight: float = 1.0
    cohesion_distance: float = 0.6

    # Pull of the whole layout back toward the origin
    center_correction_weight: float = 1.0

    # Integration
    max_speed: float = 25.0
    time_step: float = 1.0 / 50.0

    # Scheduling
    warm_start_steps: int = 200
    frame_steps: int = 20

    # View
    node_half_extent: float = 0.125
    focus_radius: int = 1
