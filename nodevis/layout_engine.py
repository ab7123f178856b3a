import math

from nodevis.geometry import Vec2
from nodevis.model import INCOMING, OUTGOING, externals


def step(projection, graph, config, rng):
    """
    One relaxation step: accumulate velocities from every force, then integrate.

    `graph` is the full nx.DiGraph; only nodes present in `projection` move.
    `rng` is a random.Random used for the overlap jitter.
    """
    velocities = compute_velocities(projection, graph, config, rng)
    integrate(projection, velocities, config)
    return projection


def simulate(projection, graph, config, rng, steps):
    for _ in range(steps):
        step(projection, graph, config, rng)
    return projection


def compute_velocities(projection, graph, config, rng):
    positions = dict(projection.iterate())
    # Velocities are rebuilt every step (treating mass=1, so F=v)
    velocities = {node_id: [0.0, 0.0] for node_id in positions}

    if not positions:
        return velocities

    # 1. Inwards pressure
    apply_cohesion(velocities, positions, config.cohesion_weight)

    # 2. Sources drift left, sinks drift right
    apply_outward_pressure(velocities, positions, graph, config.outward_weight)

    # 3. Repulsion (All vs All)
    apply_repulsion(velocities, positions, config, rng)

    # 4. Edges should point left to right
    apply_reorder(velocities, positions, graph, config.reorder_weight)

    # 5. Spring attraction along edges
    apply_neighbor_cohesion(velocities, positions, graph,
                            config.neighbor_cohesion_weight, config.cohesion_distance)

    # 6. Keep the whole layout from drifting away
    apply_center_correction(velocities, positions, config.center_correction_weight)

    return velocities


def apply_cohesion(velocities, positions, weight):
    for node_id, pos in positions.items():
        v = velocities[node_id]
        v[0] -= pos.x * weight
        v[1] -= pos.y * weight


def apply_outward_pressure(velocities, positions, graph, weight):
    # NOTE: sources/sinks are those of the full graph, not of the projected subset
    for node_id in externals(graph, INCOMING):
        pos = positions.get(node_id)
        if pos is not None:
            velocities[node_id][0] += (-1.0 - pos.x) * weight

    for node_id in externals(graph, OUTGOING):
        pos = positions.get(node_id)
        if pos is not None:
            velocities[node_id][0] += (1.0 - pos.x) * weight


def apply_repulsion(velocities, positions, config, rng):
    items = list(positions.items())
    cutoff = config.repulsion_distance

    for i in range(len(items)):
        id1, p1 = items[i]
        for j in range(i + 1, len(items)):
            id2, p2 = items[j]

            dx = p1.x - p2.x
            dy = p1.y - p2.y
            dist = math.sqrt(dx*dx + dy*dy)

            if dist < config.overlap_epsilon:
                # Stacked on top of each other, pick a random way out
                angle = rng.uniform(0.0, 2.0 * math.pi)
                f = config.repulsion_weight * config.jitter_strength
                fx = math.cos(angle) * f
                fy = math.sin(angle) * f
            elif dist < cutoff:
                falloff = min(max(1.0 - dist / cutoff, 0.0), 1.0)
                f = config.repulsion_weight * falloff * falloff
                fx = (dx / dist) * f
                fy = (dy / dist) * f
            else:
                continue

            velocities[id1][0] += fx
            velocities[id1][1] += fy
            velocities[id2][0] -= fx
            velocities[id2][1] -= fy


def apply_reorder(velocities, positions, graph, weight):
    for u, v in graph.edges():
        pu = positions.get(u)
        pv = positions.get(v)
        if pu is None or pv is None:
            continue

        overlap = pu.x - pv.x
        if overlap > 0:
            velocities[u][0] -= overlap * weight
            velocities[v][0] += overlap * weight


def apply_neighbor_cohesion(velocities, positions, graph, weight, rest_distance):
    seen = set()
    for u, v in graph.edges():
        pair = frozenset((u, v))
        if pair in seen or u == v:
            continue
        seen.add(pair)

        pu = positions.get(u)
        pv = positions.get(v)
        if pu is None or pv is None:
            continue

        dx = pv.x - pu.x
        dy = pv.y - pu.y
        dist = math.sqrt(dx*dx + dy*dy)

        if dist > rest_distance:
            f = (dist - rest_distance) * weight
            fx = (dx / dist) * f
            fy = (dy / dist) * f

            velocities[u][0] += fx
            velocities[u][1] += fy
            velocities[v][0] -= fx
            velocities[v][1] -= fy


def apply_center_correction(velocities, positions, weight):
    count = len(positions)
    center_x = sum(p.x for p in positions.values()) / count
    center_y = sum(p.y for p in positions.values()) / count

    for v in velocities.values():
        v[0] -= center_x * weight
        v[1] -= center_y * weight


def clamp_speed(vx, vy, max_speed):
    speed = math.sqrt(vx*vx + vy*vy)
    if speed > max_speed:
        vx = vx / speed * max_speed
        vy = vy / speed * max_speed
    return vx, vy


def integrate(projection, velocities, config):
    for node_id, (vx, vy) in velocities.items():
        vx, vy = clamp_speed(vx, vy, config.max_speed)
        projection.update(
            node_id,
            lambda old, vx=vx, vy=vy: Vec2(old.x + vx * config.time_step,
                                           old.y + vy * config.time_step),
        )
