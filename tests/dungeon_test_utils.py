from collections import deque

from voxel_dungeon.dungeon import EntityKind


def reachable_rooms(rooms):
    """Return the set of room ids reachable from rooms[0] over recorded connections."""
    if not rooms:
        return set()
    start = rooms[0]
    q = deque([start])
    vis = {id(start)}
    while q:
        r = q.popleft()
        for o in r.connections:
            if id(o) not in vis:
                vis.add(id(o))
                q.append(o)
    return vis


def all_rooms_reachable(rooms):
    return len(reachable_rooms(rooms)) == len(rooms)


def connection_graph(rooms):
    """Connections as a set of sorted index pairs (comparable across runs)."""
    index = {id(r): i for i, r in enumerate(rooms)}
    edges = set()
    for i, r in enumerate(rooms):
        for o in r.connections:
            j = index[id(o)]
            edges.add((min(i, j), max(i, j)))
    return edges


def occupied_by(registry):
    """Map coord -> list of kinds for every room/corridor record that owns a grid cell."""
    out = {}
    for kind in (EntityKind.ROOM, EntityKind.CORRIDOR):
        for obj in registry.find(kind):
            out.setdefault(tuple(obj.coord), []).append(kind)
    return out
