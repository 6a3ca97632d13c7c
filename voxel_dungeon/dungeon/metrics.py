from typing import Dict


def init_metrics() -> Dict[str, int | float]:
    return {
        'rooms_requested': 0,
        'rooms_placed': 0,
        'placement_failures': 0,
        'corridor_cells': 0,
        'tree_edges': 0,
        'loop_edges': 0,
        'vertical_edges': 0,
        'barriers': 0,
        'enemies': 0,
        'treasures': 0,
        'runtime_ms': 0.0,
    }
