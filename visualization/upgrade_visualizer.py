import datetime
import logging
import os
from typing import Dict, List

from component_simulation.specs import ComponentSpecs

CAPACITY_FIELDS = ("max_inputs", "max_outputs", "request_capacity")


def upgrade_progression(specs: ComponentSpecs) -> List[Dict[str, int]]:
    """Capacity values per level, from the base specs (level 0) up to the last table level.

    Each row carries the specs in effect once that level is reached, so fields
    an upgrade does not mention keep their previous value.
    """
    rows: List[Dict[str, int]] = []
    current = specs
    rows.append({"level": 0, **{name: getattr(current, name) for name in CAPACITY_FIELDS}})
    if specs.upgrades is None:
        return rows
    for level in range(1, specs.upgrades.max_level + 1):
        current = current.apply(specs.upgrades.override_for(level))
        rows.append({"level": level, **{name: getattr(current, name) for name in CAPACITY_FIELDS}})
    return rows


def visualize_upgrade_progression(
    role: str,
    specs: ComponentSpecs,
    out_dir: str = "results",
) -> str:
    """Save a grouped bar chart of capacity limits per upgrade level.

    Returns:
        Path to the saved PNG.
    """
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt
    import numpy as np

    rows = upgrade_progression(specs)
    levels = np.array([row["level"] for row in rows])
    bar_width = 0.8 / len(CAPACITY_FIELDS)

    fig, ax = plt.subplots(figsize=(8, 5))
    colors = plt.cm.viridis(np.linspace(0.2, 0.8, len(CAPACITY_FIELDS)))
    for i, name in enumerate(CAPACITY_FIELDS):
        values = np.array([row[name] for row in rows])
        offsets = levels + (i - (len(CAPACITY_FIELDS) - 1) / 2) * bar_width
        ax.bar(offsets, values, width=bar_width, color=colors[i], label=name.replace('_', ' '))

    ax.set_xticks(levels)
    ax.set_xlabel('Level', fontsize=11)
    ax.set_ylabel('Capacity', fontsize=11)
    ax.set_title(f'Upgrade progression ({role})', fontsize=14, fontweight='bold')
    ax.grid(axis='y', alpha=0.3)
    ax.legend(loc='upper left')
    plt.tight_layout()

    os.makedirs(out_dir, exist_ok=True)
    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    safe_role = "".join(c if c.isalnum() or c in '._-' else '_' for c in role)
    filepath = os.path.join(out_dir, f"upgrades_{safe_role}_{timestamp}.png")
    plt.savefig(filepath, dpi=150, bbox_inches='tight')
    plt.close(fig)

    logging.info(f"Upgrade progression graph saved to: {filepath}")
    return filepath
