import argparse
import logging
import sys
from typing import Dict, List, Optional

from component_simulation.component import LogicComponent
from component_simulation.components_config import COMPONENT_SPECS, get_component_specs, load_component_specs
from component_simulation.specs import ComponentSpecs
from log_setup import configure_debug, configure_run_logging
from visualization.upgrade_visualizer import visualize_upgrade_progression


def parse_args(argv):
    parser = argparse.ArgumentParser(description='Component spec and upgrade inspector')
    parser.add_argument('-role', default='processor',
                        help='Component role to inspect (client, processor, or a role from -config)')
    parser.add_argument('-levels', type=int, default=None,
                        help='Number of upgrades to apply after construction (default: up to the last table level)')
    parser.add_argument('-config', default=None,
                        help='JSON file mapping role name to component spec bundle')
    parser.add_argument('-plot', action='store_true', default=False,
                        help='Save a bar chart of capacities per level under -out_dir')
    parser.add_argument('-out_dir', default='results', help='Output directory for charts and logs')
    parser.add_argument('-log_file', action='store_true', default=False,
                        help='Also write a DEBUG log file for this run')
    parser.add_argument('-debug', action='store_true', default=False, help='Enable DEBUG console logging')
    return parser.parse_args(argv)


def inspect_component(role: str, specs: ComponentSpecs, levels: Optional[int]) -> List[Dict]:
    """Build a component for `role` and return its snapshot after construction and each upgrade."""
    component = LogicComponent(id=role, name=role, specs=specs)
    snapshots = [component.snapshot()]
    if levels is None:
        levels = max(specs.upgrades.max_level - component.level, 0) if specs.upgrades is not None else 0
    for _ in range(levels):
        component.upgrade()
        snapshots.append(component.snapshot())
    return snapshots


def main(argv) -> List[Dict]:
    args = parse_args(argv)
    configure_debug(args.debug)
    if args.log_file:
        console_level = logging.DEBUG if args.debug else logging.INFO
        logfile = configure_run_logging(args.role, log_dir=f"{args.out_dir}/logs", console_level=console_level)
        logging.info(f"Logging to {logfile}")

    all_specs = load_component_specs(args.config) if args.config else COMPONENT_SPECS
    specs = get_component_specs(args.role, all_specs)

    logging.info(f"Inspecting component role={args.role} levels={args.levels} config={args.config}")
    snapshots = inspect_component(args.role, specs, args.levels)
    for snap in snapshots:
        logging.info(
            f"level={snap['level']} max_inputs={snap['max_inputs']} max_outputs={snap['max_outputs']} "
            f"request_capacity={snap['request_capacity']}")

    if args.plot:
        visualize_upgrade_progression(args.role, specs, out_dir=args.out_dir)
    return snapshots


if __name__ == '__main__':
    try:
        main(sys.argv[1:])
    except Exception:
        logging.exception("Component inspection failed with an exception")
        raise
