#!/usr/bin/env python3
"""
Benchmark Fugue position generation.

Scenarios:
    single    - one replica creates two positions and one between them
    multiple  - many replicas take turns inserting at a moving cursor

Usage:
    python scripts/bench_positions.py --scenario multiple --clients 100 --rounds 10
"""

import sys
import os
import argparse
import logging
import time

# Add parent directory to path so we can import project modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fugue import Fugue
from fugue_config import get_log_level

logger = logging.getLogger(__name__)


def run_single(iterations):
    """
    Create two positions and one between them on a fresh replica, repeatedly.

    Returns (positions, errors) for the last iteration.
    """
    positions = []
    errors = []
    for _ in range(iterations):
        fugue = Fugue("test")
        pos1 = fugue.between(None, None)
        pos2 = fugue.between(pos1, None)
        middle = fugue.between(pos1, pos2)
        positions = [pos1, middle, pos2]
    if not pos1 < middle < pos2:
        errors.append(f"{middle!r} not between {pos1!r} and {pos2!r}")
    return positions, errors


def run_multiple(clients, rounds):
    """
    Replicas take turns inserting between a moving left bound and a fixed
    right bound, each also inserting once more just left of its new position.

    Returns (positions, errors, instances).
    """
    instances = [Fugue(f"client{i}") for i in range(clients)]

    first_key = instances[0].between(None, None)
    last_key = instances[0].between(first_key, None)

    positions = [first_key, last_key]
    errors = []
    previous_key = first_key
    for _ in range(rounds):
        for instance in instances:
            new_pos = instance.between(previous_key, last_key)
            new_pos2 = instance.between(previous_key, new_pos)
            if not previous_key < new_pos2 < new_pos < last_key:
                errors.append(f"{instance.client_id}: {previous_key!r} {new_pos2!r} {new_pos!r}")
            logger.debug(f"{instance.client_id}: {new_pos2} < {new_pos}")
            positions.extend([new_pos, new_pos2])
            previous_key = new_pos2

    return positions, errors, instances


def main(argv=None):
    parser = argparse.ArgumentParser(description="Benchmark Fugue position generation")
    parser.add_argument(
        '--scenario',
        type=str,
        choices=['single', 'multiple'],
        default='multiple',
        help='Benchmark scenario to run'
    )
    parser.add_argument(
        '--clients',
        type=int,
        default=100,
        help='Number of replicas for the multiple scenario'
    )
    parser.add_argument(
        '--rounds',
        type=int,
        default=10,
        help='Insert rounds per replica for the multiple scenario'
    )
    parser.add_argument(
        '--iterations',
        type=int,
        default=1000,
        help='Repetitions for the single scenario'
    )
    parser.add_argument(
        '--verbose',
        '-v',
        action='store_true',
        help='Enable verbose logging'
    )

    args = parser.parse_args(argv)

    # Configure logging
    log_level = logging.DEBUG if args.verbose else get_log_level()
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if args.clients < 1 or args.rounds < 1 or args.iterations < 1:
        logger.error("--clients, --rounds and --iterations must be positive")
        return 2

    logger.info("=" * 80)
    logger.info(f"Starting '{args.scenario}' benchmark")

    instances = []
    started = time.perf_counter()
    if args.scenario == 'single':
        positions, errors = run_single(args.iterations)
    else:
        positions, errors, instances = run_multiple(args.clients, args.rounds)
    elapsed = time.perf_counter() - started

    logger.info(f"Created {len(positions)} positions in {elapsed * 1000:.2f} ms")
    logger.info(f"Longest position: {max(len(p) for p in positions)} chars")
    if instances:
        logger.info(f"Largest cache: {max(f.cache_size for f in instances)} prefixes")

    if len(set(positions)) != len(positions):
        errors.append("duplicate positions were generated")

    logger.info(f"Errors: {len(errors)}")
    if errors:
        for error in errors:
            logger.error(f"  - {error}")
        return 1

    logger.info("Benchmark completed successfully")
    logger.info("=" * 80)
    return 0


if __name__ == '__main__':
    sys.exit(main())
