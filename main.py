"""
EvoForage – Main Entry Point
============================

Usage examples:
  python main.py                              # 100 generations, random seed
  python main.py --generations 20 --seed 42   # reproducible short run
  python main.py --agents 40 --foods 60       # bigger world
  python main.py --generation-limit 500       # shorter generations
"""

import argparse
import logging
import os

from simulation import Simulation
from visualizer import (ensure_dirs, save_world_snapshot,
                        save_fitness_chart, save_brain_diagram, append_csv)
from config import (SAVE_DIR, SNAPSHOT_INTERVAL, AGENT_COUNT, FOOD_COUNT,
                    GENERATION_LIMIT, MUTATION_PROBABILITY,
                    MUTATION_COEFFICIENT)


# ──────────────────────────────────────────────────────────────────────────────
# CLI
# ──────────────────────────────────────────────────────────────────────────────

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="EvoForage – evolving foragers")
    p.add_argument("--generations", type=int, default=100,
                   help="Number of generations to train")
    p.add_argument("--seed", type=int, default=None,
                   help="Random seed for reproducibility")
    p.add_argument("--agents", type=int, default=AGENT_COUNT,
                   help="Number of agents")
    p.add_argument("--foods", type=int, default=FOOD_COUNT,
                   help="Number of food items")
    p.add_argument("--generation-limit", type=int, default=GENERATION_LIMIT,
                   help="Simulation steps per generation")
    p.add_argument("--mutation-probability", type=float,
                   default=MUTATION_PROBABILITY,
                   help="Chance a single gene is perturbed")
    p.add_argument("--mutation-coefficient", type=float,
                   default=MUTATION_COEFFICIENT,
                   help="Perturbation magnitude")
    p.add_argument("--outdir", default=SAVE_DIR,
                   help="Output directory")
    p.add_argument("--snapshot-interval", type=int, default=SNAPSHOT_INTERVAL,
                   help="Save world snapshot every N generations")
    p.add_argument("--verbose", action="store_true",
                   help="Enable debug logging")
    args = p.parse_args(argv)
    if args.snapshot_interval < 1:
        p.error("--snapshot-interval must be >= 1")
    return args


# ──────────────────────────────────────────────────────────────────────────────
# Main
# ──────────────────────────────────────────────────────────────────────────────

def run(args) -> list:
    """Train `args.generations` generations, writing outputs as we go."""
    ensure_dirs(args.outdir)

    sim = Simulation.random(
        seed                 = args.seed,
        agent_count          = args.agents,
        food_count           = args.foods,
        generation_limit     = args.generation_limit,
        mutation_probability = args.mutation_probability,
        mutation_coefficient = args.mutation_coefficient,
    )

    all_stats = []
    for _ in range(args.generations):
        # snapshot the world that is about to be judged
        if sim.generation % args.snapshot_interval == 0:
            path = save_world_snapshot(sim.world(), sim.generation, args.outdir)
            print(f"  → Snapshot: {path}")

        stats = sim.train()
        row = {"generation": sim.generation, **stats.as_dict()}
        all_stats.append(row)
        append_csv(row, args.outdir)
        print(f"Gen {sim.generation:>5}  |  {stats}")

        if sim.generation % args.snapshot_interval == 0:
            save_brain_diagram(sim.world().agents[0], sim.generation,
                               "agent_0", args.outdir)

    return all_stats


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    print("=" * 60)
    print("  EvoForage – Evolutionary Foraging Simulator")
    print("=" * 60)
    print(f"  Agents     : {args.agents}")
    print(f"  Food       : {args.foods}")
    print(f"  Generations: {args.generations}")
    print(f"  Steps/gen  : {args.generation_limit}")
    print(f"  Mutation   : p={args.mutation_probability} "
          f"c={args.mutation_coefficient}")
    print(f"  Seed       : {args.seed}")
    print(f"  Output dir : {args.outdir}")
    print("=" * 60)

    all_stats = run(args)

    print("\nSaving final fitness chart …")
    chart_path = save_fitness_chart(all_stats, args.outdir, "fitness_final.png")
    print(f"  → {chart_path}")
    print("\nDone! All outputs saved to:", os.path.abspath(args.outdir))


if __name__ == "__main__":
    main()
