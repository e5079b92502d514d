"""
Quick demo – trains 30 short generations from a fixed seed
and saves snapshots + charts without needing a display.
"""
import os

from simulation import Simulation
from visualizer import (ensure_dirs, save_world_snapshot,
                        save_fitness_chart, save_brain_diagram, append_csv)

OUT = "output/demo"
ensure_dirs(OUT)

all_stats = []

sim = Simulation.random(seed=42, agent_count=20, food_count=40,
                        generation_limit=1000)

for _ in range(30):
    stats = sim.train()
    row = {"generation": sim.generation, **stats.as_dict()}
    all_stats.append(row)
    append_csv(row, OUT)
    print(f"Gen {sim.generation:>3}  |  {stats}")
    if sim.generation % 10 == 0:
        save_world_snapshot(sim.world(), sim.generation, OUT)
        save_brain_diagram(sim.world().agents[0], sim.generation, "agent_0", OUT)

save_fitness_chart(all_stats, OUT, "demo_chart.png")
print("\nAll outputs in:", os.path.abspath(OUT))
