"""
Visualizer for EvoForage.

Produces:
  1. World snapshots  – agents (oriented markers) and food on the unit square
  2. Fitness chart    – min / avg / max fitness over generations
  3. Brain diagrams   – layered weights of one agent's network
  4. CSV log          – per-generation stats
"""

import os
import csv
import math

import matplotlib
matplotlib.use("Agg")          # non-interactive backend (no display needed)
import matplotlib.pyplot as plt

from config import SAVE_DIR, LOG_CSV


# ──────────────────────────────────────────────────────────────────────────────
# Directory setup
# ──────────────────────────────────────────────────────────────────────────────

def ensure_dirs(base: str = SAVE_DIR):
    for sub in ("snapshots", "charts", "neural"):
        os.makedirs(os.path.join(base, sub), exist_ok=True)


# ──────────────────────────────────────────────────────────────────────────────
# World snapshot
# ──────────────────────────────────────────────────────────────────────────────

def save_world_snapshot(world, generation: int, base: str = SAVE_DIR):
    """
    Render the world: food as green dots, agents as white triangles
    pointing along their heading.
    """
    snap = world.snapshot()

    fig, ax = plt.subplots(figsize=(6, 6), dpi=100)
    ax.set_xlim(0, 1)
    ax.set_ylim(0, 1)
    ax.set_aspect("equal")
    ax.set_facecolor("#111111")
    fig.patch.set_facecolor("#111111")
    ax.set_title(f"Generation {generation}  "
                 f"({len(snap['agents'])} agents, {len(snap['foods'])} food)",
                 color="white", fontsize=10)
    ax.tick_params(colors="white")
    for spine in ax.spines.values():
        spine.set_edgecolor("#444444")

    if snap["foods"]:
        ax.scatter([f["x"] for f in snap["foods"]],
                   [f["y"] for f in snap["foods"]],
                   color="#44FF44", s=8, linewidths=0, zorder=2)

    for a in snap["agents"]:
        # matplotlib's "^" marker points up (+y), which is rotation 0
        ax.plot(a["x"], a["y"], marker=(3, 0, math.degrees(a["rotation"])),
                color="white", markersize=7, linestyle="None", zorder=3)

    path = os.path.join(base, "snapshots", f"gen_{generation:06d}.png")
    plt.savefig(path, dpi=100, bbox_inches="tight", facecolor=fig.get_facecolor())
    plt.close(fig)
    return path


# ──────────────────────────────────────────────────────────────────────────────
# Fitness chart
# ──────────────────────────────────────────────────────────────────────────────

def save_fitness_chart(stats: list, base: str = SAVE_DIR,
                       filename: str = "fitness.png"):
    """
    Plot min / avg / max fitness across generations.

    Args:
        stats: list of dicts with keys generation, min_fitness,
               avg_fitness, max_fitness (see Statistics.as_dict)
    """
    if not stats:
        return
    gens = [s["generation"]  for s in stats]
    mins = [s["min_fitness"] for s in stats]
    avgs = [s["avg_fitness"] for s in stats]
    maxs = [s["max_fitness"] for s in stats]

    fig, ax = plt.subplots(figsize=(12, 5), dpi=100)
    fig.patch.set_facecolor("#111111")
    ax.set_facecolor("#111111")

    ax.fill_between(gens, mins, maxs, color="#44FF44", alpha=0.15, zorder=1)
    ax.plot(gens, maxs, color="#44FF44", linewidth=1.0, label="Max", zorder=3)
    ax.plot(gens, avgs, color="#CC44FF", linewidth=1.2, label="Average", zorder=3)
    ax.plot(gens, mins, color="#FF8800", linewidth=1.0, alpha=0.8,
            label="Min", zorder=2)

    ax.set_xlabel("Generation", color="white")
    ax.set_ylabel("Food eaten", color="white")
    ax.set_ylim(0, max(maxs) * 1.05 if max(maxs) > 0 else 1)
    ax.tick_params(axis="both", colors="white")
    for spine in ax.spines.values():
        spine.set_edgecolor("#444444")

    ax.legend(facecolor="#222222", labelcolor="white",
              loc="upper left", fontsize=8)
    ax.set_title("Evolutionary Progress", color="white", fontsize=12)
    plt.tight_layout()
    path = os.path.join(base, "charts", filename)
    plt.savefig(path, dpi=100, bbox_inches="tight",
                facecolor=fig.get_facecolor())
    plt.close(fig)
    return path


# ──────────────────────────────────────────────────────────────────────────────
# Brain diagram
# ──────────────────────────────────────────────────────────────────────────────

def save_brain_diagram(agent, generation: int, label: str = "",
                       base: str = SAVE_DIR):
    """
    Draw an agent's network as columns of neurons, eye cells on the left.
    Green edges = positive weights, red edges = negative.
    """
    network = agent.brain.nn
    widths  = network.topology()
    if not widths:
        return

    def _y(idx, count):
        return (idx + 1) / (count + 1)

    n_cols = len(widths)
    xs = [i / (n_cols - 1) for i in range(n_cols)]

    fig, ax = plt.subplots(figsize=(10, 6), dpi=100)
    fig.patch.set_facecolor("#111111")
    ax.set_facecolor("#111111")
    ax.axis("off")
    ax.set_xlim(-0.1, 1.1)
    ax.set_ylim(-0.05, 1.05)

    for col, layer in enumerate(network.layers):
        n_in, n_out = widths[col], widths[col + 1]
        for j, neuron in enumerate(layer.neurons):
            for i, w in enumerate(neuron.weights):
                color = "#44FF44" if w >= 0 else "#FF4444"
                lw    = 0.2 + min(2.5, abs(w) * 1.5)
                ax.plot([xs[col], xs[col + 1]],
                        [_y(i, n_in), _y(j, n_out)],
                        color=color, lw=lw, alpha=0.5, zorder=1)

    colors = ["#4499FF"] + ["#AAAAAA"] * (n_cols - 2) + ["#FF88AA"]
    for col, count in enumerate(widths):
        for i in range(count):
            ax.add_patch(plt.Circle((xs[col], _y(i, count)), 0.015,
                                    color=colors[col], zorder=3))

    titles = ["Eye"] + [f"Hidden {i}" for i in range(1, n_cols - 1)] + ["Speed / Turn"]
    for x, title in zip(xs, titles):
        ax.text(x, 1.03, title, color="#CCCCCC", ha="center",
                fontsize=9, fontweight="bold")

    ax.set_title(f"Gen {generation} — Brain of {label}  ({network.summary()})",
                 color="white", fontsize=10, pad=4)

    path = os.path.join(base, "neural", f"gen_{generation:06d}_{label}.png")
    plt.savefig(path, dpi=100, bbox_inches="tight",
                facecolor=fig.get_facecolor())
    plt.close(fig)
    return path


# ──────────────────────────────────────────────────────────────────────────────
# CSV log
# ──────────────────────────────────────────────────────────────────────────────

def append_csv(stats: dict, base: str = SAVE_DIR):
    """Append one generation's stats to a CSV file."""
    if not LOG_CSV:
        return
    path = os.path.join(base, "evolution_log.csv")
    file_exists = os.path.isfile(path)
    with open(path, "a", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=list(stats.keys()))
        if not file_exists:
            writer.writeheader()
        writer.writerow(stats)
