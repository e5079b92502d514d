"""
EvoForage Server  –  Flask JSON bridge
======================================

Lets a browser front-end drive one simulation and draw its world.

Endpoints:
  GET  /world    Agents (x, y, rotation) and food (x, y)
  POST /step     Advance one tick; statistics only on a generation boundary
  POST /train    Run until the next generation boundary
  POST /reset    Rebuild the simulation; optional JSON config body
  GET  /status   Generation, age and seed of the running simulation

Run:
  python server.py
  # → http://localhost:5000
"""

import logging
import threading

from flask import Flask, Response, request, jsonify

from simulation import Simulation
from config import (AGENT_COUNT, FOOD_COUNT, GENERATION_LIMIT,
                    MUTATION_PROBABILITY, MUTATION_COEFFICIENT)

logger = logging.getLogger(__name__)

# ──────────────────────────────────────────────────────────────────────────────
app = Flask(__name__)

# Global simulation state
_sim_lock = threading.Lock()
_sim      = Simulation.random()


# ──────────────────────────────────────────────────────────────────────────────
# CORS helper – allow the front-end dev server (any origin) to call us
# ──────────────────────────────────────────────────────────────────────────────

@app.after_request
def add_cors(response):
    response.headers["Access-Control-Allow-Origin"]  = "*"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
    return response

@app.route("/", methods=["OPTIONS"])
@app.route("/<path:p>", methods=["OPTIONS"])
def preflight(p=""):
    return Response(status=200)


@app.errorhandler(ValueError)
def bad_request(err):
    return jsonify({"error": str(err)}), 400


# ──────────────────────────────────────────────────────────────────────────────
# Helpers
# ──────────────────────────────────────────────────────────────────────────────

def _build_cfg(data) -> dict:
    """Merge request JSON with defaults."""
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("config body must be a JSON object")
    seed = data.get("seed")
    return {
        "seed":                 None if seed is None else int(seed),
        "agent_count":          int(data.get("agents",          AGENT_COUNT)),
        "food_count":           int(data.get("foods",           FOOD_COUNT)),
        "generation_limit":     int(data.get("generationLimit", GENERATION_LIMIT)),
        "mutation_probability": float(data.get("mutationProbability",
                                               MUTATION_PROBABILITY)),
        "mutation_coefficient": float(data.get("mutationCoefficient",
                                               MUTATION_COEFFICIENT)),
    }


def _stats_payload(stats, generation: int) -> dict:
    return {"generation": generation, "summary": str(stats), **stats.as_dict()}


def _status(sim) -> dict:
    return {"generation": sim.generation, "age": sim.age, "seed": sim.seed}


# ──────────────────────────────────────────────────────────────────────────────
# Routes
# ──────────────────────────────────────────────────────────────────────────────

@app.route("/world", methods=["GET"])
def world():
    with _sim_lock:
        return jsonify(_sim.world().snapshot())


@app.route("/step", methods=["POST"])
def step():
    with _sim_lock:
        stats = _sim.step()
        payload = {
            "statistics": (None if stats is None
                           else _stats_payload(stats, _sim.generation)),
            **_status(_sim),
        }
    return jsonify(payload)


@app.route("/train", methods=["POST"])
def train():
    with _sim_lock:
        stats = _sim.train()
        payload = _stats_payload(stats, _sim.generation)
    logger.info("generation %d: %s", payload["generation"], payload["summary"])
    return jsonify(payload)


@app.route("/reset", methods=["POST"])
def reset():
    global _sim
    cfg = _build_cfg(request.get_json(silent=True))
    sim = Simulation.random(**cfg)
    with _sim_lock:
        _sim = sim
        status = _status(_sim)
    return jsonify({"status": "reset", "cfg": cfg, **status})


@app.route("/status", methods=["GET"])
def status():
    with _sim_lock:
        return jsonify(_status(_sim))


# ──────────────────────────────────────────────────────────────────────────────

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    print("=" * 50)
    print("  EvoForage Server  →  http://localhost:5000")
    print("  World snapshot    →  http://localhost:5000/world")
    print("=" * 50)
    app.run(host="0.0.0.0", port=5000, threaded=True, debug=False)
