"""
EvoForage Configuration
All tunable parameters for the foraging simulation.
"""

import math

# ─── World ────────────────────────────────────────────────────────────────────
# The world is the unit square [0, 1) × [0, 1) with toroidal edges.
AGENT_COUNT = 10     # agents alive at any moment
FOOD_COUNT  = 30     # food items scattered over the world
FOOD_RADIUS = 0.02   # agent eats food closer than this

# ─── Agent movement ───────────────────────────────────────────────────────────
SPEED_MIN      = 0.001          # world units per step
SPEED_MAX      = 0.005
SPEED_INITIAL  = 0.002
SPEED_ACCEL    = 0.2            # max |speed delta| a brain can request
ROTATION_ACCEL = math.pi / 4    # max |rotation delta| (radians) per step

# ─── Eye ──────────────────────────────────────────────────────────────────────
FOV_RANGE = 0.25                      # how far an agent can see
FOV_ANGLE = math.pi + math.pi / 4     # full width of the view cone
EYE_CELLS = 9                         # photoreceptors = brain inputs

# ─── Evolution ────────────────────────────────────────────────────────────────
GENERATION_LIMIT     = 2500   # steps per generation
MUTATION_PROBABILITY = 0.01   # chance a single gene is perturbed
MUTATION_COEFFICIENT = 0.3    # perturbation magnitude

# ─── Output / Logging ─────────────────────────────────────────────────────────
SAVE_DIR          = "output"   # directory for saved images and charts
SNAPSHOT_INTERVAL = 10         # save a world snapshot every N generations
LOG_CSV           = True       # write per-generation CSV log
