"""Launch the proximity-grid dashboard on a 10x10 seeded grid."""

import logging

import proximity_grid as pg

logging.basicConfig(level=logging.INFO)

print("Launching dashboard: 10 x 10 grid, highlighting 5 nearest cells...")

pg.explore(rows=10, cols=10, x_count=5, seed=7)
