"""
Verification package for the crazyeights engine.

This package provides statistical checks of the shuffle and outcome
statistics from simulated games.
"""

from crazyeights.verification.statistics import (
    ConfidenceInterval,
    ShuffleUniformityReport,
    SimulationReport,
    position_frequencies,
    shuffle_uniformity,
    simulate_games,
    simulation_results,
)

__all__ = [
    "ConfidenceInterval",
    "ShuffleUniformityReport",
    "SimulationReport",
    "position_frequencies",
    "shuffle_uniformity",
    "simulate_games",
    "simulation_results",
]
