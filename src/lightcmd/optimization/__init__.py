"""
LightCmd sequence optimization.
"""

from lightcmd.optimization.optimizer import OptimizerState, SequenceOptimizer, optimize

__all__ = ["OptimizerState", "SequenceOptimizer", "optimize"]
