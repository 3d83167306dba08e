"""
engine/
-------
Normalization, playback & run layer.

    from engine import merge_step, StepPlayer, AlgorithmRun
"""

from engine.state     import VisualizationState, MergeContext
from engine.normalize import merge_step, iter_states, reconstruct_path, choose_path_target
from engine.player    import StepPlayer, PlayerState, SPEED_PRESETS
from engine.runner    import AlgorithmRun, RunSummary

__all__ = [
    "VisualizationState",
    "MergeContext",
    "merge_step",
    "iter_states",
    "reconstruct_path",
    "choose_path_target",
    "StepPlayer",
    "PlayerState",
    "SPEED_PRESETS",
    "AlgorithmRun",
    "RunSummary",
]
