"""
config.py — Application Configuration
======================================
Typed settings for the web layer, read once from the environment.

    GRAPH_VISUALIZER_SECRET_KEY   Flask session key (random per process if unset)
    GRAPH_VISUALIZER_LOG_LEVEL    logging level name, default INFO
    GRAPH_VISUALIZER_SPEED        default playback preset, default "medium"
    GRAPH_VISUALIZER_MAX_NODES    largest graph accepted by /api/run, default 200
    GRAPH_VISUALIZER_MAX_RUNS     runs kept in memory before the least recently used is dropped, default 64
"""

import os
import secrets
from dataclasses import dataclass, field
from typing import Mapping, Optional


def _random_key() -> str:
    return secrets.token_hex(32)


@dataclass
class AppConfig:
    """
    Attributes:
        secret_key:    Signs the session cookie that remembers a client's run.
        log_level:     Root logging level name.
        default_speed: Playback preset used when a request names none.
        max_nodes:     Upper bound on graph size; these are visualization
                       graphs, tens of nodes.
        max_runs:      How many client runs the server keeps at once.
    """
    secret_key:    str = field(default_factory=_random_key)
    log_level:     str = "INFO"
    default_speed: str = "medium"
    max_nodes:     int = 200
    max_runs:      int = 64

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        env = os.environ if environ is None else environ
        cfg = cls()
        if env.get("GRAPH_VISUALIZER_SECRET_KEY"):
            cfg.secret_key = env["GRAPH_VISUALIZER_SECRET_KEY"]
        cfg.log_level = env.get("GRAPH_VISUALIZER_LOG_LEVEL", cfg.log_level).upper()
        cfg.default_speed = env.get("GRAPH_VISUALIZER_SPEED", cfg.default_speed)
        if env.get("GRAPH_VISUALIZER_MAX_NODES"):
            cfg.max_nodes = int(env["GRAPH_VISUALIZER_MAX_NODES"])
        if env.get("GRAPH_VISUALIZER_MAX_RUNS"):
            cfg.max_runs = max(1, int(env["GRAPH_VISUALIZER_MAX_RUNS"]))
        return cfg
