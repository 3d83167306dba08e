"""
main.py — Graph Algorithm Trace Server
=======================================
Flask JSON API in front of the trace engine.  Rendering, pointer
interaction and the editor itself live in the browser; this server only
takes a graph + options, computes the step trace, and plays it back.

Routes:
  GET  /api/algorithms          – registry metadata for the selector
  POST /api/run                 – validate, compute trace, merge first step
  POST /api/step/next           – merge one more step (one timer tick)
  POST /api/step/goto           – show the state after step N (replayed)
  POST /api/step/end            – merge everything that is left
  GET  /api/state               – current merged state + progress
  POST /api/reset               – discard the run

State management:
  Runs are kept in process memory, keyed by a run id stored in the Flask
  session (the full trace is far too large for a cookie).  Starting a
  new run replaces the previous one for that session.  The store holds at
  most MAX_RUNS runs; the least recently used one is dropped first, so
  clients that never come back cannot grow it without bound.
"""

import logging
import uuid
from collections import OrderedDict
from typing import Optional

from flask import Flask, jsonify, request, session

from config import AppConfig
from graph import Graph, GraphError
from algorithms import AlgorithmError, list_algorithms
from engine import AlgorithmRun, SPEED_PRESETS

logger = logging.getLogger(__name__)

config = AppConfig.from_env()
logging.basicConfig(
    level=getattr(logging, config.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = Flask(__name__)
app.secret_key = config.secret_key
app.config["MAX_NODES"] = config.max_nodes
app.config["MAX_RUNS"] = config.max_runs
app.config["DEFAULT_SPEED"] = config.default_speed

# run_id → AlgorithmRun, oldest access first
_RUNS: "OrderedDict[str, AlgorithmRun]" = OrderedDict()


# ---------------------------------------------------------------------------
# Session helpers
# ---------------------------------------------------------------------------
def get_run() -> Optional[AlgorithmRun]:
    run_id = session.get("run_id")
    if not run_id or run_id not in _RUNS:
        return None
    _RUNS.move_to_end(run_id)
    return _RUNS[run_id]


def store_run(run: AlgorithmRun) -> str:
    run_id = uuid.uuid4().hex
    _RUNS[run_id] = run
    while len(_RUNS) > app.config["MAX_RUNS"]:
        evicted, _ = _RUNS.popitem(last=False)
        logger.info("run store full, dropped run %s", evicted)
    session["run_id"] = run_id
    return run_id


def drop_run() -> None:
    run_id = session.pop("run_id", None)
    if run_id:
        _RUNS.pop(run_id, None)


def playback_payload(run: AlgorithmRun) -> dict:
    player = run.player
    return {
        "state":      player.current_state.to_dict(),
        "step":       player.current_state.step,
        "totalSteps": player.total_steps,
        "finished":   player.is_finished,
    }


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
@app.errorhandler(AlgorithmError)
@app.errorhandler(GraphError)
def handle_bad_request(err):
    logger.warning("rejected request: %s", err)
    return jsonify({"error": str(err)}), 400


# ---------------------------------------------------------------------------
# API: Registry
# ---------------------------------------------------------------------------
@app.route("/api/algorithms")
def api_algorithms():
    return jsonify({"algorithms": [info.to_dict() for info in list_algorithms()]})


# ---------------------------------------------------------------------------
# API: Run Algorithm
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400
    graph = Graph.from_dict(data.get("graph", data))

    if graph.node_count() > app.config["MAX_NODES"]:
        return jsonify({"error": f"Graph too large (max {app.config['MAX_NODES']} nodes)"}), 400

    algo_key = data.get("algorithm", "bfs")
    speed    = data.get("speed", app.config["DEFAULT_SPEED"])
    if speed not in SPEED_PRESETS:
        return jsonify({"error": f"Unknown speed preset: {speed}"}), 400

    # switching runs discards the old trace before anything new is computed
    drop_run()

    run = AlgorithmRun()
    run.player.set_speed(speed)
    run.start(algo_key, graph, data.get("startNode") or None, data.get("endNode") or None)
    run.player.next_step()

    run_id = store_run(run)

    payload = playback_payload(run)
    payload.update({
        "runId":      run_id,
        "delay":      run.player.speed,
        "violations": [v.to_dict() for v in run.violations],
        "summary":    run.summary().to_dict(),
    })
    return jsonify(payload)


# ---------------------------------------------------------------------------
# API: Step Navigation
# ---------------------------------------------------------------------------
@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    run = get_run()
    if run is None:
        return jsonify({"error": "No run in progress"}), 400
    run.player.next_step()
    return jsonify(playback_payload(run))


@app.route("/api/step/goto", methods=["POST"])
def api_step_goto():
    run = get_run()
    if run is None:
        return jsonify({"error": "No run in progress"}), 400
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400
    try:
        idx = int(data.get("index", 0))
    except (TypeError, ValueError):
        return jsonify({"error": "index must be an integer"}), 400
    if not run.player.goto_step(idx):
        return jsonify({"error": f"Step {idx} out of range"}), 400
    return jsonify(playback_payload(run))


@app.route("/api/step/end", methods=["POST"])
def api_step_end():
    run = get_run()
    if run is None:
        return jsonify({"error": "No run in progress"}), 400
    run.player.jump_to_end()
    return jsonify(playback_payload(run))


@app.route("/api/state")
def api_state():
    run = get_run()
    if run is None:
        return jsonify({"error": "No run in progress"}), 400
    return jsonify(playback_payload(run))


@app.route("/api/reset", methods=["POST"])
def api_reset():
    drop_run()
    return jsonify({"ok": True})


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logger.info("Graph algorithm trace server on http://localhost:5000")
    app.run(debug=True, host="0.0.0.0", port=5000)
