"""
main.py — Algorithm Trace Visualizer Flask App
================================================
The JSON API that a renderer talks to.  It validates inputs, runs an
engine through the Recorder and drives one Stepper per client session.

Routes:
  GET  /api/algorithms         – registry listing (pseudocode, sample params)
  POST /api/run                – {algorithm, params} → run and load the trace
  POST /api/step/next          – advance one step
  POST /api/step/prev          – rewind one step
  POST /api/step/goto          – jump to step {index} (0-based)
  POST /api/step/play          – toggle play/pause
  POST /api/step/pause         – stop auto-play
  POST /api/step/tick          – advance if a playback period elapsed
  POST /api/config/speed       – pick a speed preset
  POST /api/reset              – discard the trace
  GET  /api/state              – current playback state + step

State management:
  Traces are immutable and can be large, so they are NOT put in the Flask
  cookie session.  The cookie only carries a session id; the Stepper and
  Recorder for that id live in an in-process store on the app
  (app.extensions["traceviz"]).  The store keeps the SESSION_LIMIT most
  recently used clients; /api/reset drops the caller's entry outright.
  Restarting the server forgets them.

Errors:
  Bad input (InputError, GraphError)  → 400 {"error": ...}
  Unknown algorithm                   → 404 {"error": ...}
"""

import logging
import secrets
import threading
from collections import OrderedDict
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Mapping, Optional

from flask import Flask, current_app, jsonify, request, session

import config as settings
from graph import Graph, GraphError
from algorithms import AlgoInfo, UnknownAlgorithmError, get_algorithm, list_algorithms
from engine import Recorder, Stepper, step_to_dict, to_json, trace_result


logger = logging.getLogger(__name__)


class InputError(ValueError):
    """A request payload the engines must not see."""


# ---------------------------------------------------------------------------
# Per-client state
# ---------------------------------------------------------------------------
@dataclass
class ClientState:
    stepper:  Stepper       = field(default_factory=Stepper)
    recorder: Recorder      = field(default_factory=Recorder)
    algo_key: Optional[str] = None


class SessionStore:
    """
    Session id → ClientState, shared by the worker threads of one app.

    Holds at most `limit` clients; the least recently used one is closed
    and evicted when a new session would exceed it.
    """

    def __init__(self, limit: int = settings.SESSION_LIMIT):
        self.limit = limit
        self._clients: "OrderedDict[str, ClientState]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, sid: str) -> ClientState:
        evicted = []
        with self._lock:
            client = self._clients.get(sid)
            if client is None:
                client = self._clients[sid] = ClientState()
                while len(self._clients) > self.limit:
                    evicted.append(self._clients.popitem(last=False))
            else:
                self._clients.move_to_end(sid)
        for old_sid, old in evicted:
            logger.info("evicting idle session %s", old_sid[:8])
            old.stepper.close()
        return client

    def drop(self, sid: str) -> None:
        with self._lock:
            client = self._clients.pop(sid, None)
        if client is not None:
            client.stepper.close()

    def __contains__(self, sid: str) -> bool:
        return sid in self._clients

    def __len__(self) -> int:
        return len(self._clients)


def current_client() -> ClientState:
    if "sid" not in session:
        session["sid"] = secrets.token_hex(16)
    return current_app.extensions["traceviz"].get(session["sid"])


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------
def parse_graph(raw: Any) -> Graph:
    """
    Accepts {"vertex_count", "edges", "directed"} or a text import
    {"format": "edge-list" | "matrix", "text": ..., "vertex_count"?, "directed"?}.
    """
    if isinstance(raw, Graph):
        return raw.validate()
    if not isinstance(raw, Mapping):
        raise InputError("graph must be an object")

    if "text" in raw:
        if not isinstance(raw["text"], str):
            raise InputError("graph text must be a string")
        fmt      = raw.get("format", "edge-list")
        directed = bool(raw.get("directed", False))
        if fmt == "edge-list":
            graph = Graph.from_edge_list(raw["text"], raw.get("vertex_count"), directed=directed)
        elif fmt == "matrix":
            graph = Graph.from_adjacency_matrix(raw["text"], directed=directed)
        else:
            raise InputError(f"unknown graph format {fmt!r}")
    else:
        if not isinstance(raw.get("edges", []), list):
            raise InputError("graph edges must be a list")
        graph = Graph.from_dict(raw)
    return graph.validate()


def _int_param(params: Mapping[str, Any], name: str) -> int:
    value = params[name]
    if not isinstance(value, int) or isinstance(value, bool):
        raise InputError(f"{name} must be an integer, got {value!r}")
    return value


def _text_param(params: Mapping[str, Any], name: str) -> str:
    value = params[name]
    if not isinstance(value, str) or not value.strip():
        raise InputError(f"{name} must be a non-empty string")
    return value.strip()


def validate_params(info: AlgoInfo, raw: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Fill missing params from the algorithm's sample inputs, then check
    every value the engine will receive.
    """
    if raw is not None and not isinstance(raw, Mapping):
        raise InputError("params must be an object")
    merged = dict(settings.SAMPLE_PARAMS.get(info.key, {}))
    merged.update(raw or {})

    params: Dict[str, Any] = {}
    if "graph" in info.params:
        params["graph"] = parse_graph(merged.get("graph"))
    for name in ("source", "start"):
        if name in info.params:
            vertex = _int_param(merged, name)
            if not 0 <= vertex < params["graph"].vertex_count:
                raise InputError(f"{name} {vertex} outside [0, {params['graph'].vertex_count})")
            params[name] = vertex
    for name in ("text", "pattern"):
        if name in info.params:
            params[name] = _text_param(merged, name)
    for name in ("base", "prime"):
        if name in info.params:
            value = _int_param(merged, name)
            if value <= 0:
                raise InputError(f"{name} must be positive, got {value}")
            params[name] = value
    return params


# ---------------------------------------------------------------------------
# Response helpers
# ---------------------------------------------------------------------------
def state_payload(client: ClientState, **extra: Any) -> Dict[str, Any]:
    stepper = client.stepper
    step    = stepper.current_step
    payload = {
        "algorithm":     client.algo_key,
        "state":         stepper.state.value,
        "current_index": stepper.current_index,
        "total_steps":   stepper.total_steps,
        "is_playing":    stepper.is_playing,
        "is_done":       stepper.is_done,
        "period":        stepper.period,
        "step":          step_to_dict(step) if step is not None else None,
    }
    payload.update(extra)
    return payload


def _json_body() -> Dict[str, Any]:
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise InputError("request body must be a JSON object")
    return body


def _require_trace(client: ClientState) -> None:
    if client.stepper.trace is None:
        raise InputError("Run an algorithm first")


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(config: Optional[Mapping[str, Any]] = None) -> Flask:
    app = Flask(__name__)
    app.config.from_mapping(
        SECRET_KEY=settings.SECRET_KEY,
        PLAYBACK_PERIOD=settings.DEFAULT_PLAYBACK_PERIOD,
        SESSION_LIMIT=settings.SESSION_LIMIT,
    )
    if config:
        app.config.from_mapping(config)
    app.extensions["traceviz"] = SessionStore(app.config["SESSION_LIMIT"])

    register_error_handlers(app)
    register_routes(app)
    return app


def register_error_handlers(app: Flask) -> None:

    @app.errorhandler(InputError)
    @app.errorhandler(GraphError)
    def bad_input(exc):
        logger.warning("rejected %s %s: %s", request.method, request.path, exc)
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(UnknownAlgorithmError)
    def unknown_algorithm(exc):
        key = exc.args[0] if exc.args else ""
        logger.warning("unknown algorithm %r", key)
        return jsonify({"error": f"Unknown algorithm {key!r}"}), 404


def register_routes(app: Flask) -> None:

    # -----------------------------------------------------------------------
    # Registry
    # -----------------------------------------------------------------------
    @app.route("/api/algorithms")
    def api_algorithms():
        return jsonify([
            {
                "key":               a.key,
                "label":             a.label,
                "family":            a.family,
                "params":            a.params,
                "tags":              a.tags,
                "supports_negative": a.supports_negative,
                "is_all_pairs":      a.is_all_pairs,
                "complexity_time":   a.complexity_time,
                "complexity_space":  a.complexity_space,
                "description":       a.description,
                "pseudocode":        a.pseudocode,
                "sample_params":     settings.SAMPLE_PARAMS.get(a.key, {}),
            }
            for a in list_algorithms()
        ])

    # -----------------------------------------------------------------------
    # Run
    # -----------------------------------------------------------------------
    @app.route("/api/run", methods=["POST"])
    def api_run():
        body = _json_body()
        key  = body.get("algorithm")
        info = get_algorithm(key) if isinstance(key, str) else None
        if info is None:
            raise UnknownAlgorithmError(key)

        params = validate_params(info, body.get("params"))

        client = current_client()
        client.recorder.start(info.key, params)
        metrics = client.recorder.run_to_completion()

        client.algo_key = info.key
        client.stepper.period = current_app.config["PLAYBACK_PERIOD"]
        client.stepper.load(client.recorder.trace)

        return jsonify(state_payload(
            client,
            params=to_json(params),
            metrics=asdict(metrics),
            result=trace_result(client.recorder.trace),
        ))

    # -----------------------------------------------------------------------
    # Step navigation
    # -----------------------------------------------------------------------
    @app.route("/api/step/next", methods=["POST"])
    def api_step_next():
        client = current_client()
        _require_trace(client)
        moved = client.stepper.next()
        return jsonify(state_payload(client, moved=moved))

    @app.route("/api/step/prev", methods=["POST"])
    def api_step_prev():
        client = current_client()
        _require_trace(client)
        moved = client.stepper.previous()
        return jsonify(state_payload(client, moved=moved))

    @app.route("/api/step/goto", methods=["POST"])
    def api_step_goto():
        client = current_client()
        _require_trace(client)
        idx = _json_body().get("index", 0)
        if not isinstance(idx, int) or isinstance(idx, bool) or not 0 <= idx < client.stepper.total_steps:
            raise InputError("Invalid step index")
        client.stepper.seek(idx)
        return jsonify(state_payload(client, moved=True))

    # -----------------------------------------------------------------------
    # Auto-play (the client polls /api/step/tick)
    # -----------------------------------------------------------------------
    @app.route("/api/step/play", methods=["POST"])
    def api_step_play():
        client = current_client()
        _require_trace(client)
        client.stepper.toggle_play()
        return jsonify(state_payload(client))

    @app.route("/api/step/pause", methods=["POST"])
    def api_step_pause():
        client = current_client()
        client.stepper.stop_auto_play()
        return jsonify(state_payload(client))

    @app.route("/api/step/tick", methods=["POST"])
    def api_step_tick():
        client = current_client()
        moved = client.stepper.tick(force=bool(_json_body().get("force", False)))
        return jsonify(state_payload(client, moved=moved))

    # -----------------------------------------------------------------------
    # Config
    # -----------------------------------------------------------------------
    @app.route("/api/config/speed", methods=["POST"])
    def api_config_speed():
        speed = _json_body().get("speed", "normal")
        if not isinstance(speed, str) or speed not in settings.SPEED_PRESETS:
            raise InputError(f"unknown speed {speed!r}; pick one of {sorted(settings.SPEED_PRESETS)}")
        client = current_client()
        client.stepper.set_speed(speed)
        return jsonify({"speed": speed, "period": client.stepper.period})

    # -----------------------------------------------------------------------
    # State & reset
    # -----------------------------------------------------------------------
    @app.route("/api/state")
    def api_state():
        return jsonify(state_payload(current_client()))

    @app.route("/api/reset", methods=["POST"])
    def api_reset():
        client = current_client()
        client.stepper.reset()
        client.algo_key = None
        payload = state_payload(client)
        current_app.extensions["traceviz"].drop(session.pop("sid"))
        return jsonify(payload)


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Algorithm Trace Visualizer on http://%s:%d", settings.HOST, settings.PORT)
    create_app().run(host=settings.HOST, port=settings.PORT, debug=False)
