import errno
import logging
import math
import socket
from datetime import datetime, timezone
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify, request
from werkzeug.serving import make_server

from astroportal.catalog import CatalogStore
from astroportal.config import PortalConfig
from astroportal.errors import InvalidQueryError, ObjectNotFoundError, WeatherFetchError
from astroportal.telescope import TelescopeController
from astroportal.visibility import build_observer_context, visible_objects
from astroportal.weather import WeatherProxy

logger = logging.getLogger(__name__)

PUBLIC_DIR = Path(__file__).resolve().parent / "public"


def create_app(config=None, catalog=None, weather=None, telescope=None):
    """Build the portal app. Collaborators default to ones built from ``config``."""
    config = config or PortalConfig()
    catalog = CatalogStore() if catalog is None else catalog

    app = Flask(__name__, static_folder=str(PUBLIC_DIR), static_url_path="")
    app.config["PORTAL"] = config
    app.extensions["catalog"] = catalog
    app.extensions["weather"] = weather or WeatherProxy.from_config(config)
    app.extensions["telescope"] = telescope or TelescopeController(catalog)

    @app.errorhandler(InvalidQueryError)
    def handle_invalid_query(e):
        return jsonify({"ok": False, "error": str(e)}), 400

    @app.errorhandler(ObjectNotFoundError)
    def handle_not_found(e):
        return jsonify({"ok": False, "error": str(e)}), 404

    @app.route("/")
    def index():
        return app.send_static_file("index.html")

    # -------- Weather proxy --------
    @app.route("/api/weather", methods=["GET"])
    def get_weather():
        try:
            reading = app.extensions["weather"].fetch()
        except WeatherFetchError as e:
            return jsonify({"ok": False, "error": str(e)}), 500
        return jsonify({"ok": True, "reading": reading.to_dict()})

    # -------- Catalog + visibility --------
    @app.route("/api/objects", methods=["GET"])
    def get_objects():
        results = catalog.search(request.args.get("q"))
        return jsonify([o.to_dict() for o in results])

    @app.route("/api/objects/visible", methods=["GET"])
    def get_visible_objects():
        # Missing parameters fall back to the configured site
        ctx = build_observer_context(
            config.site,
            lat=_number_arg("lat"),
            lon=_number_arg("lon"),
            when=_time_arg("time"),
            min_altitude=_number_arg("minAlt"),
        )
        results = visible_objects(catalog, ctx)
        return jsonify([r.to_dict() for r in results])

    # -------- Telescope (simulated) --------
    @app.route("/api/telescope/status", methods=["GET"])
    def get_telescope_status():
        return jsonify(app.extensions["telescope"].status())

    @app.route("/api/telescope/config", methods=["POST"])
    def post_telescope_config():
        state = app.extensions["telescope"].configure(_json_body())
        return jsonify({"ok": True, "scope": state.to_dict()})

    @app.route("/api/telescope/target", methods=["POST"])
    def post_telescope_target():
        state = app.extensions["telescope"].point_at(_json_body().get("id"))
        return jsonify({"ok": True, "scope": state.to_dict()})

    return app


def _json_body():
    """Request body as a dict; anything that is not a JSON object counts as empty."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _number_arg(name):
    raw = request.args.get(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        value = float(raw)
    except ValueError:
        raise InvalidQueryError(name, raw) from None
    if math.isnan(value):
        raise InvalidQueryError(name, raw)
    return value


def _time_arg(name):
    """ISO-8601 instant or Unix seconds; naive times are UTC."""
    raw = request.args.get(name)
    if raw is None or raw.strip() == "":
        return None
    raw = raw.strip()
    try:
        return datetime.fromtimestamp(float(raw), tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        pass
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(raw)
    except ValueError:
        raise InvalidQueryError(name, raw, "is not an ISO-8601 time") from None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def serve(app, host, port, attempts=10):
    """Serve ``app``, moving to the next port while the current one is taken."""
    for candidate in range(port, port + max(1, attempts)):
        try:
            sock = socket.create_server((host, candidate))
        except OSError as e:
            if e.errno != errno.EADDRINUSE:
                raise
            logger.warning("Port %d in use. Trying %d...", candidate, candidate + 1)
            continue
        # werkzeug exits the process on bind errors, so hand it a bound socket
        server = make_server(host, candidate, app, fd=sock.fileno())
        sock.close()
        logger.info("Remote Astronomy Portal running on http://localhost:%d", candidate)
        server.serve_forever()
        return
    raise OSError(errno.EADDRINUSE, f"no free port in {port}-{port + attempts - 1}")


if __name__ == "__main__":
    load_dotenv()
    config = PortalConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    serve(create_app(config), config.host, config.port, config.port_attempts)
