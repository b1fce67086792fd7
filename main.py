"""
TripScout – main application entry point

* Flask app exposing the travel planner as JSON endpoints under `/travel`.
* The OpenAI transport and the Google Maps photo service are built once in
  `create_app()` and stored in `app.config`; routes read them from there.
"""

import logging

from flask import Flask
from flask_cors import CORS
from dotenv import load_dotenv

# --------------------------------------------------------------------------- #
# Environment & logging
# --------------------------------------------------------------------------- #
load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

from tripscout.api.config import get_cors_origins, get_port  # noqa: E402
from tripscout.api.llm import create_transport  # noqa: E402
from tripscout.api.photos import PhotoService  # noqa: E402
from tripscout.routes.travel import create_travel_blueprint  # noqa: E402


def create_app(transport=None, photos=None):
    """Build the Flask application.

    Args:
        transport: chat transport; built from the environment when omitted
        photos: PhotoService; built from the environment when omitted

    Returns:
        Configured Flask app
    """
    app = Flask(__name__)

    app.config["TRANSPORT"] = transport if transport is not None else create_transport()
    app.config["PHOTOS"] = photos if photos is not None else PhotoService.from_config()
    if app.config["PHOTOS"] is None:
        logger.warning("Google Maps not configured; photo enrichment disabled")

    # CORS for the browser front-end
    CORS(app, origins=get_cors_origins())

    app.register_blueprint(create_travel_blueprint())
    logger.info("Travel blueprint registered")
    return app


# --------------------------------------------------------------------------- #
# Local development runner ( `python main.py` )
# --------------------------------------------------------------------------- #
if __name__ == "__main__":
    port = get_port()
    logger.info("Starting travel app on http://localhost:%d", port)
    create_app().run(host="0.0.0.0", port=port, debug=False)
