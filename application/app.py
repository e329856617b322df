import sys
from pathlib import Path

# Load environment variables FIRST, before any other imports
from dotenv import load_dotenv
load_dotenv()

# Add project root to path (for IDE compatibility when running directly)
project_root = Path(__file__).parent.parent.resolve()
project_root_str = str(project_root)

if sys.path and Path(sys.path[0]).name == 'application':
    sys.path[0] = project_root_str
elif project_root_str not in sys.path:
    sys.path.insert(0, project_root_str)

import logging
from datetime import timedelta

from quart import Quart
from quart_rate_limiter import RateLimiter
from quart_schema import QuartSchema, hide

from application.routes import actions_bp, content_bp
from application.routes.common.error_handlers import register_error_handlers
from common.config import config

# Configure root logging to both stdout and a file for debugging/triage.
# Default file is app-log.log in the current working directory; override with APP_LOG_FILE.
log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logging.basicConfig(
    level=config.LOG_LEVEL,
    format=log_format,
    handlers=[
        logging.StreamHandler(sys.stdout),
        logging.FileHandler(config.APP_LOG_FILE, mode="a"),
    ],
)

# httpx logs every request at INFO
logging.getLogger("httpx").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

if config.DEV_BYPASS_AUTH:
    logger.warning("DEVELOPMENT MODE: authentication bypass enabled")

app = Quart(__name__)
app.secret_key = config.SESSION_SECRET
app.config.update(
    SESSION_COOKIE_HTTPONLY=True,
    SESSION_COOKIE_SAMESITE="Lax",
    SESSION_COOKIE_SECURE=config.IS_PRODUCTION,
    PERMANENT_SESSION_LIFETIME=timedelta(days=7),
)

# Initialize rate limiter
RateLimiter(app)

QuartSchema(
    app,
    info={"title": "Content Dashboard", "version": "1.0.0"},
    tags=[
        {"name": "Content", "description": "Data file reads and batch commits"},
        {"name": "Actions", "description": "Publishing workflow status"},
    ],
)

register_error_handlers(app)

# Register blueprints
app.register_blueprint(content_bp)  # URL prefix already set in blueprint
app.register_blueprint(actions_bp)  # URL prefix already set in blueprint


@app.route("/favicon.ico")
@hide
def favicon() -> tuple[str, int]:
    return "", 200


@app.before_serving
async def startup() -> None:
    """Refuse to start without the required settings."""
    validation = config.validate_configuration()
    if not validation["valid"]:
        logger.error(
            f"Missing required environment variables: {', '.join(validation['missing'])}"
        )
        raise RuntimeError("Invalid service configuration")

    logger.info(
        f"Serving {config.CONTENT_REPO_OWNER}/{config.CONTENT_REPO_NAME}"
        f"@{config.CONTENT_BRANCH} ({config.CONTENT_DATA_DIR}/)"
    )
