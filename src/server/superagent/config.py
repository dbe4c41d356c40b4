import os
from dotenv import load_dotenv
import logging

# --- Environment Loading Logic ---
ENVIRONMENT = os.getenv('ENVIRONMENT', 'dev-local')
logging.info(f"[Config] Initializing configuration for ENVIRONMENT='{ENVIRONMENT}'")

server_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

if ENVIRONMENT == 'dev-local':
    # Prefer .env.local, fall back to .env
    dotenv_local_path = os.path.join(server_root, '.env.local')
    dotenv_path = os.path.join(server_root, '.env')
    load_path = dotenv_local_path if os.path.exists(dotenv_local_path) else dotenv_path
    if os.path.exists(load_path):
        load_dotenv(dotenv_path=load_path)
elif ENVIRONMENT == 'selfhost':
    dotenv_path = os.path.join(server_root, '.env.selfhost')
    load_dotenv(dotenv_path=dotenv_path)

IS_PRODUCTION = ENVIRONMENT == 'production'

# --- Server ---
APP_SERVER_PORT = int(os.getenv("APP_SERVER_PORT", 5000))
APP_BASE_URL = os.getenv("APP_BASE_URL", "http://localhost:3000")
CORS_ALLOWED_ORIGINS = [
    origin.strip() for origin in os.getenv("CORS_ALLOWED_ORIGINS", APP_BASE_URL).split(",") if origin.strip()
]

# --- Identity cookie ---
USER_ID_COOKIE_NAME = os.getenv("USER_ID_COOKIE_NAME", "superagent_user_id")
USER_ID_COOKIE_MAX_AGE = 60 * 60 * 24 * 365

# --- LLM ---
OPENAI_API_BASE_URL = os.getenv("OPENAI_API_BASE_URL", "http://localhost:11434/v1/")
OPENAI_MODEL_NAME = os.getenv("OPENAI_MODEL_NAME", "qwen3:4b")
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "ollama")
# Structured slide generation may run on a stronger model than the chat agent
SLIDES_MODEL_NAME = os.getenv("SLIDES_MODEL_NAME", OPENAI_MODEL_NAME)

AGENT_MAX_STEPS = int(os.getenv("AGENT_MAX_STEPS", 50))
SHEETS_AGENT_MAX_STEPS = int(os.getenv("SHEETS_AGENT_MAX_STEPS", 10))

# --- Composio ---
COMPOSIO_API_KEY = os.getenv("COMPOSIO_API_KEY")
COMPOSIO_AUTH_CONFIG_ID = os.getenv("COMPOSIO_AUTH_CONFIG_ID")

# Integrations a browser can connect from the sign-in page.
# The auth config id is read from `auth_config_env`, falling back to COMPOSIO_AUTH_CONFIG_ID.
INTEGRATIONS_CONFIG = {
    "google-sheet": {
        "display_name": "Google Sheets",
        "toolkit": "GOOGLESHEETS",
        "auth_config_env": "GOOGLESHEETS_AUTH_CONFIG_ID",
    },
    "google-docs": {
        "display_name": "Google Docs",
        "toolkit": "GOOGLEDOCS",
        "auth_config_env": "GOOGLEDOCS_AUTH_CONFIG_ID",
    },
}
DEFAULT_INTEGRATION = "google-sheet"

# --- Presentation export ---
PPT_CONVERTER_URL = os.getenv("PPT_CONVERTER_URL")
PPT_CONVERTER_TIMEOUT = float(os.getenv("PPT_CONVERTER_TIMEOUT", 120))
