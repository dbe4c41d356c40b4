import time
import datetime
from datetime import timezone
START_TIME = time.time()

import logging
logging.basicConfig(level=logging.INFO)

from contextlib import asynccontextmanager
import httpx

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from superagent.config import (
    APP_SERVER_PORT, CORS_ALLOWED_ORIGINS, ENVIRONMENT, INTEGRATIONS_CONFIG,
    OPENAI_API_KEY, OPENAI_API_BASE_URL, OPENAI_MODEL_NAME, SLIDES_MODEL_NAME,
    COMPOSIO_API_KEY, PPT_CONVERTER_URL, PPT_CONVERTER_TIMEOUT,
)
from superagent.auth.utils import IdentityCookieMiddleware, get_user_id_from_cookie
from superagent.chat.routes import router as chat_router
from superagent.integrations.routes import router as integrations_router
from superagent.slides.routes import router as slides_router
from superagent.llm import LLMClient
from superagent.slides.export import PresentationConverter
from superagent.toolkits.platform import ToolPlatform

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app_instance: FastAPI):
    logger.info(f"[LIFESPAN] App startup (ENVIRONMENT={ENVIRONMENT})...")
    http_client = httpx.AsyncClient()
    app_instance.state.llm_client = LLMClient(
        api_key=OPENAI_API_KEY,
        base_url=OPENAI_API_BASE_URL,
        model_name=OPENAI_MODEL_NAME,
        structured_model_name=SLIDES_MODEL_NAME,
    )
    app_instance.state.tool_platform = ToolPlatform(api_key=COMPOSIO_API_KEY)
    app_instance.state.presentation_converter = PresentationConverter(
        http_client, PPT_CONVERTER_URL, timeout=PPT_CONVERTER_TIMEOUT
    )
    logger.info("[LIFESPAN] App startup complete.")
    yield
    logger.info("[LIFESPAN] App shutdown sequence initiated...")
    await http_client.aclose()
    logger.info("[LIFESPAN] App shutdown complete.")

app = FastAPI(title="Super Agent Server", version="1.0.0", docs_url="/docs", redoc_url="/redoc", lifespan=lifespan)

# Added first so that CORS wraps it and 401/redirect responses still carry CORS headers
app.add_middleware(IdentityCookieMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

app.include_router(chat_router)
app.include_router(slides_router)
app.include_router(integrations_router)

@app.get("/", tags=["General"])
async def root(request: Request):
    return {"message": "Super Agent Server Operational.", "userId": get_user_id_from_cookie(request)}

@app.get("/signin", tags=["General"])
async def signin():
    return {
        "message": "Sign in by connecting an integration.",
        "integrations": [
            {"platform": key, "display_name": config["display_name"], "endpoint": f"/api/connection/{key}"}
            for key, config in INTEGRATIONS_CONFIG.items()
        ],
    }

@app.get("/health", tags=["General"])
async def health():
    return {
        "status": "healthy",
        "timestamp": datetime.datetime.now(timezone.utc).isoformat(),
        "services": {
            "llm": OPENAI_MODEL_NAME,
            "composio": "configured" if COMPOSIO_API_KEY else "not_configured",
            "ppt_converter": "configured" if PPT_CONVERTER_URL else "not_configured",
        }
    }

END_TIME = time.time()
logger.info(f"[APP_PY_LOADED] Super Agent app.py loaded in {END_TIME - START_TIME:.2f} seconds.")

if __name__ == "__main__":
    import uvicorn
    log_config = uvicorn.config.LOGGING_CONFIG.copy()
    log_config["formatters"]["access"]["fmt"] = '%(asctime)s %(levelname)s %(client_addr)s - "[SUPERAGENT_ACCESS] %(request_line)s" %(status_code)s'
    log_config["formatters"]["default"]["fmt"] = '%(asctime)s %(levelname)s [%(name)s] [SUPERAGENT_DEFAULT] %(message)s'
    uvicorn.run("superagent.app:app", host="127.0.0.1", port=APP_SERVER_PORT, lifespan="on", reload=False, workers=1, log_config=log_config)
