import logging
import os
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Add project root to path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from config.settings_loader import load_settings
from shared.state import (
    get_document,
    get_retention_service,
    get_settings_store,
    get_support_triage,
    reset_state,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 API Starting up...")
    get_retention_service().initialize(get_settings_store().get())
    document = get_document()
    logger.info(f"🎭 Document title: {document.title}")

    if get_support_triage().is_ready():
        logger.info("✅ AI support configured.")
    else:
        logger.warning("⚠️ AI support NOT configured (GEMINI_API_KEY missing). Chat will return 503.")

    yield

    logger.info("🛑 API Shutting down...")
    reset_state()


app = FastAPI(lifespan=lifespan)

# Enable CORS for Frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=load_settings()["server"]["cors_origins"],
    allow_origin_regex=r"http://localhost:(517\d|5555)",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# === Import and Include Routers ===
from routers import navigation as navigation_router
from routers import history as history_router
from routers import settings as settings_router
from routers import support as support_router
from routers import stream as stream_router
app.include_router(navigation_router.router)
app.include_router(history_router.router)
app.include_router(settings_router.router)
app.include_router(support_router.router)
app.include_router(stream_router.router)


@app.get("/health")
async def health_check():
    return {
        "status": "ok",
        "version": "1.0.0",
        "support_ready": get_support_triage().is_ready(),
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("api:app", host="0.0.0.0", port=8000, reload=True)
