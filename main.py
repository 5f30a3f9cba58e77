from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from medcrew.config.settings import settings
from medcrew.api.dependencies import register_exception_handlers
from medcrew.api.routes import router as medcrew_router
from medcrew.services.app_state import AppState
import logging

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    # Startup
    logger.info("Starting MedCrew AI Healthcare Assistant Service...")
    logger.info(f"Environment: {settings.environment}")
    if not settings.llm_api_key:
        logger.warning("LLM_API_KEY is not set; AI features will return fallback messages")

    # In-memory state for this process; lost on shutdown
    app.state.store = AppState()

    yield

    # Shutdown
    logger.info("Shutting down MedCrew AI Healthcare Assistant Service...")
    app.state.store = None


# Initialize FastAPI app
app = FastAPI(
    title="MedCrew AI - Healthcare Assistant",
    description="Symptom triage, appointment scheduling, patient profile, medication, consultation and health insight tools backed by a generative AI model.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Register routers
app.include_router(medcrew_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": settings.service_name,
        "version": "1.0.0",
        "dependencies": {
            "llm": "configured" if settings.llm_api_key else "not configured",
        },
    }


@app.get("/")
async def root():
    return {
        "message": "MedCrew AI - Healthcare Assistant Service",
        "description": "Single-session healthcare assistant demo; all state is in memory",
        "version": "1.0.0",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.environment == "development",
    )
