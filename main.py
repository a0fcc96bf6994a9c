from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from palette_atlas import __version__
from palette_atlas.api.v1 import router as v1_router
from palette_atlas.schemas import HealthResponse
from palette_atlas.utils.logging import get_logger

# Configure logging sink once at startup
get_logger()

app = FastAPI(
    title="Palette Atlas",
    description="Image palette extraction and hue grid bucketing for named colors",
    version=__version__
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"]
)

app.include_router(v1_router)


@app.get("/healthz", response_model=HealthResponse)
def health_check():
    """Health check endpoint"""
    return HealthResponse(ok=True, version=__version__, service="palette-atlas")


@app.get("/")
def root():
    """Root endpoint"""
    return {
        "message": "Palette Atlas API",
        "version": __version__,
        "docs": "/docs"
    }
