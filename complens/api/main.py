"""
CompLens FastAPI main
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from complens import __version__
from complens.config import settings
from complens.log import setup_logging
from complens.api.routes import router

setup_logging()

app = FastAPI(
    title="CompLens",
    description="Comparable-listing price estimation",
    version=__version__,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, prefix="/api/v1")


@app.get("/")
async def root():
    """Health check"""
    return {
        "name": "CompLens",
        "status": "running",
        "version": __version__,
    }


@app.get("/health")
async def health():
    """Detailed health check"""
    return {
        "status": "healthy",
        "env": settings.ENV,
        "missing_year_policy": settings.MISSING_YEAR_POLICY,
        "estimate_bracket_by": settings.ESTIMATE_BRACKET_BY,
    }
