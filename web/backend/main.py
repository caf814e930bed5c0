"""
FastAPI backend for the event certificate and credential designer

Serves stored designs, raster previews and PDF exports.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from event_canvas.errors import ConfigurationError
from web.backend.api import designs, export_api, preview
from web.backend.config import get_settings

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Event Canvas API",
    description="Design, preview and export certificates and credentials for events",
    version="1.0.0"
)

# CORS middleware - allow frontend to communicate
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    """Design, profile or subject data that cannot be exported is a client error."""
    logger.warning("Configuration error on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=422,
        content={"success": False, "error": str(exc)},
    )


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Event Canvas API",
        "version": "1.0.0",
        "docs": "/docs",
        "status": "running"
    }


@app.get("/health")
async def health():
    """Health check endpoint"""
    return {"status": "healthy"}


app.include_router(designs.router, prefix="/api/designs", tags=["designs"])
app.include_router(preview.router, prefix="/api/preview", tags=["preview"])
app.include_router(export_api.router, prefix="/api/export", tags=["export"])

if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.info("API documentation: http://localhost:8000/docs")
    uvicorn.run(app, host="0.0.0.0", port=8000)
