"""FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from alttext.api import apply, generate, store, webhooks
from alttext.config import get_settings

settings = get_settings()


app = FastAPI(
    title="Alt Text Studio API",
    description="Credit-metered AI alt text generation for Squarespace stores",
    version="0.1.0",
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://localhost:3001",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Register routers
app.include_router(generate.router)
app.include_router(apply.router)
app.include_router(store.router)
app.include_router(webhooks.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
