"""FridgeAI API - FastAPI application entry point."""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fridge_ai import FridgeAIError

from .config import get_settings
from .routes import state, recipes, favorites, workouts, profile

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

app = FastAPI(
    title="FridgeAI API",
    description="Fridge photo to recipe and workout recommendations",
    version="1.0.0",
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)

# Include routers
app.include_router(state.router)
app.include_router(recipes.router)
app.include_router(favorites.router)
app.include_router(workouts.router)
app.include_router(profile.router)


@app.exception_handler(FridgeAIError)
async def fridge_error_handler(request: Request, exc: FridgeAIError):
    """Return pipeline failures as their user-facing message."""
    return JSONResponse(status_code=exc.http_status, content={"detail": exc.user_message})


@app.get("/health")
async def health_check():
    """Health check endpoint for the API."""
    return {"status": "healthy", "service": "fridge-api"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "server.fridge_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
