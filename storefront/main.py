"""
Storefront Application

Product browsing, a session cart and a pay-on-delivery checkout, served
as a JSON API for the storefront UI.
"""

import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Load environment variables before settings are read
load_dotenv(os.path.join(os.path.dirname(__file__), "..", ".env"))

from .core.config import settings
from .core.dependencies import get_session_manager
from .core.events import log_store_event
from .routes import session_router, products_router, cart_router, checkout_router

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info("Storefront starting up...")
    logger.info(f"Remote order API: {settings.order_api_url or 'disabled (simulated placement)'}")
    logger.info(
        f"Shipping: {settings.currency} {settings.shipping_fee} below "
        f"{settings.free_shipping_threshold}, free at or above"
    )

    manager = get_session_manager()
    manager.events.subscribe(log_store_event)

    yield

    logger.info("Storefront shutting down...")
    manager.events.unsubscribe(log_store_event)
    await manager.placement.close()


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Storefront cart and checkout API",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(session_router)
app.include_router(products_router)
app.include_router(cart_router)
app.include_router(checkout_router)


@app.get("/")
async def home():
    """Storefront API index"""
    return {
        "message": "Storefront API",
        "docs": "/docs",
        "endpoints": {
            "session": "/api/session",
            "products": "/api/products",
            "cart": "/api/cart",
            "checkout": "/api/checkout",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "storefront"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "storefront.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
