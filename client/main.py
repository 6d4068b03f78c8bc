from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hooddeals.api.routes_auth import router as auth_router
from hooddeals.api.routes_listings import router as listings_router
from hooddeals.api.routes_profile import router as profile_router
from hooddeals.api.routes_inbox import router as inbox_router
from hooddeals.api.routes_conversation import router as conversation_router
from hooddeals.api.routes_conversation import close_all_screens

from hooddeals.core.config_loader import settings
from hooddeals.core.logger import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # abort in-flight conversation requests
    close_all_screens()
    logger.info("gateway stopped")


app = FastAPI(
    title="Hood Deals Client Gateway",
    description="Device-side state and screens for the Hood Deals marketplace",
    version="1.0.0",
    lifespan=lifespan,
)

# -------------------------------------------------------------
# CORS
# -------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # the UI shell is served from the device
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# -------------------------------------------------------------
# ROUTES
# -------------------------------------------------------------
app.include_router(auth_router)
app.include_router(listings_router)
app.include_router(profile_router)
app.include_router(inbox_router)
app.include_router(conversation_router)


# -------------------------------------------------------------
# ROOT ENDPOINT
# -------------------------------------------------------------
@app.get("/")
def root():
    return {
        "status": "ok",
        "message": "Hood Deals client gateway is running",
        "backend": settings.API_BASE_URL,
        "env": settings.environment
    }


# -------------------------------------------------------------
# RUN LOCAL
# -------------------------------------------------------------
if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=settings.environment == "development"
    )
