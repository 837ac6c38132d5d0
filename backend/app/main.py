# app/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.core.db import init_db, close_db
from app.core.exceptions import install_exception_handlers
from app.core.bootstrap import ensure_default_admin

from app.api.v1.routers import users, profiles

logger = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.APP_NAME)

# CORS (with Cookie)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Error kinds -> {"errors": ...} bodies
install_exception_handlers(app)

@app.on_event("startup")
async def on_startup():
    # Tables are created directly only in dev; elsewhere run Aerich migrations
    await init_db(generate_schemas=settings.env == "dev")
    # Ensure there's a default admin account on first run
    await ensure_default_admin()
    logger.info("[startup] %s ready (env=%s)", settings.APP_NAME, settings.env)

@app.on_event("shutdown")
async def on_shutdown():
    await close_db()

# REST
app.include_router(users.router, prefix="/api")
app.include_router(profiles.router, prefix="/api")

@app.get("/healthz")
def healthz():
    return {"ok": True}
