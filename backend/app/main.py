# app/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Your configuration and DB
from app.config import settings
from app.core.db import init_db, close_db
from app.core.bootstrap import check_oauth_settings
from app.core.errors import register_exception_handlers

from app.api import spa
from app.api.v1.routers import auth, ideas, votes, stats, admin

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

register_exception_handlers(app)

@app.on_event("startup")
async def on_startup():
    check_oauth_settings()
    await init_db()
    logger.info("[startup] %s ready (admins in allow-list: %d)", settings.APP_NAME, len(settings.admin_ids))

@app.on_event("shutdown")
async def on_shutdown():
    await close_db()

# REST
app.include_router(auth.router, prefix="/api/v1")
app.include_router(ideas.router, prefix="/api/v1")
app.include_router(votes.router, prefix="/api/v1")
app.include_router(stats.router, prefix="/api/v1")
app.include_router(admin.router, prefix="/api/v1")

@app.get("/healthz")
def healthz():
    return {"ok": True}

# Client shell fallback must stay last: it matches every GET path
app.include_router(spa.router)
