# wellness/main.py
"""
App FastAPI: CORS, lifespan (startup/shutdown), routers + middleware de trazas.
"""
import logging, time

# Cargar .env ANTES de importar settings / routers
from dotenv import load_dotenv, find_dotenv
load_dotenv(find_dotenv(usecwd=True), override=False)

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .db.mongo import connect_to_mongo, disconnect_from_mongo
from .core.config import settings
from .telemetry.logging import setup_logging
from .models.user import UserRepo
from .routes import auth, users, assessments, resources, journal, appointments, professionals

setup_logging()
http_logger = logging.getLogger("wellness.http")

@asynccontextmanager
async def lifespan(app: FastAPI):
    db = connect_to_mongo()
    if settings.ADMIN_EMAIL and settings.ADMIN_PASSWORD:
        await UserRepo(db).ensure_admin(settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)
    yield
    disconnect_from_mongo()

app = FastAPI(title="Student Wellness API", version="0.1.0", lifespan=lifespan)

# ---------------- CORS ----------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------- Middleware de trazas ----------------
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    try:
        response = await call_next(request)
        dur = round(time.time() - start, 4)
        http_logger.info(f"{request.method} {request.url.path} -> {response.status_code} in {dur}s")
        return response
    except Exception as e:
        dur = round(time.time() - start, 4)
        http_logger.exception(f"{request.method} {request.url.path} EXC after {dur}s: {e}")
        raise

# ---------------- Healthcheck ----------------
@app.get("/health", tags=["misc"])
async def health():
    return {"ok": True}

# ---------------- Routers ----------------
app.include_router(auth.router,         prefix="/auth",         tags=["auth"])
app.include_router(users.router,        prefix="/users",        tags=["users"])
app.include_router(assessments.router,  prefix="/assessments",  tags=["assessments"])
app.include_router(resources.router,    prefix="/resources",    tags=["resources"])
app.include_router(journal.router,      prefix="/journal",      tags=["journal"])
app.include_router(appointments.router, prefix="/appointments", tags=["appointments"])
app.include_router(professionals.router, prefix="/professionals", tags=["professionals"])
