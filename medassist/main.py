import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from medassist.config import CORS_ALLOW_ORIGINS, LOG_LEVEL
from medassist.database import close_db, init_db
from medassist.routers import analyses, functions, patients, profile
from medassist.services.ai_gateway import GatewayError

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting MedAssist...")
    await init_db()
    logger.info("Database initialized")
    yield
    await close_db()
    logger.info("MedAssist shut down")


app = FastAPI(
    title="MedAssist",
    description="AI-assisted symptom analysis, treatment suggestions and record summaries for doctors",
    version="0.1.0",
    lifespan=lifespan,
)

# The gateway proxies answer their own CORS preflights; the REST API lives
# in a mounted sub-application with its own CORS middleware.
api = FastAPI(title="MedAssist API")
api.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


@api.exception_handler(GatewayError)
async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    logger.error("Gateway failure on %s: %s", request.url.path, exc.message)
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


api.include_router(patients.router)
api.include_router(analyses.router)
api.include_router(profile.router)

app.include_router(functions.router)
app.mount("/api", api)


@app.get("/health")
async def health():
    return {"status": "ok"}
