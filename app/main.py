import os
import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.db.database import init_db, engine
from app.routes import health, chat, analyze_company, deep_dive

# Configurar logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Configuración de entorno
ENV = os.getenv("ENV", "development")
DEBUG = ENV == "development"

# Configurar orígenes permitidos para CORS
ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS",
    "http://localhost:3000"
).split(",")

# En producción, agregar el origen de producción
if ENV == "production":
    PROD_ORIGIN = os.getenv("FRONTEND_URL")
    if PROD_ORIGIN and PROD_ORIGIN not in ALLOWED_ORIGINS:
        ALLOWED_ORIGINS.append(PROD_ORIGIN)

logger.info(f"Starting application in {ENV} mode")
logger.info(f"Allowed CORS origins: {ALLOWED_ORIGINS}")

# Lifespan events
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting application...")
    init_db()
    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    engine.dispose()
    logger.info("Application shutdown complete")

app = FastAPI(
    title="Caprae AI Analyst",
    description="RAG API para análisis de empresas objetivo (chat, Executive Brief y deep dive)",
    version="0.1.0",
    # Sin debug=True: el ServerErrorMiddleware devolvería el traceback en texto plano
    docs_url="/api/docs" if DEBUG else None,  # Deshabilitar docs en producción por seguridad
    redoc_url="/api/redoc" if DEBUG else None,
    lifespan=lifespan,
)

# Configurar CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Todas las respuestas de error usan {"error": "..."}
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Invalid request body on {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body."},
    )


# Manejador global de errores
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Error in {request.url.path}: {exc}", exc_info=True)
    content = {"error": "An internal server error occurred."}
    if DEBUG:
        content["message"] = str(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
    )

# Incluir routers con prefijo /api
app.include_router(health.router, prefix="/api")
app.include_router(chat.router, prefix="/api")
app.include_router(analyze_company.router, prefix="/api")
app.include_router(deep_dive.router, prefix="/api")

# Endpoint raíz
@app.get("/")
async def root():
    return {
        "message": "Caprae AI Analyst API",
        "version": "0.1.0",
        "status": "running",
        "environment": ENV
    }
