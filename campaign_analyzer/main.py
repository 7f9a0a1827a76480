from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from campaign_analyzer.api import analyze, pages
from campaign_analyzer.core.config import settings
from campaign_analyzer.services.analysis_service import get_analysis_service
import logging

# Configurar logging
logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    if get_analysis_service.cache_info().currsize:
        logger.info("Fechando cliente OpenAI")
        await get_analysis_service().aclose()
        get_analysis_service.cache_clear()


app = FastAPI(title=settings.APP_TITLE, lifespan=lifespan)

app.include_router(pages.router, tags=["Pages"])
app.include_router(analyze.router, prefix="/api", tags=["Analyze"])


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail
    if exc.status_code == 405:
        detail = "Method not allowed"
    return JSONResponse(status_code=exc.status_code, content={"error": str(detail)}, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Erro inesperado em {request.url.path}: {str(exc)}")
    return JSONResponse(status_code=500, content={"error": analyze.GENERIC_ERROR})


@app.get("/health")
async def health():
    return {"status": "ok"}
