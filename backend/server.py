from fastapi import FastAPI, APIRouter, Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response
from starlette.concurrency import run_in_threadpool
from dotenv import load_dotenv
import os
import logging
from pathlib import Path
from pydantic import BaseModel
from typing import Callable, Dict, Optional
import typer

ROOT_DIR = Path(__file__).parent
load_dotenv(ROOT_DIR / '.env')

# Server-Konfiguration
PORT = os.environ.get('PORT', '8080')
LISTEN_ADDR = os.environ.get('LISTEN_ADDR', '')
CORS_ORIGINS = [o.strip() for o in os.environ.get('CORS_ORIGINS', '*').split(',') if o.strip()]
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

SERVICE_NAME = "ddd-parser-api"
API_VERSION = "1.0.0"

logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

from dddparser.envelope import build_error_response, build_response
from dddparser.errors import PayloadError
from dddparser.extractor import extract_payload
from dddparser.models import DispatchOutcome
from dddparser.service import ParserService, get_parser_service

# Create the main app
app = FastAPI(title="DDD Parser API", version=API_VERSION)
api_router = APIRouter()

# ============== Models ==============

class HealthResponse(BaseModel):
    status: str = "ok"
    service: str = SERVICE_NAME

class ServiceInfo(BaseModel):
    service: str
    version: str
    endpoints: Dict[str, str]

SERVICE_INFO = ServiceInfo(
    service="DDD Parser API",
    version=API_VERSION,
    endpoints={
        "POST /parse": "Auto-detect and parse Card or VU data",
        "POST /parse/card": "Parse as Card (TLV format)",
        "POST /parse/vu": "Parse as VU (TV format)",
        "GET /health": "Health check",
    },
)

# ============== CORS ==============

CORS_HEADERS = {
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Allow-Headers": (
        "Content-Type, Content-Length, Accept-Encoding, X-CSRF-Token, Authorization, "
        "accept, origin, Cache-Control, X-Requested-With"
    ),
    "Access-Control-Allow-Methods": "POST, OPTIONS, GET, PUT, DELETE",
}

def _allowed_origin(request: Request) -> str:
    if "*" in CORS_ORIGINS:
        return "*"
    origin = request.headers.get("origin", "")
    return origin if origin in CORS_ORIGINS else ""

@app.middleware("http")
async def cors_middleware(request: Request, call_next):
    """CORS-Header setzen, OPTIONS direkt mit 204 beantworten"""
    if request.method == "OPTIONS":
        response = Response(status_code=204)
    else:
        response = await call_next(request)

    origin = _allowed_origin(request)
    if origin:
        response.headers["Access-Control-Allow-Origin"] = origin
    response.headers.update(CORS_HEADERS)
    return response

# ============== Error Handling ==============

def _json_envelope(envelope) -> JSONResponse:
    status_code, body = envelope
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))

@app.exception_handler(PayloadError)
async def payload_error_handler(request: Request, exc: PayloadError):
    logger.info(f"{request.method} {request.url.path}: {exc.kind.value}: {exc.detail}")
    return _json_envelope(build_error_response(exc))

# ============== Parse Routes ==============

async def _parse_request(request: Request, operation: Callable[[bytes], DispatchOutcome]) -> JSONResponse:
    payload = await extract_payload(request)
    # Decoder sind CPU-gebunden und synchron
    outcome = await run_in_threadpool(operation, payload)
    return _json_envelope(build_response(outcome))

@api_router.post("/parse")
async def parse(request: Request, service: ParserService = Depends(get_parser_service)):
    """
    Format automatisch erkennen und parsen

    Erst als Fahrerkarte (TLV), bei Fehler als VU-Download (TV).
    Daten als multipart/form-data (Feld "file") oder als Roh-Body.
    """
    return await _parse_request(request, service.parse)

@api_router.post("/parse/card")
async def parse_card(request: Request, service: ParserService = Depends(get_parser_service)):
    """Nur als Fahrerkarte parsen (TLV)"""
    return await _parse_request(request, service.parse_card)

@api_router.post("/parse/vu")
async def parse_vu(request: Request, service: ParserService = Depends(get_parser_service)):
    """Nur als VU-Download parsen (TV)"""
    return await _parse_request(request, service.parse_vu)

# ============== Status Routes ==============

@api_router.get("/", response_model=ServiceInfo)
async def root():
    return SERVICE_INFO

@api_router.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse()

# Include router
app.include_router(api_router)

# ============== CLI ==============

def main(
    port: Optional[int] = typer.Option(None, "--port", help="Port to listen on [env: PORT, default 8080]"),
    addr: str = typer.Option(LISTEN_ADDR, "--addr", help="Address to listen on (empty = all interfaces)"),
):
    """DDD Parser API starten"""
    import uvicorn
    if port is None:
        port = int(PORT)
    logger.info(f"DDD Parser API listening on {addr}:{port}")
    uvicorn.run(app, host=addr or "0.0.0.0", port=port, log_level=LOG_LEVEL.lower())

def run():
    typer.run(main)

if __name__ == "__main__":
    run()
