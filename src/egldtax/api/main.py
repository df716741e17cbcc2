import logging
import traceback
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from egldtax.api.progress import router as progress_router
from egldtax.api.transactions import router as transactions_router
from egldtax.api.validation import MISSING_PARAMETERS
from egldtax.config import settings
from egldtax.container import Container
from egldtax.exceptions import EgldTaxError, InvalidRequestError, RequestCancelledError

logger = logging.getLogger("egldtax.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(level=settings.log_level.upper())
    container = Container()
    app.state.container = container
    yield
    http_client = container.http_client()
    await http_client.close()


app = FastAPI(title="EGLD Tax", version="0.1.0", lifespan=lifespan)


@app.exception_handler(InvalidRequestError)
async def invalid_request_handler(request: Request, exc: InvalidRequestError):
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected malformed body on %s: %s", request.url.path, exc.errors()[:1])
    return JSONResponse(status_code=400, content={"error": MISSING_PARAMETERS})


@app.exception_handler(RequestCancelledError)
async def cancelled_handler(request: Request, exc: RequestCancelledError):
    logger.info("Client went away on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=499, content={"error": str(exc)})


@app.exception_handler(EgldTaxError)
async def egldtax_error_handler(request: Request, exc: EgldTaxError):
    logger.error("Request %s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"error": str(exc)})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    tb = traceback.format_exception(type(exc), exc, exc.__traceback__)
    logger.error("Unhandled error on %s %s:\n%s", request.method, request.url.path, "".join(tb))
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(transactions_router)
app.include_router(progress_router)


@app.get("/api/health")
async def health():
    return {"status": "ok", "version": "0.1.0"}
