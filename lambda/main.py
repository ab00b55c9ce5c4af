from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from mangum import Mangum
from models import *
from errors import InputError
import time
from utils import logging
import lookup_service

# FASTAPI app and AWS Lambda handler
app = FastAPI()
handler = Mangum(app)

MISSING_TEXT_ERROR = "Missing text input"
LOOKUP_FAILED_ERROR = "Dictionary lookup failed"


@app.middleware("http")
async def log_requests(request: Request, call_next):
    # Generate a request ID for tracking
    logging.set_request_id()

    # Log the incoming request
    start_time = time.time()
    logging.info(f"Incoming request: {request.method} {request.url}")

    try:
        # Process the request
        response = await call_next(request)

        # Log the completed request
        process_time = time.time() - start_time
        logging.info(f"Completed request: {request.method} {request.url} with {response.status_code} in {process_time:.2f} seconds")
        response.headers["X-Request-ID"] = logging.get_request_id()

        return response
    finally:
        # Clear the request ID after the request is complete
        logging.clear_request_id()


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    # Log the exception with full details
    logging.exception(f"Unhandled exception at {request.method} {request.url.path} - {str(exc)}")

    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error=LOOKUP_FAILED_ERROR, details=str(exc)).model_dump(),
    )


@app.exception_handler(InputError)
async def input_error_handler(request: Request, exc: InputError):
    logging.warning(f"Rejected request at {request.method} {request.url.path} - {str(exc)}")
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error=MISSING_TEXT_ERROR).model_dump(exclude_none=True),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # A body without a usable "text" string is the same as no text at all
    return await input_error_handler(request, InputError(str(exc.errors())))


@app.post(
    "/api/dictionary-lookup",
    response_model=LookupResult,
    response_model_exclude_unset=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def dictionary_lookup(req: LookupRequest):
    if not req.text:
        raise InputError(MISSING_TEXT_ERROR)
    try:
        return await lookup_service.lookup(req.text)
    except Exception as e:
        logging.exception(f"Dictionary lookup failed for '{req.text}': {str(e)}")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error=LOOKUP_FAILED_ERROR, details=str(e)).model_dump(),
        )
