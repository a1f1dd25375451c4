import json
import logging
import math
import os
import uuid
from typing import Any

import httpx
from fastapi import Depends, FastAPI, Request, Response
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from order_intake.client import build_order_message, create_order_row, send_order_notification
from order_intake.config import Settings, get_settings
from order_intake.errors import (
    ClientInputError,
    ConfigurationError,
    MethodNotAllowedError,
    OrderIntakeError,
)
from order_intake.models import ErrorResponse, OrderRequest, OrderResponse

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("order_intake")

ORDER_PATHS = ("/submit-order", "/.netlify/functions/submit-order")
ROUTE_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}
PREFLIGHT_HEADERS = {
    **CORS_HEADERS,
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}

app = FastAPI(title="order-intake")


@app.middleware("http")
async def add_correlation_id(request: Request, call_next):
    correlation_id = request.headers.get("X-Correlation-Id")
    if not correlation_id:
        correlation_id = str(uuid.uuid4())

    # Store in request state for access in endpoints
    request.state.correlation_id = correlation_id

    response = await call_next(request)
    response.headers["X-Correlation-Id"] = correlation_id
    return response


@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    # Methods outside ROUTE_METHODS are rejected by routing before submit_order runs.
    if exc.status_code == 405 and request.url.path in ORDER_PATHS:
        return error_response(MethodNotAllowedError())
    return await http_exception_handler(request, exc)


@app.get("/health")
def health():
    return {"status": "ok", "service": "order-intake"}


def error_response(error: OrderIntakeError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content=ErrorResponse(error=error.message).model_dump(),
        headers=CORS_HEADERS,
    )


def _reject_constant(name: str):
    raise ClientInputError(f"Non-standard JSON constant {name}")


def parse_order(raw: bytes) -> OrderRequest:
    """Turn a raw request body into an OrderRequest.

    Malformed JSON is a client error, reported the same way as missing fields.
    """
    try:
        payload = json.loads(raw, parse_constant=_reject_constant)
    except ValueError as e:
        raise ClientInputError("Request body is not valid JSON") from e

    if not isinstance(payload, dict):
        raise ClientInputError("Request body is not a JSON object")

    email = payload.get("email")
    product_name = payload.get("productName")
    price = payload.get("price")

    if not email or not product_name or not price:
        raise ClientInputError("Missing email, productName or price")

    if not isinstance(email, str) or not isinstance(product_name, str):
        raise ClientInputError("email and productName must be strings")
    if isinstance(price, bool) or not isinstance(price, (int, float, str)):
        raise ClientInputError("price must be a number or a string")
    if isinstance(price, float) and not math.isfinite(price):
        raise ClientInputError("price must be a finite number")

    return OrderRequest(email=email, productName=product_name, price=price)


async def notify_order(client: httpx.AsyncClient, settings: Settings, order: OrderRequest, order_id: Any):
    """Best-effort chat notification. Failures are logged and never re-raised."""
    try:
        text = build_order_message(order, order_id, tz=settings.notify_timezone)
        await send_order_notification(client, settings, text)
        logger.info(f"Telegram notification sent for order {order_id}")
    except Exception as e:
        logger.error(f"Telegram notification error for order {order_id}: {e}")


async def process_order(order: OrderRequest, settings: Settings, correlation_id: str) -> Any:
    async with httpx.AsyncClient(timeout=None) as client:
        saved = await create_order_row(client, settings, order)
        order_id = saved.get("id")
        logger.info(f"Order {order_id} saved to Baserow, correlation_id {correlation_id}")

        if settings.notifier_configured:
            await notify_order(client, settings, order, order_id)

    return order_id


async def submit_order(request: Request, settings: Settings = Depends(get_settings)):
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=PREFLIGHT_HEADERS)

    correlation_id = request.state.correlation_id

    try:
        if request.method != "POST":
            raise MethodNotAllowedError(f"{request.method} is not accepted")

        order = parse_order(await request.body())

        if not settings.store_configured:
            raise ConfigurationError("Missing Baserow environment variables")

        logger.info(f"Processing order for product {order.product_name!r}, correlation_id {correlation_id}")
        order_id = await process_order(order, settings, correlation_id)

    except OrderIntakeError as e:
        if e.status_code >= 500:
            logger.error(f"Error processing order ({correlation_id}): {e}")
        else:
            logger.warning(f"Rejected request ({correlation_id}): {e}")
        return error_response(e)
    except Exception:
        logger.exception(f"Error processing order ({correlation_id})")
        return error_response(OrderIntakeError())

    return JSONResponse(
        status_code=200,
        content=OrderResponse(orderId=order_id).model_dump(),
        headers=CORS_HEADERS,
    )


for path in ORDER_PATHS:
    app.add_api_route(path, submit_order, methods=ROUTE_METHODS, include_in_schema=path == ORDER_PATHS[0])
