from datetime import datetime
from typing import Any, Optional, Union
from zoneinfo import ZoneInfo

import httpx

from order_intake.config import Settings
from order_intake.errors import NotificationError, UpstreamWriteError
from order_intake.models import OrderRequest


async def create_order_row(client: httpx.AsyncClient, settings: Settings, order: OrderRequest) -> dict:
    url = f"{settings.baserow_url}/api/database/rows/table/{settings.baserow_table_id}/"
    headers = {"Authorization": f"Token {settings.baserow_api_token}"}

    response = await client.post(
        url,
        params={"user_field_names": "true"},
        json=order.to_row(),
        headers=headers,
    )
    if not response.is_success:
        raise UpstreamWriteError(response.status_code, response.text)

    return response.json()


def format_price(price: Union[int, float, str]) -> str:
    if isinstance(price, float) and price.is_integer():
        return str(int(price))
    return str(price)


def build_order_message(order: OrderRequest, order_id: Any, now: Optional[datetime] = None, tz: str = "Europe/Moscow") -> str:
    """Markdown text for the chat notification. Timestamp follows the ru-RU locale layout."""
    if now is None:
        now = datetime.now(ZoneInfo(tz))
    else:
        now = now.astimezone(ZoneInfo(tz))
    timestamp = now.strftime("%d.%m.%Y, %H:%M:%S")

    return (
        "🛒 *Новый заказ!*\n\n"
        f"📦 Продукт: {order.product_name}\n"
        f"💰 Цена: {format_price(order.price)} ₽\n"
        f"📧 Email: {order.email}\n"
        f"🆔 ID: {order_id}\n"
        f"⏰ Время: {timestamp}"
    )


async def send_order_notification(client: httpx.AsyncClient, settings: Settings, text: str) -> httpx.Response:
    # Response status is not inspected, only transport failures are reported.
    url = f"{settings.telegram_api_url}/bot{settings.tg_bot_token}/sendMessage"
    payload = {
        "chat_id": settings.tg_chat_id,
        "text": text,
        "parse_mode": "Markdown",
    }
    try:
        return await client.post(url, json=payload)
    except httpx.HTTPError as e:
        raise NotificationError(f"{type(e).__name__}: {e}") from e
