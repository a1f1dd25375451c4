from pydantic import BaseModel, Field
from typing import Any, Union


class OrderRequest(BaseModel):
    email: str
    product_name: str = Field(alias="productName")
    price: Union[int, float, str]

    def to_row(self) -> dict:
        """Row payload keyed by the Baserow column names."""
        return {
            "Email client": self.email,
            "Product name": self.product_name,
            "Price": self.price,
        }


class OrderResponse(BaseModel):
    success: bool = True
    message: str = "Order submitted successfully"
    orderId: Any = None


class ErrorResponse(BaseModel):
    error: str
