from enum import Enum

from pydantic import BaseModel


class PaymentMethod(str, Enum):
    cod = "cod"
    online = "online"


class CartItemAdjust(BaseModel):
    product_id: int
    delta: int = 1


class CheckoutRequest(BaseModel):
    delivery_address: str = ""
    phone: str = ""
    payment_method: PaymentMethod = PaymentMethod.cod
    notes: str | None = None


class CartLineResponse(BaseModel):
    product_id: int
    name: str
    price: int
    quantity: int
    line_total: int


class CartResponse(BaseModel):
    items: list[CartLineResponse]
    total_items: int
    subtotal: int
    delivery_fee: int
    total: int


class OrderConfirmationResponse(BaseModel):
    total: int
    total_items: int
    payment_method: PaymentMethod
    message: str
