import logging

from fastapi import APIRouter, HTTPException, Query, Request, status

from arogyamix.schemas.cart import CartItemAdjust, CheckoutRequest
from arogyamix.services.cart import CartLedger, CheckoutError, cart_store
from arogyamix.services.catalog import get_product, list_categories, search_products
from arogyamix.utils.response import create_response, handle_exception

router = APIRouter(prefix="/store", tags=["Store"])
logger = logging.getLogger(__name__)

CART_SESSION_KEY = "cart_id"


def _session_cart(request: Request) -> CartLedger:
    cart_id, ledger = cart_store.get_or_create(request.session.get(CART_SESSION_KEY))
    request.session[CART_SESSION_KEY] = cart_id
    return ledger


def _existing_cart(request: Request) -> CartLedger:
    """The session's ledger if one is live, else an unregistered empty ledger."""
    ledger = cart_store.get(request.session.get(CART_SESSION_KEY))
    if ledger is None:
        request.session.pop(CART_SESSION_KEY, None)
        return CartLedger()
    return ledger


@router.get("/products")
def list_products(
    search: str | None = Query(None, description="Case-insensitive match on product name."),
    category: str | None = Query(None, description="Category id; 'all' disables the filter."),
):
    try:
        matching = search_products(search=search)
        products = search_products(search=search, category=category)
        return create_response(
            message="Products fetched",
            data={
                "count": len(products),
                "products": [product.model_dump() for product in products],
                "categories": [item.model_dump() for item in list_categories(matching)],
            },
        )
    except Exception as exc:
        return handle_exception(exc)


@router.get("/products/{product_id}")
def get_product_detail(product_id: int):
    try:
        product = get_product(product_id)
        if not product:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
        return create_response(message="Product fetched", data=product.model_dump())
    except Exception as exc:
        return handle_exception(exc)


@router.get("/cart")
def view_cart(request: Request):
    try:
        ledger = _existing_cart(request)
        return create_response(message="Cart fetched", data=ledger.summary().model_dump())
    except Exception as exc:
        return handle_exception(exc)


@router.post("/cart/items")
def adjust_cart_item(body: CartItemAdjust, request: Request):
    try:
        product = get_product(body.product_id)
        if not product:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
        if body.delta > 0 and not product.in_stock:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Product is out of stock")

        ledger = _session_cart(request) if body.delta > 0 else _existing_cart(request)
        quantity = ledger.adjust(body.product_id, body.delta)
        logger.debug("Cart product=%s delta=%s quantity=%s", body.product_id, body.delta, quantity)
        return create_response(message="Cart updated", data=ledger.summary().model_dump())
    except Exception as exc:
        return handle_exception(exc)


@router.delete("/cart/items/{product_id}")
def remove_cart_item(product_id: int, request: Request):
    try:
        ledger = _existing_cart(request)
        ledger.remove(product_id)
        return create_response(message="Item removed", data=ledger.summary().model_dump())
    except Exception as exc:
        return handle_exception(exc)


@router.delete("/cart")
def clear_cart(request: Request):
    try:
        cart_store.discard(request.session.pop(CART_SESSION_KEY, None))
        return create_response(message="Cart cleared", data=CartLedger().summary().model_dump())
    except Exception as exc:
        return handle_exception(exc)


@router.post("/cart/checkout")
def checkout(body: CheckoutRequest, request: Request):
    try:
        ledger = _existing_cart(request)
        try:
            confirmation = ledger.checkout(
                delivery_address=body.delivery_address,
                phone=body.phone,
                payment_method=body.payment_method,
                notes=body.notes,
            )
        except CheckoutError as exc:
            logger.info("Checkout rejected on %s: %s", exc.field, exc.message)
            return create_response(
                message=exc.message,
                data={"field": exc.field},
                status_code=status.HTTP_400_BAD_REQUEST,
            )
        return create_response(message="Order placed successfully!", data=confirmation.model_dump())
    except Exception as exc:
        return handle_exception(exc)
