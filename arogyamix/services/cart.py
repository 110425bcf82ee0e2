import logging
import threading
import time
import uuid
from collections import OrderedDict
from typing import Callable, Dict, List, Optional, Tuple

from arogyamix.config import settings
from arogyamix.schemas.cart import CartLineResponse, CartResponse, OrderConfirmationResponse, PaymentMethod
from arogyamix.schemas.product import Product
from arogyamix.services.catalog import CATALOG

logger = logging.getLogger(__name__)

MIN_PHONE_LENGTH = 10


class CheckoutError(ValueError):
    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class CartLedger:
    """
    Product id -> quantity for one shopper. Quantities are always positive:
    an adjustment that reaches zero removes the entry.

    Every read-modify-write on `_items` happens under the ledger's own lock.
    """

    def __init__(self, catalog: Optional[Dict[int, Product]] = None, delivery_fee: Optional[int] = None):
        self.catalog = CATALOG if catalog is None else catalog
        self.delivery_fee = settings.DELIVERY_FEE if delivery_fee is None else delivery_fee
        self._items: Dict[int, int] = {}
        self._lock = threading.RLock()

    @property
    def items(self) -> Dict[int, int]:
        with self._lock:
            return dict(self._items)

    def adjust(self, product_id: int, delta: int) -> int:
        with self._lock:
            new_quantity = max(0, self._items.get(product_id, 0) + delta)
            if new_quantity == 0:
                self._items.pop(product_id, None)
            else:
                self._items[product_id] = new_quantity
            return new_quantity

    def remove(self, product_id: int) -> None:
        with self._lock:
            self._items.pop(product_id, None)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def quantity(self, product_id: int) -> int:
        with self._lock:
            return self._items.get(product_id, 0)

    def total_items(self) -> int:
        with self._lock:
            return sum(self._items.values())

    def is_empty(self) -> bool:
        with self._lock:
            return not self._items

    def lines(self) -> List[CartLineResponse]:
        rows = []
        for product_id, quantity in self.items.items():
            product = self.catalog.get(product_id)
            if product is None:
                continue
            rows.append(
                CartLineResponse(
                    product_id=product.id,
                    name=product.name,
                    price=product.price,
                    quantity=quantity,
                    line_total=product.price * quantity,
                )
            )
        return rows

    def subtotal(self) -> int:
        return sum(line.line_total for line in self.lines())

    def total(self) -> int:
        subtotal = self.subtotal()
        return subtotal + self.delivery_fee if subtotal > 0 else subtotal

    def summary(self) -> CartResponse:
        with self._lock:
            subtotal = self.subtotal()
            return CartResponse(
                items=self.lines(),
                total_items=self.total_items(),
                subtotal=subtotal,
                delivery_fee=self.delivery_fee if subtotal > 0 else 0,
                total=self.total(),
            )

    def checkout(
        self,
        delivery_address: str | None,
        phone: str | None,
        payment_method: PaymentMethod | str = PaymentMethod.cod,
        notes: str | None = None,
    ) -> OrderConfirmationResponse:
        """Simulated checkout: checks the order details and returns a confirmation. Nothing is charged or stored."""
        with self._lock:
            if not self.lines():
                raise CheckoutError("cart", "Please add items to your cart before checking out")
            if not (delivery_address or "").strip():
                raise CheckoutError("delivery_address", "Please enter your delivery address")
            phone = (phone or "").strip()
            if not phone or len(phone) < MIN_PHONE_LENGTH:
                raise CheckoutError("phone", "Please enter a valid phone number")

            method = PaymentMethod(payment_method)
            total = self.total()
            follow_up = "Pay on delivery." if method == PaymentMethod.cod else "Payment link sent to your phone."
            logger.info(
                "Checkout accepted items=%s total=%s payment=%s notes=%s",
                self.total_items(),
                total,
                method.value,
                bool(notes),
            )
            return OrderConfirmationResponse(
                total=total,
                total_items=self.total_items(),
                payment_method=method,
                message=f"Your order of ₹{total} will be delivered soon. {follow_up}",
            )


class CartStore:
    """
    Process-local ledgers keyed by an opaque cart id. Nothing survives a restart.

    Ledgers idle for longer than `idle_seconds` are evicted, and the registry
    never holds more than `max_carts` entries (least recently used go first).
    """

    def __init__(
        self,
        idle_seconds: Optional[float] = None,
        max_carts: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.idle_seconds = settings.CART_IDLE_MINUTES * 60 if idle_seconds is None else idle_seconds
        self.max_carts = settings.CART_STORE_MAX if max_carts is None else max_carts
        self._clock = clock
        self._carts: "OrderedDict[str, Tuple[CartLedger, float]]" = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._carts)

    def _evict(self, now: float) -> None:
        while self._carts:
            cart_id, (_, touched_at) = next(iter(self._carts.items()))
            if now - touched_at <= self.idle_seconds and len(self._carts) <= self.max_carts:
                break
            self._carts.pop(cart_id)
            logger.debug("Evicted cart %s", cart_id)

    def _touch(self, cart_id: str, ledger: CartLedger, now: float) -> None:
        self._carts[cart_id] = (ledger, now)
        self._carts.move_to_end(cart_id)

    def get(self, cart_id: Optional[str]) -> Optional[CartLedger]:
        """Return the live ledger for `cart_id`, or None. Never creates one."""
        if not cart_id:
            return None
        with self._lock:
            now = self._clock()
            self._evict(now)
            entry = self._carts.get(cart_id)
            if entry is None:
                return None
            self._touch(cart_id, entry[0], now)
            return entry[0]

    def get_or_create(self, cart_id: Optional[str] = None) -> Tuple[str, CartLedger]:
        with self._lock:
            now = self._clock()
            self._evict(now)
            entry = self._carts.get(cart_id) if cart_id else None
            if entry is not None:
                ledger = entry[0]
            else:
                cart_id = uuid.uuid4().hex
                ledger = CartLedger()
                logger.debug("Created cart %s", cart_id)
            self._touch(cart_id, ledger, now)
            self._evict(now)
            return cart_id, ledger

    def discard(self, cart_id: Optional[str]) -> None:
        if not cart_id:
            return
        with self._lock:
            self._carts.pop(cart_id, None)

    def clear(self) -> None:
        with self._lock:
            self._carts.clear()


cart_store = CartStore()
