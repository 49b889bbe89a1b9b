"""Storefront session: wires identity, cart, checkout and order history together.

One ``Storefront`` is one browsing session. The identity is explicit
state on the instance (not a module global), so several sessions can
coexist, e.g. in tests. Signing in or out swaps the cart to that
identity's stored cart; signing out clears the signed-in cart first.

Usage:
    storefront = create_storefront()
    storefront.login("ada@example.com", "secret")
    storefront.cart.add_item(storefront.catalogue.get_product(1), qty=2)
    session = storefront.place_order("1 Main St", PaymentChoice(details="4111111111111111"))
"""

import structlog

from catalogue.client import CatalogueClient
from identity.auth import AuthClient
from identity.credentials import Identity
from ordering.cart.cart import CartStore
from ordering.cart.storage import CartStorage, JsonFileCartStorage
from ordering.checkout.models import CustomerInfo, PaymentChoice
from ordering.checkout.orchestrator import CheckoutOrchestrator
from ordering.checkout.session import CheckoutSession
from ordering.history.query import OrderHistoryQuery, OrderHistoryResult
from ordering.order.http_adapter import HttpOrderService
from ordering.order.port import OrderService
from ordering.pricing import DEFAULT_POLICY, PricingBreakdown, PricingPolicy, price_cart
from payments.gateway import build_gateway, get_gateway
from payments.gateway.port import PaymentGateway
from shared.config import Settings, get_settings

logger = structlog.get_logger(__name__)


class Storefront:
    def __init__(
        self,
        cart_storage: CartStorage,
        order_service: OrderService,
        payment_gateway: PaymentGateway | None = None,
        catalogue: CatalogueClient | None = None,
        auth: AuthClient | None = None,
        pricing_policy: PricingPolicy = DEFAULT_POLICY,
        identity: Identity | None = None,
    ) -> None:
        self.identity = identity or Identity.anonymous()
        self.catalogue = catalogue
        self.auth = auth
        self.pricing_policy = pricing_policy
        self.cart = CartStore(cart_storage, self.identity)
        self.checkout = CheckoutOrchestrator(order_service, payment_gateway or get_gateway(), pricing_policy)
        self.history = OrderHistoryQuery(order_service)

    # -------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------
    def current_token(self) -> str | None:
        return self.identity.token

    def sign_in(self, identity: Identity) -> None:
        self.identity = identity
        self.cart.switch_identity(identity)

    def login(self, email: str, password: str) -> Identity:
        if self.auth is None:
            raise RuntimeError("No user service configured")
        self.sign_in(self.auth.login(email, password))
        return self.identity

    def logout(self) -> None:
        if self.identity.email:
            self.cart.clear()
        logger.info("Signed out", email=self.identity.email)
        self.sign_in(Identity.anonymous())

    # -------------------------------------------------------------------
    # Cart and checkout
    # -------------------------------------------------------------------
    def pricing(self) -> PricingBreakdown:
        return price_cart(self.cart, self.pricing_policy)

    def customer_for(
        self,
        shipping_address: str,
        name: str | None = None,
        email: str | None = None,
    ) -> CustomerInfo:
        """Checkout contact details, defaulting to the signed-in identity."""
        return CustomerInfo(
            email=email or self.identity.email or "",
            name=name or self.identity.username or "",
            shipping_address=shipping_address,
        )

    def place_order(
        self,
        shipping_address: str,
        payment: PaymentChoice,
        name: str | None = None,
        email: str | None = None,
        session: CheckoutSession | None = None,
    ) -> CheckoutSession:
        customer = self.customer_for(shipping_address, name=name, email=email)
        return self.checkout.submit(self.cart, customer, payment, session=session)

    def order_history(self, customer_email: str | None = None) -> OrderHistoryResult:
        return self.history.fetch_orders_for(customer_email or self.identity.email or "")


def create_storefront(settings: Settings | None = None, identity: Identity | None = None) -> Storefront:
    """Build a storefront talking to the configured services over HTTP."""
    settings = settings or get_settings()
    storefront: Storefront | None = None

    def token() -> str | None:
        return storefront.current_token() if storefront is not None else None

    timeout = settings.request_timeout
    storefront = Storefront(
        cart_storage=JsonFileCartStorage(settings.cart_storage_dir),
        order_service=HttpOrderService(settings.order_service_url, token_provider=token, timeout=timeout),
        payment_gateway=build_gateway(settings, token_provider=token),
        catalogue=CatalogueClient(settings.product_service_url, token_provider=token, timeout=timeout),
        auth=AuthClient(settings.user_service_url, timeout=timeout),
        pricing_policy=PricingPolicy.from_settings(settings),
        identity=identity,
    )
    return storefront
