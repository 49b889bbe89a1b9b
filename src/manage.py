"""Storefront command line.

Drives the cart, checkout and order history against the configured
services. The cart persists between invocations per identity.

Usage:
    python src/manage.py products
    python src/manage.py --user ada@example.com cart add 3 --qty 2
    python src/manage.py --user ada@example.com cart show
    python src/manage.py --user ada@example.com --token $TOKEN checkout --address "1 Main St" \
           --method CREDIT_CARD --details 4111111111111111
    python src/manage.py orders ada@example.com
"""

import argparse
import os
import sys

from identity.credentials import Identity
from ordering.checkout.errors import CheckoutStateError, EmptyCartError
from ordering.checkout.models import PaymentChoice
from ordering.pricing import to_cents
from payments.payment.payment import PaymentMethod
from pydantic import ValidationError
from shared.config import get_settings
from shared.http import ServiceError
from shared.utils.logging import add_context, configure_logging
from storefront import Storefront, create_storefront


def _money(amount) -> str:
    return f"${to_cents(amount)}"


def show_cart(storefront: Storefront) -> int:
    if storefront.cart.is_empty:
        print("Your cart is empty.")
        return 0
    for line in storefront.cart.lines:
        print(f"  [{line.product_id}] {line.name} x{line.quantity} @ {_money(line.unit_price)} = {_money(line.line_total)}")
    breakdown = storefront.pricing().rounded()
    shipping = "FREE" if breakdown.free_shipping else _money(breakdown.shipping_amount)
    print(f"Items:    {storefront.cart.total_items()}")
    print(f"Subtotal: {_money(breakdown.subtotal)}")
    print(f"Tax:      {_money(breakdown.tax_amount)}")
    print(f"Shipping: {shipping}")
    print(f"Total:    {_money(breakdown.total)}")
    return 0


def _product_id(raw: str):
    return int(raw) if raw.isdigit() else raw


def run_cart(storefront: Storefront, args) -> int:
    cart = storefront.cart
    if args.cart_command == "add":
        product = storefront.catalogue.get_product(_product_id(args.product_id))
        if not product.available:
            print(f"{product.name} is not available.")
            return 1
        line = cart.add_item(product, qty=args.qty)
        print(f"{line.name} added to cart ({line.quantity} in cart).")
    elif args.cart_command == "set":
        cart.set_quantity(_product_id(args.product_id), args.qty)
    elif args.cart_command == "remove":
        cart.remove_item(_product_id(args.product_id))
    elif args.cart_command == "clear":
        cart.clear()
        print("Cart cleared!")
        return 0
    return show_cart(storefront)


def run_checkout(storefront: Storefront, args) -> int:
    try:
        session = storefront.place_order(
            shipping_address=args.address,
            payment=PaymentChoice(method=PaymentMethod(args.method), details=args.details),
            name=args.name,
            email=args.email,
        )
    except EmptyCartError as exc:
        print(exc.user_message())
        return 1
    except (ValidationError, CheckoutStateError) as exc:
        print(f"Cannot check out: {exc}")
        return 1

    if session.succeeded:
        print(f"Order placed successfully! Order ID: #{session.order_id}")
        return 0

    error = session.error
    print(error.user_message())
    if error.order_id is not None:
        print(f"Order ID: #{error.order_id}")
    if error.requires_reconciliation:
        print("This order needs manual reconciliation; do not resubmit.")
    elif not error.retry_safe:
        print("An unpaid order was created; contact support before trying again.")
    return 2


def run_orders(storefront: Storefront, args) -> int:
    result = storefront.order_history(args.email)
    if not result.loaded:
        print(result.error.message)
        return 1
    if result.is_empty:
        print("No orders found for this email address.")
        return 0
    for order in result.orders:
        status = getattr(order.status, "value", order.status)
        total = _money(order.total_amount) if order.total_amount is not None else "-"
        print(f"#{order.id}  {status:<18} {total:>10}  {order.item_count} item(s)  {order.created_at or ''}")
    return 0


def run_products(storefront: Storefront, args) -> int:
    for product in storefront.catalogue.list_products():
        flag = "" if product.available else " (unavailable)"
        print(f"[{product.id}] {product.name} {_money(product.price)}{flag}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Storefront cart, checkout and order history")
    parser.add_argument("--user", help="Customer email the cart belongs to (default: anonymous)")
    parser.add_argument(
        "--token",
        default=os.getenv("STOREFRONT_TOKEN"),
        help="Bearer token for the backend services (default: $STOREFRONT_TOKEN)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("products", help="List catalogue products")

    cart_parser = subparsers.add_parser("cart", help="Show or change the cart")
    cart_sub = cart_parser.add_subparsers(dest="cart_command", required=True)
    cart_sub.add_parser("show")
    add = cart_sub.add_parser("add")
    add.add_argument("product_id")
    add.add_argument("--qty", type=int, default=1)
    set_qty = cart_sub.add_parser("set")
    set_qty.add_argument("product_id")
    set_qty.add_argument("qty", type=int)
    remove = cart_sub.add_parser("remove")
    remove.add_argument("product_id")
    cart_sub.add_parser("clear")

    checkout = subparsers.add_parser("checkout", help="Place an order for the cart")
    checkout.add_argument("--address", required=True)
    checkout.add_argument("--method", choices=[m.value for m in PaymentMethod], default=PaymentMethod.CREDIT_CARD.value)
    checkout.add_argument("--details", help="Card number, PayPal email or account number")
    checkout.add_argument("--name")
    checkout.add_argument("--email")

    orders = subparsers.add_parser("orders", help="Show order history")
    orders.add_argument("email", nargs="?")

    return parser


def main(argv=None, storefront: Storefront | None = None) -> int:
    args = build_parser().parse_args(argv)

    if storefront is None:
        settings = get_settings()
        configure_logging(settings.environment, log_dir=settings.log_dir)
        identity = Identity(email=args.user, token=args.token) if args.user else Identity.anonymous()
        storefront = create_storefront(settings, identity=identity)
    add_context(command=args.command, storage_key=storefront.identity.storage_key)

    commands = {
        "products": run_products,
        "cart": run_cart,
        "checkout": run_checkout,
        "orders": run_orders,
    }
    try:
        return commands[args.command](storefront, args)
    except ServiceError as exc:
        print(f"{exc.service} error: {exc.message}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
