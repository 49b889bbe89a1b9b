"""Payment gateway factory.

``build_gateway(settings)`` picks the adapter from ``Settings.payment_gateway``:
- ``"http"``: HttpPaymentGateway against the configured payment service (default)
- ``"fake"``: FakeGateway, for offline demos and development

``get_gateway()`` / ``set_gateway()`` hold the process-wide instance.
"""

from payments.gateway.port import PaymentGateway
from shared.http import TokenProvider

_current_gateway: PaymentGateway | None = None


def build_gateway(settings, token_provider: TokenProvider | None = None) -> PaymentGateway:
    """Create a new gateway for ``settings``."""
    if settings.payment_gateway == "fake":
        from payments.gateway.fake_adapter import FakeGateway

        return FakeGateway()

    from payments.gateway.http_adapter import HttpPaymentGateway

    return HttpPaymentGateway(
        settings.payment_service_url,
        token_provider=token_provider,
        timeout=settings.request_timeout,
    )


def get_gateway() -> PaymentGateway:
    """Return the current payment gateway, building it from settings on first use."""
    global _current_gateway
    if _current_gateway is None:
        from shared.config import get_settings

        _current_gateway = build_gateway(get_settings())
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Drop the active gateway; the next get_gateway() builds a fresh one."""
    global _current_gateway
    _current_gateway = None
