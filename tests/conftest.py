import json
import os
from pathlib import Path
from unittest.mock import MagicMock

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Point settings and logging at the test environment before collection."""
    os.environ["STOREFRONT_ENVIRONMENT"] = session.config.option.env

    from shared.utils.logging import configure_logging

    configure_logging(session.config.option.env)


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
        elif "/bdd/" in str(test_path):
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(autouse=True)
def reset_payment_gateway():
    """Never leak a gateway override from one test into the next."""
    from payments.gateway import reset_gateway

    yield
    reset_gateway()


# ---------------------------------------------------------------------------
# Fake HTTP plumbing for adapter tests
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_response():
    def _make(status=200, body=None, text=None):
        response = MagicMock()
        response.status_code = status
        if body is not None:
            response.content = json.dumps(body).encode()
            response.json.return_value = body
            response.text = json.dumps(body)
        else:
            response.content = (text or "").encode()
            response.json.side_effect = ValueError("No JSON body")
            response.text = text or ""
        return response

    return _make


@pytest.fixture()
def make_session():
    """A stand-in for ``requests.Session`` answering with the given responses in order.

    An exception instance in the list is raised instead of answered.
    """

    def _make(*responses):
        session = MagicMock()
        session.headers = {}
        session.request.side_effect = list(responses)
        return session

    return _make
