import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture

# Must be set before the application module builds its storefront
os.environ["STOREFRONT_ENV"] = "test"
os.environ["STOREFRONT_PAYMENT_DELAY"] = "0"


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield

        from protean import current_domain

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()


@pytest.fixture()
def settings():
    from shared.config import Settings

    return Settings(env="test", payment_delay=0)


@pytest.fixture()
def catalog():
    from catalogue.catalog import Catalog

    return Catalog.load()


@pytest.fixture()
def recording_gateway():
    """A simulated gateway that remembers every authorization it was asked for."""
    from payments.gateway.simulated_adapter import SimulatedGateway

    class RecordingGateway(SimulatedGateway):
        def __init__(self):
            super().__init__()
            self.calls = []

        def authorize(self, card_number, amount, currency, idempotency_key):
            self.calls.append(
                {
                    "last4": card_number[-4:],
                    "amount": amount,
                    "currency": currency,
                    "idempotency_key": idempotency_key,
                }
            )
            return super().authorize(card_number, amount, currency, idempotency_key)

    return RecordingGateway()


@pytest.fixture()
def storefront(settings, catalog, recording_gateway):
    from ordering.storefront import Storefront

    return Storefront(
        settings,
        catalog=catalog,
        gateway=recording_gateway,
        sleep=lambda seconds: None,
    )
