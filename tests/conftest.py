from __future__ import annotations

import pytest

from fiatconnect_client.domain.models import ClientConfig
from tests.fakes import FakeClock, FakeSigner, make_config
from tests.test_data import API_KEY


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def fake_signer() -> FakeSigner:
    return FakeSigner()


@pytest.fixture()
def config_with_api_key() -> ClientConfig:
    return make_config(api_key=API_KEY)
