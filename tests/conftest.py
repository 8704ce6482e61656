import json

import pytest

from cecssh.core.exceptions import NetworkError
from cecssh.domain.session.models import SessionTimings

from .fakes import FakeSession


@pytest.fixture
def fast_timings():
    return SessionTimings(
        settle_delay=0.02,
        drain_poll_interval=0.01,
        liveness_interval=0.02,
        grace_period=0.3,
    )


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "cec-ssh_config.json"
    path.write_text(json.dumps({
        "host": "h",
        "port": 22,
        "username": "u",
        "password": "p",
    }))
    return path


@pytest.fixture
def unreachable_session():
    session = FakeSession()
    session.connect_error = NetworkError("connection refused")
    return session
