"""Unit tests for ClientConfig."""

import pytest

from fiap.client.core import ClientConfig, ZeroTimePolicy


def test_defaults():
    config = ClientConfig()
    assert config.acceptable_size == 1000
    assert config.timeout == 30.0
    assert config.max_pages is None
    assert config.zero_time_policy is ZeroTimePolicy.OMIT
    assert config.debug is False


@pytest.mark.parametrize(
    "kwargs",
    [
        {"acceptable_size": 0},
        {"timeout": 0},
        {"max_pages": 0},
    ],
)
def test_rejects_invalid_values(kwargs):
    with pytest.raises(ValueError):
        ClientConfig(**kwargs)
