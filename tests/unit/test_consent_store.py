"""Unit tests for the Redis consent reader."""

from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from embedgate.consent_store import RedisConsentReader
from embedgate.embeds.collaborators import ConsentState

REDIS_URL = "redis://redis:6379"


@pytest.fixture
def mock_redis() -> Iterator[MagicMock]:
    """Patch Redis.from_url and return the client it produces."""
    with patch("embedgate.consent_store.Redis.from_url") as mock_from_url:
        client = MagicMock()
        mock_from_url.return_value = client
        yield client


def test_detects_consent_records(mock_redis: MagicMock) -> None:
    """Test that an existing key under the prefix activates filtering."""
    mock_redis.scan_iter.return_value = iter([b"embedgate:consent:1", b"embedgate:consent:2"])
    reader = RedisConsentReader(REDIS_URL, "embedgate:consent")

    state = reader.get_consent_state()

    assert state == ConsentState(system_active=True, consent_record_count=1)
    mock_redis.ping.assert_called_once()
    mock_redis.scan_iter.assert_called_once_with(match="embedgate:consent:*", count=100)


def test_scan_stops_at_first_record(mock_redis: MagicMock) -> None:
    """Test that the store is not walked past the first consent key."""
    keys = iter([b"embedgate:consent:1", b"embedgate:consent:2", b"embedgate:consent:3"])
    mock_redis.scan_iter.return_value = keys
    reader = RedisConsentReader(REDIS_URL, "embedgate:consent")

    reader.get_consent_state()

    assert list(keys) == [b"embedgate:consent:2", b"embedgate:consent:3"]


def test_no_records(mock_redis: MagicMock) -> None:
    """Test an active store that holds no consent yet."""
    mock_redis.scan_iter.return_value = iter([])
    reader = RedisConsentReader(REDIS_URL, "embedgate:consent")

    assert reader.get_consent_state() == ConsentState(True, 0)


def test_unreachable_store_is_inactive(mock_redis: MagicMock) -> None:
    """Test that Redis errors degrade to an inactive consent system."""
    mock_redis.ping.side_effect = RedisConnectionError("Connection refused")
    reader = RedisConsentReader(REDIS_URL, "embedgate:consent")

    with patch("embedgate.consent_store.logger") as mock_logger:
        state = reader.get_consent_state()

    assert state == ConsentState(False, 0)
    mock_logger.warning.assert_called_once()


def test_disabled_does_not_touch_redis(mock_redis: MagicMock) -> None:
    """Test that a switched-off consent system never queries Redis."""
    reader = RedisConsentReader(REDIS_URL, "embedgate:consent", enabled=False)

    assert reader.get_consent_state() == ConsentState(False, 0)
    mock_redis.ping.assert_not_called()
    mock_redis.scan_iter.assert_not_called()


def test_close(mock_redis: MagicMock) -> None:
    """Test that close releases the client."""
    reader = RedisConsentReader(REDIS_URL, "embedgate:consent")

    reader.close()

    mock_redis.close.assert_called_once()
