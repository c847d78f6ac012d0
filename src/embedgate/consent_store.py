"""Redis-backed view of the consent subsystem."""

from redis import Redis
from redis.exceptions import RedisError

from embedgate.embeds.collaborators import ConsentState
from embedgate.exceptions import ConsentStoreError
from embedgate.logger import logger

INACTIVE = ConsentState(system_active=False, consent_record_count=0)


class RedisConsentReader:
    """Reports consent state from records stored in Redis.

    Every key under ``<key_prefix>:*`` is a consent record. The store
    itself is written by the consent banner service, never by this reader.
    """

    def __init__(self, redis_url: str, key_prefix: str, enabled: bool = True) -> None:
        """Initialize the reader.

        Args:
            redis_url: Redis connection URL
            key_prefix: Prefix of consent record keys
            enabled: Whether consent handling is switched on at all

        """
        self.redis_client = Redis.from_url(redis_url)
        self._key_prefix = key_prefix
        self._enabled = enabled

    def get_consent_state(self) -> ConsentState:
        """Return the current consent state.

        The record count is capped at 1: filtering only needs to know that
        some consent exists, so the scan stops at the first matching key.
        An unreachable store reports the subsystem as inactive, which lets
        content through unfiltered.
        """
        if not self._enabled:
            return INACTIVE

        try:
            has_records = self._has_records()
        except ConsentStoreError as e:
            logger.warning("Consent store unavailable, embeds will not be blocked: %s", e)
            return INACTIVE

        logger.debug("Consent records present: %s", has_records)
        return ConsentState(system_active=True, consent_record_count=int(has_records))

    def _has_records(self) -> bool:
        """Check whether at least one consent record exists.

        Raises:
            ConsentStoreError: If Redis cannot be reached or queried

        """
        try:
            self.redis_client.ping()
            # Use SCAN instead of KEYS for production safety
            keys = self.redis_client.scan_iter(match=f"{self._key_prefix}:*", count=100)
            return next(iter(keys), None) is not None
        except RedisError as e:
            raise ConsentStoreError(str(e)) from e

    def close(self) -> None:
        """Close the Redis connection."""
        self.redis_client.close()
