"""Stateless admission tokens."""

import hashlib
import logging

from waitroom.core.errors import ConfigurationFatalError

logger = logging.getLogger(__name__)


class TokenGenerator:
    """Derives deterministic tokens from (queue, user id).

    A token is the hex digest of ``user-queue-{queue}-{user_id}``. Nothing is
    stored: verifying a token means deriving it again and comparing.
    """

    def __init__(self, algorithm: str = "sha256"):
        """Resolve the hash algorithm once at startup.

        Raises:
            ConfigurationFatalError: If hashlib does not provide the algorithm.
        """
        try:
            # Variable-length digests (shake_*) cannot produce a fixed-length token
            hashlib.new(algorithm).hexdigest()
        except (ValueError, TypeError) as e:
            raise ConfigurationFatalError(f"Hash algorithm '{algorithm}' is not available: {e}") from e
        self.algorithm = algorithm
        logger.debug(f"Token generator using {algorithm}")

    def generate(self, queue: str, user_id: str | int) -> str:
        payload = f"user-queue-{queue}-{user_id}".encode()
        return hashlib.new(self.algorithm, payload).hexdigest()
