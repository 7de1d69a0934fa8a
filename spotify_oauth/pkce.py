"""PKCE (Proof Key for Code Exchange) generation and management"""

import base64
import hashlib
import random
import secrets
from typing import Optional

from settings import PKCE_VERIFIER_LENGTH
from utils.storage import TokenStorage
from .models import PkceCodes

# RFC 7636 unreserved characters
UNRESERVED_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-._~"

MIN_VERIFIER_LENGTH = 43
MAX_VERIFIER_LENGTH = 128


def generate_verifier(length: int = PKCE_VERIFIER_LENGTH, rng: Optional[random.Random] = None) -> str:
    """Draw ``length`` independent characters from the unreserved alphabet

    Args:
        length: Verifier length, 43 to 128
        rng: Random source (default: secrets.SystemRandom)

    Returns:
        The code verifier
    """
    if not MIN_VERIFIER_LENGTH <= length <= MAX_VERIFIER_LENGTH:
        raise ValueError(
            f"PKCE verifier length must be between {MIN_VERIFIER_LENGTH} and {MAX_VERIFIER_LENGTH}, got {length}"
        )
    rng = rng or secrets.SystemRandom()
    return "".join(rng.choice(UNRESERVED_ALPHABET) for _ in range(length))


def derive_challenge(verifier: str) -> str:
    """S256 code challenge: base64url(sha256(verifier)) without padding"""
    digest = hashlib.sha256(verifier.encode("utf-8")).digest()
    return base64.urlsafe_b64encode(digest).decode("utf-8").rstrip("=")


class PKCEManager:
    """Generates PKCE pairs and keeps the verifier in the session store

    Only one verifier is stored at a time, so only the most recent login
    attempt can complete its code exchange.
    """

    def __init__(self, storage: TokenStorage, rng: Optional[random.Random] = None):
        self.storage = storage
        self.rng = rng

    def generate_pkce(self, length: int = PKCE_VERIFIER_LENGTH) -> PkceCodes:
        """Generate a verifier and its challenge without persisting anything"""
        code_verifier = generate_verifier(length, self.rng)
        return PkceCodes(code_verifier=code_verifier, code_challenge=derive_challenge(code_verifier))

    def begin(self, length: int = PKCE_VERIFIER_LENGTH) -> PkceCodes:
        """Generate a fresh pair and persist the verifier for the upcoming redirect"""
        codes = self.generate_pkce(length)
        self.storage.save_verifier(codes.code_verifier)
        return codes

    def load_verifier(self) -> Optional[str]:
        return self.storage.load_verifier()

    def clear_verifier(self) -> None:
        self.storage.clear_verifier()
