import base64
import binascii
import logging
from functools import lru_cache
from typing import Optional, Union

from cryptography.exceptions import InvalidSignature as _CryptoInvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from .config import load_settings
from .errors import KeyLoadError, MalformedSignature

logger = logging.getLogger(__name__)


def load_public_key(data: bytes) -> rsa.RSAPublicKey:
    """
    Parses an RSA public key from DER (X.509 SubjectPublicKeyInfo, the format of
    yggdrasil_session_pubkey.der) or PEM bytes.
    """
    key = None
    errors = []
    for loader in (serialization.load_der_public_key, serialization.load_pem_public_key):
        try:
            key = loader(data)
            break
        except (ValueError, UnsupportedAlgorithm) as e:
            errors.append(str(e))

    if key is None:
        raise KeyLoadError(f"Could not parse public key: {'; '.join(errors)}")
    if not isinstance(key, rsa.RSAPublicKey):
        raise KeyLoadError(f"Session key must be RSA, got {type(key).__name__}")
    return key


def load_public_key_file(path: str) -> rsa.RSAPublicKey:
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise KeyLoadError(f"Failed to read public key {path}: {e}")
    return load_public_key(data)


def decode_signature(signature: str) -> bytes:
    try:
        return base64.b64decode(signature.encode("utf-8"), validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedSignature(f"Signature is not valid base64: {e}")


def verify(value: Union[bytes, str], signature: Optional[str], public_key: rsa.RSAPublicKey) -> bool:
    """
    Checks a SHA1withRSA (PKCS#1 v1.5) signature over the raw bytes of value.
    Returns False when there is no signature or it does not match.
    Raises MalformedSignature when the signature is not base64.
    """
    if signature is None:
        return False

    raw_signature = decode_signature(signature)
    if isinstance(value, str):
        value = value.encode("utf-8")

    try:
        public_key.verify(raw_signature, value, padding.PKCS1v15(), hashes.SHA1())
    except _CryptoInvalidSignature:
        return False
    return True


class SignatureValidator:
    """
    Binds one trusted public key. Stateless apart from the key, safe to share
    between threads.
    """

    def __init__(self, public_key: rsa.RSAPublicKey):
        self.public_key = public_key

    @classmethod
    def from_file(cls, path: str) -> "SignatureValidator":
        return cls(load_public_key_file(path))

    def verify(self, value: Union[bytes, str], signature: Optional[str]) -> bool:
        ok = verify(value, signature, self.public_key)
        if not ok:
            logger.debug("Signature check failed (signature present: %s)", signature is not None)
        return ok


@lru_cache(maxsize=1)
def session_validator() -> SignatureValidator:
    """
    Validator for the configured session server key, loaded once per process.
    """
    path = load_settings().session_key_path
    if not path:
        raise KeyLoadError(
            "No session public key configured. Set SKIN2HEAD_SESSION_KEY to the "
            "path of yggdrasil_session_pubkey.der."
        )
    logger.debug("Loading session public key from %s", path)
    return SignatureValidator.from_file(path)
