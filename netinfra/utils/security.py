# netinfra/utils/security.py
import logging

from cryptography.fernet import Fernet, InvalidToken

from ..core.config import settings

logger = logging.getLogger(__name__)

# Device credentials are encrypted at rest only when ENCRYPTION_KEY is set
ENCRYPTION_KEY = settings.encryption_key
APP_ENV = settings.app_env

if not ENCRYPTION_KEY:
    if APP_ENV == "production":
        raise RuntimeError(
            "FATAL: ENCRYPTION_KEY is not set. "
            "It is mandatory in production to encrypt device credentials."
        )
    logger.warning("ENCRYPTION_KEY is not set. Device password encryption is DISABLED.")
    cipher_suite = None
else:
    try:
        cipher_suite = Fernet(ENCRYPTION_KEY.encode())
    except ValueError as e:
        if APP_ENV == "production":
            raise RuntimeError(
                f"FATAL: invalid ENCRYPTION_KEY: {e}. "
                'Generate one with: python -c "from cryptography.fernet import Fernet; print(Fernet.generate_key().decode())"'
            )
        logger.error(f"Could not initialise Fernet with ENCRYPTION_KEY: {e}")
        cipher_suite = None


def encrypt_data(data: str) -> str:
    """Encrypts a device secret; returns it unchanged when encryption is disabled."""
    if not cipher_suite or not data:
        return data
    return cipher_suite.encrypt(data.encode()).decode()


def decrypt_data(token: str) -> str:
    """Inverse of encrypt_data. Plain-text legacy values are returned as-is."""
    if not cipher_suite or not token:
        return token
    try:
        return cipher_suite.decrypt(token.encode()).decode()
    except InvalidToken:
        # Stored before encryption was enabled
        logger.warning("Could not decrypt a token. Assuming legacy plain text.")
        return token
