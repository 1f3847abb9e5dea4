import os
from functools import lru_cache
from typing import Optional
from cryptography.fernet import Fernet
from dotenv import load_dotenv
from fastapi.logger import logger

load_dotenv()


@lru_cache(maxsize=4)
def _build_cipher(key: str) -> Fernet:
    return Fernet(key.encode())


def get_cipher() -> Fernet:
    """
    Return the Fernet cipher for ENCRYPTION_KEY.

    When no key is configured a temporary one is generated and kept in the
    process environment, so values written now stay readable until restart.
    """
    key = os.getenv("ENCRYPTION_KEY")
    if not key:
        key = Fernet.generate_key().decode()
        os.environ["ENCRYPTION_KEY"] = key
        logger.warning(
            "ENCRYPTION_KEY not found in environment, generated a temporary key. "
            "Add a key to your .env file to keep customer data readable.")
    return _build_cipher(key)


def encrypt_data(data: Optional[str]) -> str:
    """
    Encrypt sensitive data

    Args:
        data: The string data to encrypt

    Returns:
        Encrypted string, empty when there is nothing to encrypt
    """
    if not data:
        return ""
    return get_cipher().encrypt(data.encode()).decode()


def decrypt_data(encrypted_data: Optional[str]) -> str:
    """
    Decrypt sensitive data

    Args:
        encrypted_data: The encrypted string to decrypt

    Returns:
        Decrypted string
    """
    if not encrypted_data:
        return ""
    return get_cipher().decrypt(encrypted_data.encode()).decode()
