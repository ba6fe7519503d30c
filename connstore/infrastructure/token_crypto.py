from __future__ import annotations

import base64
import hashlib
import os
from typing import Any

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ..settings import get_settings


_DEV_FALLBACK_KEY = "connstore-development-cursor-key"


def _get_key() -> bytes:
    raw = get_settings().cursor_token_key or _DEV_FALLBACK_KEY
    return hashlib.sha256(str(raw).encode("utf-8")).digest()  # 32 bytes


def encrypt_string(plain_text: Any) -> str | None:
    if plain_text is None:
        return None

    text = str(plain_text)
    iv = os.urandom(12)  # 12 bytes for GCM

    aesgcm = AESGCM(_get_key())
    ct_with_tag = aesgcm.encrypt(iv, text.encode("utf-8"), None)
    ciphertext = ct_with_tag[:-16]
    tag = ct_with_tag[-16:]

    return ".".join(
        [
            "v1",
            base64.urlsafe_b64encode(iv).decode("ascii"),
            base64.urlsafe_b64encode(tag).decode("ascii"),
            base64.urlsafe_b64encode(ciphertext).decode("ascii"),
        ]
    )


def decrypt_string(cipher_text: Any) -> str | None:
    """Return the plain text, or None when the token is malformed or forged."""
    if not cipher_text:
        return None

    parts = str(cipher_text).split(".")
    if len(parts) != 4 or parts[0] != "v1":
        return None

    _, iv_b64, tag_b64, data_b64 = parts

    try:
        iv = base64.urlsafe_b64decode(iv_b64)
        tag = base64.urlsafe_b64decode(tag_b64)
        data = base64.urlsafe_b64decode(data_b64)
        if len(iv) != 12 or len(tag) != 16:
            return None

        aesgcm = AESGCM(_get_key())
        pt = aesgcm.decrypt(iv, data + tag, None)
        return pt.decode("utf-8")
    except (ValueError, InvalidTag):
        return None
