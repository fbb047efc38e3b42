# helpers/signing.py — Rest-Key / Rest-Sign request signing
import re
import hmac
import math
import base64
import hashlib
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import urlencode, quote

from .errors import CredentialsMissingError

# Characters encodeURIComponent leaves alone on top of quote()'s unreserved set
FORM_SAFE = "!~*'()"
B64_JUNK = re.compile(r"[^A-Za-z0-9+/]")


@dataclass(frozen=True)
class SignedRequest:
    body: str
    headers: Dict[str, str]


def compact(mapping: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy without the keys whose value is None. Falsy values are kept."""
    return {k: v for k, v in mapping.items() if v is not None}


def _float_text(value: float) -> str:
    """Plain decimal text for a float: 1.0 -> '1', 1e-05 -> '0.00001'. Never an exponent."""
    if not math.isfinite(value):
        return repr(value)
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _float_text(value)
    return str(value)


def encode_form(fields: Mapping[str, Any]) -> str:
    return urlencode(
        [(k, _form_value(v)) for k, v in fields.items()],
        safe=FORM_SAFE,
        quote_via=quote,
    )


def decode_secret(secret_b64: Union[str, bytes]) -> bytes:
    """
    Lenient base64 decode of the private key.

    Padding is optional, url-safe characters are accepted and anything outside
    the alphabet is skipped. A dangling single character carries no full byte
    and is dropped.
    """
    if isinstance(secret_b64, bytes):
        secret_b64 = secret_b64.decode("ascii", errors="ignore")
    cleaned = B64_JUNK.sub("", secret_b64.replace("-", "+").replace("_", "/"))
    if len(cleaned) % 4 == 1:
        cleaned = cleaned[:-1]
    cleaned += "=" * (-len(cleaned) % 4)
    return base64.b64decode(cleaned)


def hmac_sha512_b64(secret_b64: Union[str, bytes], message: str) -> str:
    """HMAC-SHA512 of message keyed with the base64-decoded secret, base64 encoded."""
    key = decode_secret(secret_b64)
    digest = hmac.new(key, message.encode("utf-8"), hashlib.sha512).digest()
    return base64.b64encode(digest).decode("ascii")


def sign_request(nonce: str, args: Optional[Mapping[str, Any]], public_key: str, private_key: str) -> SignedRequest:
    """
    Build the authenticated form body and its headers.

    The body is nonce + args (None values dropped), URL encoded. Rest-Sign is
    the HMAC-SHA512 of that exact body string.
    """
    if not public_key or not private_key:
        raise CredentialsMissingError()

    message = compact({"nonce": nonce, **(args or {})})
    body = encode_form(message)
    signature = hmac_sha512_b64(private_key, body)

    headers = compact({
        "Rest-Key": public_key,
        "Rest-Sign": signature,
    })
    return SignedRequest(body=body, headers=headers)
