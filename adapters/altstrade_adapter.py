# adapters/altstrade_adapter.py — alts.trade REST endpoints
import os
import logging
from concurrent.futures import Future
from typing import Any, Callable, Dict, Optional

import requests

from config import SETTINGS, ClientConfig
from helpers.errors import AltsTradeError, CredentialsMissingError
from helpers.nonce import NonceGenerator
from helpers.signing import sign_request
from .base import BaseAdapter, Callback

logger = logging.getLogger(__name__)


class AltsTradeAdapter(BaseAdapter):
    """
    alts.trade REST client.

    Authentication uses:
    - Rest-Key: public key
    - Rest-Sign: base64(HMAC-SHA512(form body, base64decode(private key)))

    Public endpoints work without keys. Every method returns a Future and
    takes an optional callback(error, result).

    Worker threads start with the first request and live until close() (or
    the end of a `with` block).
    """

    def __init__(self, public_key: Optional[str] = None, private_key: Optional[str] = None,
                 cfg: Optional[ClientConfig] = None, clock: Optional[Callable[[], int]] = None,
                 session: Optional[requests.Session] = None):
        super().__init__(cfg, session)
        self._key = public_key
        self._secret = private_key
        self.nonces = NonceGenerator(clock)

    @classmethod
    def from_env(cls, cfg: Optional[ClientConfig] = None, **kwargs) -> "AltsTradeAdapter":
        cfg = cfg or SETTINGS
        key = os.getenv(cfg.api_key_env, "") or None
        secret = os.getenv(cfg.secret_env, "") or None
        if not (key and secret):
            logger.debug(f"{cfg.api_key_env}/{cfg.secret_env} not set, private endpoints disabled")
        return cls(key, secret, cfg=cfg, **kwargs)

    @property
    def has_credentials(self) -> bool:
        return bool(self._key and self._secret)

    def _get(self, action: str, callback: Optional[Callback] = None) -> Future:
        path = f"{self.cfg.base_path}/{action}"
        return self._submit(self._request, "GET", path, callback=callback)

    def _post(self, action: str, args: Optional[Dict[str, Any]] = None,
              callback: Optional[Callback] = None) -> Future:
        if not self.has_credentials:
            return self._failed(CredentialsMissingError(), callback)

        path = f"{self.cfg.base_path}/{action}/"
        # Signed here, not on the worker, so nonces follow call order
        try:
            signed = sign_request(self.nonces.next(), args, self._key, self._secret)
        except AltsTradeError as e:
            return self._failed(e, callback)
        return self._submit(self._request, "POST", path, signed.body, signed.headers, callback=callback)

    # ============== PUBLIC ENDPOINTS ==============

    def markets(self, *, callback: Optional[Callback] = None) -> Future:
        return self._get("markets", callback)

    def currencies(self, *, callback: Optional[Callback] = None) -> Future:
        return self._get("currencies", callback)

    def ticker(self, market: str, *, callback: Optional[Callback] = None) -> Future:
        return self._get(f"ticker/{market}", callback)

    def trade_history(self, market: str, *, callback: Optional[Callback] = None) -> Future:
        return self._get(f"markets/history/{market}", callback)

    def order_book(self, market: str, *, callback: Optional[Callback] = None) -> Future:
        return self._get(f"orders/market/{market}", callback)

    # ============== PRIVATE ENDPOINTS ==============

    def balance(self, *, callback: Optional[Callback] = None) -> Future:
        return self._post("balance", callback=callback)

    def pending_deposits(self, *, callback: Optional[Callback] = None) -> Future:
        return self._post("deposit/pending", callback=callback)

    def deposits_history(self, *, callback: Optional[Callback] = None) -> Future:
        return self._post("deposit/history", callback=callback)

    def deposit_keys(self, coin_code: str, *, callback: Optional[Callback] = None) -> Future:
        """Deposit address for a coin."""
        return self._post("deposit/coin", {"code": coin_code}, callback)

    def pending_withdraws(self, *, callback: Optional[Callback] = None) -> Future:
        return self._post("withdraw/pending", callback=callback)

    def withdraws_history(self, *, callback: Optional[Callback] = None) -> Future:
        return self._post("withdraw/history", callback=callback)

    def place_order(self, market: str, action: str, amount, price: float, *,
                    callback: Optional[Callback] = None) -> Future:
        payload = {
            "market": market,
            "action": action,  # 'buy' or 'sell'
            "amount": amount,
            "price": f"{price:.8f}",
        }
        return self._post("orders", payload, callback)

    def cancel_order(self, order_id, *, callback: Optional[Callback] = None) -> Future:
        return self._post("orders/cancel", {"order_id": order_id}, callback)

    def my_open_orders(self, market: str, *, callback: Optional[Callback] = None) -> Future:
        return self._post("orders/my", {"market": market}, callback)

    def all_my_open_orders(self, *, callback: Optional[Callback] = None) -> Future:
        return self._post("orders/my_all", callback=callback)

    def my_trades(self, market: str, *, callback: Optional[Callback] = None) -> Future:
        return self._post("orders/my_history", {"market": market}, callback)
