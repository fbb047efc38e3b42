from .base import BaseAdapter
from .altstrade_adapter import AltsTradeAdapter

__all__ = ['BaseAdapter', 'AltsTradeAdapter']
