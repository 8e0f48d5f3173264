import threading
from typing import Optional

from .models import Bus

# Global registry
_BUS: Optional[Bus] = None
_BUS_LOCK = threading.Lock()


def get_bus() -> Bus:
    """Process-wide bus; the same instance is returned on every call."""
    global _BUS
    if _BUS is None:
        with _BUS_LOCK:
            if _BUS is None:
                _BUS = Bus()
    return _BUS
