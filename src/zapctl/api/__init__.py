"""Scanner control API client."""

from .client import ActiveScanAPI, CoreAPI, PassiveScanAPI, SpiderAPI, ZAPClient

__all__ = [
    "ActiveScanAPI",
    "CoreAPI",
    "PassiveScanAPI",
    "SpiderAPI",
    "ZAPClient",
]
