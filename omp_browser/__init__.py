"""
omp-browser - Terminal server browser for open.mp.

Downloads the public open.mp server list, lets you search it, keep
favorites and join a server with the installed game client.
"""

__version__ = "0.2.0"
__license__ = "GPLv3+"

from .browser import ServerBrowser
from .models import ServerRecord

__all__ = ["ServerBrowser", "ServerRecord", "__version__"]
