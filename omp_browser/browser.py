"""
Interactive server browser.

Owns the fetched servers, the favorites and the view state, and turns key
events into state changes. Rendering and key input go through a screen
object (CursesScreen in production).
"""

import math
import time
from typing import Callable, List, Optional

from .config import BrowserConfig
from .exceptions import FetchError, LaunchError
from .favorites import FavoritesStore, add_favorite, is_favorite, remove_favorite
from .fetcher import ServerListFetcher
from .filter import compute_view, refresh_favorite_info
from .keys import Key, KeyEvent
from .launcher import GameLauncher
from .logging_config import get_logger
from .models import ServerRecord
from .state import ViewState
from .ui import Row


PROJECT_URL = "https://github.com/VIRUXE/openmp-server-browser"

HELP_LINES = [
    "open.mp Server Browser Instructions",
    "=====================================",
    "UP ARROW: Move selection up",
    "DOWN ARROW: Move selection down",
    "RIGHT ARROW: Add selected server to favorites",
    "LEFT ARROW: Remove selected server from favorites",
    "ENTER: Enter the selected server",
    "ESC: Clear search term",
    "BACKSPACE: Remove last character from search term",
    "Any ASCII Key: Start a search with the key (search name, gamemode and address)",
    "F1: Show this page",
    "F2: Refresh server list",
    "CTRL+C: Quit",
    "",
    f"Based on VIRUXE's open.mp server browser ({PROJECT_URL})",
    "",
    "Press any key to return...",
]

DOWNLOADING_MESSAGE = "Downloading Servers..."


class ServerBrowser:
    """Interactive open.mp server browser."""

    def __init__(self, config: BrowserConfig,
                 fetcher: Optional[ServerListFetcher] = None,
                 store: Optional[FavoritesStore] = None,
                 launcher: Optional[GameLauncher] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.config = config
        self.fetcher = fetcher or ServerListFetcher(
            config.servers_url, timeout=config.timeout, servers_path=config.servers_path
        )
        self.store = store or FavoritesStore(config.favorites_file)
        self.launcher = launcher or GameLauncher(config.game_executable)
        self.blacklist = set(config.blacklist)
        self.logger = get_logger(__name__)

        self.servers: List[ServerRecord] = []
        self.favorites: List[ServerRecord] = []
        self.visible_servers: List[ServerRecord] = []
        self.view = ViewState()
        self.status: Optional[str] = None
        self._clock = clock
        self._last_fetch: Optional[float] = None

    async def initialize(self, screen):
        """Load favorites and download the initial server list."""
        # FavoritesError propagates: a broken file must not be overwritten later
        self.favorites = await self.store.load()

        screen.show_message(DOWNLOADING_MESSAGE)
        await self._load_servers()
        self.update_view()

    async def run(self, screen):
        """Main interactive loop. Runs until the process is interrupted."""
        await self.initialize(screen)

        while True:
            self.render(screen)
            event = screen.read_key()
            await self.handle_key(event, screen)

    async def _load_servers(self) -> bool:
        """Fetch the list; on failure keep whatever list we already have."""
        try:
            servers = await self.fetcher.fetch()
        except FetchError as e:
            self.logger.warning(f"Server list download failed: {e}")
            self.status = str(e)
            return False
        finally:
            self._last_fetch = self._clock()

        self.servers = servers
        return True

    def update_view(self):
        """Sync favorite metadata and recompute the filtered list."""
        refresh_favorite_info(self.favorites, self.servers)
        self.visible_servers = compute_view(
            self.servers, self.favorites, self.view.search_term, self.blacklist
        )
        self.view.clamp(len(self.visible_servers))

    def selected(self) -> Optional[ServerRecord]:
        if not self.visible_servers:
            return None
        return self.visible_servers[self.view.selected_index]

    def rows(self) -> List[Row]:
        """Rows of the current page."""
        rows = []
        for i in self.view.visible_range(len(self.visible_servers)):
            server = self.visible_servers[i]
            favorite = is_favorite(self.favorites, server)
            rows.append(Row(
                text=server.favorite_text() if favorite else server.row_text(),
                selected=i == self.view.selected_index,
                favorite=favorite,
            ))
        return rows

    def render(self, screen):
        self.view.set_page_size(screen.page_size())
        self.update_view()

        status = self.status
        if status is None and not self.visible_servers:
            status = "No servers found" if self.view.search_term else "No servers available (F2 to refresh)"
        screen.render(self.rows(), self.view.search_term, status)

    async def handle_key(self, event: KeyEvent, screen):
        """Apply one key event to the browser state."""
        self.status = None
        key = event.key

        if key is Key.HELP:
            screen.show_help(HELP_LINES)
            screen.read_key()
        elif key is Key.REFRESH:
            await self.refresh(screen)
        elif key is Key.FAVORITE_ADD:
            await self.favorite_selected()
        elif key is Key.FAVORITE_REMOVE:
            await self.unfavorite_selected()
        elif key is Key.UP:
            self.view.move_up()
        elif key is Key.DOWN:
            self.view.move_down(len(self.visible_servers))
        elif key is Key.ENTER:
            self.launch_selected()
        elif key is Key.ESCAPE:
            self.view.reset()
        elif key is Key.BACKSPACE:
            self.view.backspace()
        elif key is Key.CHAR and event.char:
            self.view.type_char(event.char)

    def _cooldown_remaining(self) -> float:
        if self.config.refresh_cooldown <= 0 or self._last_fetch is None:
            return 0.0
        return self.config.refresh_cooldown - (self._clock() - self._last_fetch)

    async def refresh(self, screen):
        """Re-download the server list and reset the view. Favorites are kept."""
        remaining = self._cooldown_remaining()
        if remaining > 0:
            self.status = f"Refresh available in {math.ceil(remaining)}s"
            return

        screen.show_message(DOWNLOADING_MESSAGE)
        await self._load_servers()
        self.view.reset()
        self.update_view()

    async def favorite_selected(self):
        server = self.selected()
        if server is None:
            self.status = "No server selected"
            return

        if add_favorite(self.favorites, server):
            self.logger.info(f"Added favorite {server.address}")
            await self._save_favorites()

    async def unfavorite_selected(self):
        server = self.selected()
        if server is None:
            self.status = "No server selected"
            return

        if remove_favorite(self.favorites, server):
            self.logger.info(f"Removed favorite {server.address}")
            await self._save_favorites()

    async def _save_favorites(self):
        try:
            await self.store.save(self.favorites)
        except OSError as e:
            self.logger.error(f"Failed to save favorites: {e}")
            self.status = f"Failed to save favorites: {e}"

    def launch_selected(self):
        server = self.selected()
        if server is None:
            self.status = "No server selected"
            return

        try:
            host, port = server.host_port()
            self.launcher.launch(host, port)
        except (ValueError, LaunchError) as e:
            self.logger.error(f"Cannot launch {server.address}: {e}")
            self.status = str(e)
            return

        self.status = f"Launching {server.hostname or server.address}..."
