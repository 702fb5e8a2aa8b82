"""
Favorite servers and their persistence.

The favorites file is a JSON object with a single "favorites" key holding
server records in the list wire format. Every change rewrites the whole file.
"""

import json
from pathlib import Path
from typing import List

import aiofiles
import aiofiles.os

from .models import ServerRecord
from .exceptions import FavoritesError
from .logging_config import get_logger


FAVORITES_KEY = "favorites"

logger = get_logger(__name__)


def is_favorite(favorites: List[ServerRecord], record: ServerRecord) -> bool:
    """Membership by address, never by full equality."""
    return any(fav.same_server(record) for fav in favorites)


def add_favorite(favorites: List[ServerRecord], record: ServerRecord) -> bool:
    """Append a copy of record unless its address is already a favorite."""
    if is_favorite(favorites, record):
        return False
    favorites.append(record.copy())
    return True


def remove_favorite(favorites: List[ServerRecord], record: ServerRecord) -> bool:
    """Remove every favorite sharing record's address. Returns True if any was removed."""
    kept = [fav for fav in favorites if not fav.same_server(record)]
    if len(kept) == len(favorites):
        return False
    favorites[:] = kept
    return True


class FavoritesStore:
    """Reads and writes the favorites file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    async def load(self) -> List[ServerRecord]:
        """
        Load favorites from disk.

        Returns:
            Favorites in file order, or an empty list if the file is absent

        Raises:
            FavoritesError: if the file exists but is not a valid favorites file
        """
        if not await aiofiles.os.path.exists(self.path):
            logger.debug(f"No favorites file at {self.path}")
            return []

        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                content = await f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise FavoritesError(f"Cannot read {self.path}: {e}") from e

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise FavoritesError(f"{self.path} is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise FavoritesError(f"{self.path} must contain a JSON object")

        entries = data.get(FAVORITES_KEY)
        if entries is None:
            return []
        if not isinstance(entries, list):
            raise FavoritesError(f"'{FAVORITES_KEY}' in {self.path} must be a list")

        favorites = []
        for entry in entries:
            try:
                favorites.append(ServerRecord.from_dict(entry))
            except ValueError as e:
                raise FavoritesError(f"Invalid favorite in {self.path}: {e}") from e

        logger.info(f"Loaded {len(favorites)} favorites from {self.path}")
        return favorites

    async def save(self, favorites: List[ServerRecord]):
        """Rewrite the favorites file with the full list."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps({FAVORITES_KEY: [fav.to_dict() for fav in favorites]}, indent=2)

        tmp_path = self.path.with_name(self.path.name + ".tmp")
        async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
            await f.write(payload)
        await aiofiles.os.replace(tmp_path, self.path)

        logger.debug(f"Saved {len(favorites)} favorites to {self.path}")
