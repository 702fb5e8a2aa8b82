"""
Filtering and ordering of the server list.

Builds the view shown to the user from the fetched servers, the favorites,
the current search term and the blacklist.
"""

import sys
from typing import Dict, Iterable, List

from .models import ServerRecord


FAVORITE_SORT_KEY = sys.maxsize


def matches_search(record: ServerRecord, search_term: str) -> bool:
    """
    Check a record against the search term.

    Hostname and gamemode match case-insensitively, the address is a plain
    substring match.
    """
    if not search_term:
        return True

    term = search_term.casefold()
    if term in record.hostname.casefold():
        return True
    if record.gamemode is not None and term in record.gamemode.casefold():
        return True
    return search_term in record.address


def compute_view(servers: List[ServerRecord], favorites: List[ServerRecord],
                 search_term: str, blacklist: Iterable[str]) -> List[ServerRecord]:
    """
    Compute the ordered list of servers to display.

    Args:
        servers: Freshly fetched servers
        favorites: Favorite servers, possibly with stale metadata
        search_term: Current search buffer
        blacklist: Addresses that are never shown

    Returns:
        Favorites first, then the rest by player count, highest first.
        Each address appears at most once; a favorite wins over the fetched copy.
    """
    blocked = set(blacklist)
    favorite_addresses = {fav.address for fav in favorites}

    seen = set()
    view = []
    for record in list(favorites) + list(servers):
        if record.address in seen:
            continue
        seen.add(record.address)

        if record.address in blocked:
            continue
        if not matches_search(record, search_term):
            continue
        view.append(record)

    def sort_key(record: ServerRecord) -> int:
        if record.address in favorite_addresses:
            return FAVORITE_SORT_KEY
        return record.players or 0

    # sorted() is stable, so favorites keep their insertion order
    return sorted(view, key=sort_key, reverse=True)


def refresh_favorite_info(favorites: List[ServerRecord], servers: List[ServerRecord]):
    """
    Copy fresh metadata onto favorites found in the server list.

    Favorites missing from the list keep their last known metadata; the
    favorites list itself is not reordered.
    """
    by_address: Dict[str, ServerRecord] = {server.address: server for server in servers}

    for favorite in favorites:
        fresh = by_address.get(favorite.address)
        if fresh is not None:
            favorite.update_from(fresh)
