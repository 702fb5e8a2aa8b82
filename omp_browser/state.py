"""
Cursor, scroll and search state of the interactive list.
"""

from dataclasses import dataclass


FIRST_PRINTABLE = " "
LAST_PRINTABLE = "~"


@dataclass
class ViewState:
    """Transient view state; selected_index stays within [0, len(view) - 1]."""
    search_term: str = ""
    selected_index: int = 0
    offset: int = 0
    page_size: int = 1

    def reset(self):
        """Clear the search and go back to the top."""
        self.search_term = ""
        self.selected_index = 0
        self.offset = 0

    def set_page_size(self, rows: int):
        self.page_size = max(1, rows)

    def move_up(self):
        self.selected_index = max(0, self.selected_index - 1)
        if self.selected_index < self.offset:
            self.offset = self.selected_index

    def move_down(self, count: int):
        """Move the cursor down within a list of count items."""
        self.selected_index = min(self.selected_index + 1, max(0, count - 1))
        if self.selected_index >= self.offset + self.page_size:
            self.offset = self.selected_index - self.page_size + 1

    def clamp(self, count: int):
        """Pull cursor and scroll offset back into a list of count items."""
        if count <= 0:
            self.selected_index = 0
            self.offset = 0
            return

        self.selected_index = min(max(0, self.selected_index), count - 1)
        self.offset = min(max(0, self.offset), self.selected_index)
        if self.selected_index >= self.offset + self.page_size:
            self.offset = self.selected_index - self.page_size + 1

    def type_char(self, char: str) -> bool:
        """
        Append a printable ASCII character to the search term.

        A leading space is ignored. Returns True if the term changed.
        """
        if len(char) != 1 or not FIRST_PRINTABLE <= char <= LAST_PRINTABLE:
            return False
        if char == " " and not self.search_term:
            return False

        self.search_term += char
        self.selected_index = 0
        self.offset = 0
        return True

    def backspace(self) -> bool:
        if not self.search_term:
            return False
        self.search_term = self.search_term[:-1]
        return True

    def visible_range(self, count: int) -> range:
        """Indices of the rows shown on the current page."""
        return range(self.offset, min(self.offset + self.page_size, count))
