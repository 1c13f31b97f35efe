"""In-memory transcript of the chat conversation.

Append-only log of ConversationEntry objects. The only mutations allowed after
append are content updates and finalization of the single streaming entry.
"""

import itertools
import logging
from collections.abc import Iterator

from lexai.models.schemas import (
    TERMINAL_LIFECYCLES,
    ConversationEntry,
    EntryLifecycle,
)

logger = logging.getLogger(__name__)


class TranscriptInvariantError(AssertionError):
    """Raised when a transcript mutation would break an ordering or lifecycle rule.

    Usually means two exchanges are writing to the same entry.
    """


class TranscriptStore:
    """Ordered log of conversation entries for one session."""

    def __init__(self) -> None:
        self._entries: list[ConversationEntry] = []
        self._index: dict[int, ConversationEntry] = {}
        self._ids = itertools.count(1)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ConversationEntry]:
        return iter(self._entries)

    @property
    def entries(self) -> list[ConversationEntry]:
        """Snapshot of the entries in store order."""
        return list(self._entries)

    @property
    def last(self) -> ConversationEntry | None:
        return self._entries[-1] if self._entries else None

    @property
    def streaming_entry(self) -> ConversationEntry | None:
        """The entry currently receiving fragments, if any."""
        for entry in reversed(self._entries):
            if entry.is_streaming:
                return entry
        return None

    def next_id(self) -> int:
        """Allocate the next entry id."""
        return next(self._ids)

    def get(self, entry_id: int) -> ConversationEntry:
        """Look up an entry by id.

        Raises:
            TranscriptInvariantError: If no entry has that id.
        """
        try:
            return self._index[entry_id]
        except KeyError:
            raise TranscriptInvariantError(f"Unknown transcript entry: {entry_id}") from None

    def append(self, entry: ConversationEntry) -> ConversationEntry:
        """Add an entry to the end of the transcript.

        Args:
            entry: Entry with an id from next_id().

        Returns:
            The appended entry.

        Raises:
            TranscriptInvariantError: If the id does not increase or a second
                streaming entry is added.
        """
        if self._entries and entry.id <= self._entries[-1].id:
            raise TranscriptInvariantError(
                f"Entry id {entry.id} does not follow {self._entries[-1].id}"
            )
        if entry.is_streaming and self.streaming_entry is not None:
            raise TranscriptInvariantError(
                f"Entry {self.streaming_entry.id} is already streaming"
            )

        self._entries.append(entry)
        self._index[entry.id] = entry
        return entry

    def _streaming(self, entry_id: int) -> ConversationEntry:
        entry = self.get(entry_id)
        if not entry.is_streaming:
            raise TranscriptInvariantError(
                f"Entry {entry_id} is {entry.lifecycle.value}, not streaming"
            )
        return entry

    def update_content(self, entry_id: int, content: str) -> ConversationEntry:
        """Replace the content of the streaming entry."""
        entry = self._streaming(entry_id)
        entry.content = content
        return entry

    def finalize(
        self,
        entry_id: int,
        outcome: EntryLifecycle,
        content: str | None = None,
    ) -> ConversationEntry:
        """Move the streaming entry to a terminal state.

        Args:
            entry_id: Id of the streaming entry.
            outcome: COMPLETE or FAILED.
            content: Optional replacement content applied before freezing.

        Returns:
            The finalized entry.

        Raises:
            TranscriptInvariantError: If the entry is not streaming or the
                outcome is not terminal.
        """
        if outcome not in TERMINAL_LIFECYCLES:
            raise TranscriptInvariantError(f"{outcome.value} is not a terminal state")

        entry = self._streaming(entry_id)
        if content is not None:
            entry.content = content
        entry.lifecycle = outcome
        logger.debug(f"Entry {entry_id} finalized as {outcome.value}")
        return entry
