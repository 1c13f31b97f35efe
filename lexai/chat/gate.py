"""Admission control in front of the chat session."""

import logging

from lexai.chat.session import ChatSession

logger = logging.getLogger(__name__)


class InputGate:
    """Decides whether the current draft may be sent.

    Submission is allowed only when no exchange is running and the draft has
    non-whitespace text. Rejected intents are dropped without an error.
    """

    def __init__(self, session: ChatSession) -> None:
        self._session = session

    @property
    def draft(self) -> str:
        return self._session.draft_text

    @draft.setter
    def draft(self, value: str | None) -> None:
        self._session.draft_text = value or ""

    @property
    def allowed(self) -> bool:
        return not self._session.in_flight and bool(self._session.draft_text.strip())

    async def request_submit(self) -> bool:
        """Forward the draft to the session if allowed.

        Returns:
            True if the draft was submitted.
        """
        if not self.allowed:
            logger.debug("Submit intent dropped by input gate")
            return False
        return await self._session.submit(self._session.draft_text)
