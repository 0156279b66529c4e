"""
Ask Service for questions about a single journal entry.

Loads the entry as context, assembles the caller-supplied history behind the
instruction, asks the provider once and returns the sanitised answer. Holds
no conversation state between calls.
"""

from typing import Optional

from shamiri.core.category_store import CategoryStore
from shamiri.core.context import ContextLoader
from shamiri.core.database import Database
from shamiri.core.entry_store import EntryStore
from shamiri.core.sanitizer import sanitize_markup
from shamiri.core.transcript import assemble, validate_turns
from shamiri.errors import UpstreamError
from shamiri.llm.completion import CompletionInvoker
from shamiri.models.schema import AskEntryRequest
from server.logging_config import get_logger

logger = get_logger(__name__)


class AskService:
    def __init__(self, db: Database, invoker: Optional[CompletionInvoker] = None):
        self.context_loader = ContextLoader(EntryStore(db), CategoryStore(db))
        self.invoker = invoker or CompletionInvoker()

    async def ask_about_entry(self, user_id: str, entry_id: str, request: AskEntryRequest) -> str:
        """
        Answer the newest question about ``entry_id``.

        Raises:
            ValidationError: malformed questions/answers (checked before any I/O)
            NotFoundError: the entry is missing or not the user's
            UpstreamError: the provider failed or returned nothing usable
        """
        validate_turns(request.questions, request.answers)

        context = await self.context_loader.load_context(entry_id, user_id)
        messages = assemble(context, request.questions, request.answers)

        logger.info(
            f"Asking about entry {entry_id}: turn {len(request.questions)}, {len(messages)} messages"
        )
        answer = await self.invoker.complete(messages)

        cleaned = sanitize_markup(answer)
        if not cleaned:
            raise UpstreamError(self.invoker.client.get_provider_name(), "answer was empty after sanitising")
        return cleaned
