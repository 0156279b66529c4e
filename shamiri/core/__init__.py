from .database import Database, get_database, reset_database
from .context import ContextBlock, ContextLoader, format_entry_context
from .transcript import assemble, validate_turns
from .sanitizer import sanitize_markup

__all__ = [
    'Database',
    'get_database',
    'reset_database',
    'ContextBlock',
    'ContextLoader',
    'format_entry_context',
    'assemble',
    'validate_turns',
    'sanitize_markup',
]
