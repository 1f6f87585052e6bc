from .base import RecordSource
from .memory import InMemoryRecordSource
from .supabase_rest import SupabaseRestSource

__all__ = ["RecordSource", "InMemoryRecordSource", "SupabaseRestSource"]
