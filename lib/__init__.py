# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for database operations
# - catalog.py: Tag filtering and sorting for the portfolio directory
# - utils.py: Shared utilities (UUID normalization, form fields, timestamps)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.catalog import SortOption, filter_by_tag, sort_portfolios, unique_tags
from lib.utils import normalize_uuid, parse_timestamp, split_list_field

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Catalog
    "SortOption",
    "filter_by_tag",
    "sort_portfolios",
    "unique_tags",
    # Utils
    "normalize_uuid",
    "parse_timestamp",
    "split_list_field",
]
