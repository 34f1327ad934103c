# Core module exports
from formcheck.core.config import settings, get_settings
from formcheck.core.logging import (
    configure_logging,
    get_logger,
    validator_logger,
    store_logger,
    db_logger,
    dns_logger,
)
from formcheck.core.stores import ErrorStore, MemoryErrorStore, SessionErrorStore, error_key
