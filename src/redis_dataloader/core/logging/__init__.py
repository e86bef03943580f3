from .logger import (
    PACKAGE_LOGGER_NAME,
    get_loader_name,
    get_logger,
    log_stage,
    reset_loader_name,
    set_loader_name,
    setup_logging,
)

__all__ = [
    "PACKAGE_LOGGER_NAME",
    "get_loader_name",
    "get_logger",
    "log_stage",
    "reset_loader_name",
    "set_loader_name",
    "setup_logging",
]
