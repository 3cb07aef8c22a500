"""Helper modules for the HlaPrint Bridge application."""

__all__ = [
    "request_builder",
    "validator",
]
