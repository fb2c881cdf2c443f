"""
Core fixed-point arithmetic, accounting models, and storage contracts.

This module contains the deterministic building blocks: 256-bit integer
kernel, UD60x18 / SD59x18 domains, Rebase and token precision models.

Modules log through stdlib module loggers under ``src.core`` and install no
handlers. Applications opt into JSON log lines with
``src.core.logging_config.setup_logging()``.
"""
