# Copyright 2026 Neotoken Contributors
# SPDX-License-Identifier: Apache-2.0

"""Logging helper.

The library only creates loggers; configuring handlers is left to the
application (the CLI does it with ``--verbose``).

Example:
    >>> from neotoken.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Tokenizing document")
"""

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under ``neotoken``.

    Args:
        name: Logger name (typically ``__name__``).

    Returns:
        A standard library logger.

    Example:
        >>> get_logger("mymodule").name
        'neotoken.mymodule'
    """
    if not (name == "neotoken" or name.startswith("neotoken.")):
        name = f"neotoken.{name}"
    return logging.getLogger(name)
