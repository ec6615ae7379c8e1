# Copyright 2026 Neotoken Contributors
# SPDX-License-Identifier: Apache-2.0

"""Shared utilities."""

from neotoken.utils.logger import get_logger

__all__ = ["get_logger"]
