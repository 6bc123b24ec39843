# -*- coding: utf-8 -*-
"""Logging setup for the service process."""

import logging
import sys


def setup_logging(level=logging.INFO) -> None:
    """
    Configure a single stdout handler with a pipe separated format.
    Idempotent: won't add duplicate handlers if already configured.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
