from __future__ import annotations

import logging

from mortgage_compare.infra.logging_config import configure_logging


def test_sets_root_level() -> None:
    root = logging.getLogger()
    previous = root.level
    try:
        configure_logging("debug")
        assert root.level == logging.DEBUG

        configure_logging("WARNING")
        assert root.level == logging.WARNING
    finally:
        root.setLevel(previous)
