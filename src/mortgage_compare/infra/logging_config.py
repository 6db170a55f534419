from __future__ import annotations

import logging


def configure_logging(level: str) -> None:
    """Configure the root logger once; later calls only adjust the level."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    logging.getLogger().setLevel(level.upper())
