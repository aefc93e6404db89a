"""
Environment-driven decoder settings.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Literal, Optional

DISCRIMINATOR_MODES = ("static", "anchor")


@dataclass
class DecoderConfig:
    discriminator_mode: Literal["static", "anchor"] = "static"
    chain_id_width: int = 32
    log_level: str = "WARNING"


def load_config() -> DecoderConfig:
    mode = (os.getenv("GATEWAY_DISCRIMINATOR_MODE", "static") or "static").lower()
    if mode not in DISCRIMINATOR_MODES:
        logging.getLogger(__name__).warning(
            f"[CONFIG] Unknown GATEWAY_DISCRIMINATOR_MODE={mode!r}, using 'static'"
        )
        mode = "static"
    width_env = os.getenv("GATEWAY_CHAIN_ID_WIDTH", "32") or "32"
    try:
        width = int(width_env)
    except ValueError:
        logging.getLogger(__name__).warning(
            f"[CONFIG] Invalid GATEWAY_CHAIN_ID_WIDTH={width_env!r}, using 32"
        )
        width = 32
    return DecoderConfig(
        discriminator_mode=mode,
        chain_id_width=width,
        log_level=(os.getenv("GATEWAY_LOG_LEVEL", "WARNING") or "WARNING").upper(),
    )


def configure_logging(config: Optional[DecoderConfig] = None) -> None:
    """Attach a basic handler to the package logger. Opt-in, never run on import."""
    config = config or load_config()
    level = getattr(logging, config.log_level, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("gateway_decoder").setLevel(level)


settings = load_config()
