from typing import Optional

from common.core.config import settings
from common.core.constants import TokenCounterType
from common.core.otel_axiom_exporter import get_logger

from .char_estimate_counter import CharacterEstimateCounter
from .interface import TokenCounterInterface
from .tiktoken_counter import TiktokenCounter

logger = get_logger(__name__)

_token_counter: Optional[TokenCounterInterface] = None


def get_token_counter() -> TokenCounterInterface:
    """Get the configured token counter."""
    global _token_counter

    if _token_counter is None:
        match settings.token_counter:
            case TokenCounterType.TIKTOKEN:
                _token_counter = TiktokenCounter()
            case TokenCounterType.CHAR_ESTIMATE:
                _token_counter = CharacterEstimateCounter()
            case _:
                raise ValueError(f"Unknown token counter: {settings.token_counter}")
        logger.info(f"Initialized {settings.token_counter.value} token counter")

    return _token_counter
