import json
from abc import ABC, abstractmethod
from typing import Any, Dict, List


class TokenCounterInterface(ABC):
    """Deterministic metering cost of text sent to a language model."""

    @abstractmethod
    def count_text(self, text: str) -> int:
        """Number of tokens ``text`` encodes to. Empty text costs 0."""
        pass

    def count_tools(self, tools: List[Dict[str, Any]]) -> int:
        """Cost of a tool schema, counted over its compact JSON form."""
        if not tools:
            return 0
        return self.count_text(json.dumps(tools, separators=(",", ":")))
