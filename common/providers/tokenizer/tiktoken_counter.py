import tiktoken

from common.core.config import settings
from .interface import TokenCounterInterface


class TiktokenCounter(TokenCounterInterface):
    """BPE token counts matching the chat model's own tokenizer."""

    def __init__(self, encoding_name: str = None):
        self.encoding_name = encoding_name or settings.token_encoding
        self._encoding = None

    @property
    def encoding(self) -> tiktoken.Encoding:
        # Loading may download the BPE ranks, so defer it to first use
        if self._encoding is None:
            self._encoding = tiktoken.get_encoding(self.encoding_name)
        return self._encoding

    def count_text(self, text: str) -> int:
        if not text:
            return 0
        return len(self.encoding.encode(text, disallowed_special=()))
