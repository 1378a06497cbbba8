"""
Chat completion service.

Prices the request, passes it through the usage gate and relays the upstream
completion. Nothing reaches the completion provider unless the gate admits
the request and the usage charge has been written.
"""

from typing import Any, Dict, List, Optional

from common.core.otel_axiom_exporter import get_logger, trace_span
from common.providers.chat_completion.interface import ChatCompletionProviderInterface
from common.providers.chat_completion.models import CompletionRelay
from common.providers.tokenizer.interface import TokenCounterInterface
from packages.billing.models.domain.usage import RequestCost
from packages.billing.policies import CHAT_POLICY
from packages.billing.services.usage_gate import UsageGate
from packages.chat.models.schemas.chat import ChatRequest
from packages.chat.prompts import SYSTEM_PROMPT, build_tools

logger = get_logger(__name__)


class ChatService:
    def __init__(
        self,
        gate: UsageGate,
        token_counter: TokenCounterInterface,
        provider: ChatCompletionProviderInterface,
    ):
        self.gate = gate
        self.token_counter = token_counter
        self.provider = provider

    def estimate_cost(
        self, request: ChatRequest, tools: Optional[List[Dict[str, Any]]]
    ) -> RequestCost:
        """System prompt and sent tools, plus the content of every message."""
        overhead = self.token_counter.count_text(SYSTEM_PROMPT)
        if tools:
            overhead += self.token_counter.count_tools(tools)
        message_tokens = sum(
            self.token_counter.count_text(message.content)
            for message in request.messages
        )
        return RequestCost(overhead_tokens=overhead, message_tokens=message_tokens)

    @trace_span
    async def complete(
        self, credential: Optional[str], request: ChatRequest
    ) -> CompletionRelay:
        tools = build_tools(request.version, request.db_schema) if request.use_tools else None
        cost = self.estimate_cost(request, tools)

        admission = await self.gate.admit(credential, CHAT_POLICY, cost=cost)
        logger.info(
            f"Chat admitted for {admission.identity.account_id}",
            extra={
                "account_id": admission.identity.account_id,
                "overhead_tokens": cost.overhead_tokens,
                "message_tokens": cost.message_tokens,
                "stream": request.stream,
                "use_tools": request.use_tools,
            },
        )

        messages = [message.to_upstream() for message in request.messages]
        messages.append({"role": "system", "content": SYSTEM_PROMPT})
        return await self.provider.open_completion(
            messages, tools=tools, stream=request.stream
        )
