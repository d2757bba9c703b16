# =============================
# backend/app/mcp/tools.py
# =============================
from __future__ import annotations
from .models import ToolDescriptor


def _messages_schema() -> dict:
    return {
        "type": "object",
        "properties": {
            "messages": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "role": {
                            "type": "string",
                            "description": "Role of the message (e.g., system, user, assistant)",
                        },
                        "content": {
                            "type": "string",
                            "description": "The content of the message",
                        },
                    },
                    "required": ["role", "content"],
                },
                "description": "Array of conversation messages",
            },
        },
        "required": ["messages"],
    }


PERPLEXITY_ASK = ToolDescriptor(
    name="perplexity_ask",
    description=(
        "Engages in a conversation using the Sonar API. "
        "Accepts an array of messages (each with a role and content) "
        "and returns a ask completion response from the Perplexity model."
    ),
    inputSchema=_messages_schema(),
)

PERPLEXITY_RESEARCH = ToolDescriptor(
    name="perplexity_research",
    description=(
        "Performs deep research using the Perplexity API. "
        "Accepts an array of messages (each with a role and content) "
        "and returns a comprehensive research response with citations."
    ),
    inputSchema=_messages_schema(),
)

PERPLEXITY_REASON = ToolDescriptor(
    name="perplexity_reason",
    description=(
        "Performs reasoning tasks using the Perplexity API. "
        "Accepts an array of messages (each with a role and content) "
        "and returns a well-reasoned response using the sonar-reasoning-pro model."
    ),
    inputSchema=_messages_schema(),
)

TOOLS: tuple[ToolDescriptor, ...] = (PERPLEXITY_ASK, PERPLEXITY_RESEARCH, PERPLEXITY_REASON)

# tool name -> provider model id
TOOL_MODELS: dict[str, str] = {
    "perplexity_ask": "sonar-pro",
    "perplexity_research": "sonar-deep-research",
    "perplexity_reason": "sonar-reasoning-pro",
}


def list_tools() -> list[dict]:
    return [t.model_dump(by_alias=True) for t in TOOLS]
