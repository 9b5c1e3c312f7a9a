from .assistant_client import AssistantClient, ContentSegment, OpenAIAssistantClient, ThreadMessage

__all__ = [
    "AssistantClient",
    "ContentSegment",
    "OpenAIAssistantClient",
    "ThreadMessage",
]
