from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field


class ChatCompletionMessageContent(BaseModel):
    """Content part of a message"""
    type: str
    text: Optional[str] = None


class ChatCompletionMessage(BaseModel):
    """Message in a chat completion"""
    role: str
    content: Optional[Union[str, List[ChatCompletionMessageContent]]] = None

    @property
    def text(self) -> Optional[str]:
        """The message content flattened to a single string, if any."""
        if self.content is None or isinstance(self.content, str):
            return self.content
        parts = [part.text for part in self.content if part.text]
        return "".join(parts) if parts else None


class ChatCompletionRequest(BaseModel):
    """Request for chat completion"""
    model: str
    messages: List[ChatCompletionMessage]
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    response_format: Optional[Dict[str, str]] = None


class ChatCompletionChoice(BaseModel):
    """Choice in a chat completion response"""
    index: int = 0
    message: ChatCompletionMessage
    finish_reason: Optional[str] = None


class ChatCompletionResponse(BaseModel):
    """Response from chat completion"""
    id: str
    object: str
    created: int
    model: str
    choices: List[ChatCompletionChoice] = Field(default_factory=list)
    usage: Optional[Dict[str, Any]] = None

    @property
    def content(self) -> Optional[str]:
        """Text of the first choice, or None when the model returned nothing."""
        if not self.choices:
            return None
        return self.choices[0].message.text
