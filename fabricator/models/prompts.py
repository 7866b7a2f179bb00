from typing import List, Optional

from pydantic import BaseModel

from fabricator.models.openai import ChatCompletionMessage


class PromptPair(BaseModel):
    """System and user prompt for one synthesized endpoint"""
    system_prompt: str
    user_prompt: str

    def to_messages(self) -> List[ChatCompletionMessage]:
        return [
            ChatCompletionMessage(role="system", content=self.system_prompt),
            ChatCompletionMessage(role="user", content=self.user_prompt),
        ]


class EndpointRequest(BaseModel):
    """What the caller asked for, after path and query normalization"""
    resource_name: str
    fields: Optional[List[str]] = None
