"""
Prompts sent to the model for a synthesized endpoint.

The system prompt always closes with JSON_ONLY_DIRECTIVE, whatever the
endpoint or field list.
"""

from typing import List, Optional

from fabricator.models.prompts import PromptPair

PERSONA_PROMPT = (
    "You are %(persona)s that lives at %(host)s and generates JSON responses "
    "for any endpoint requested by the user. "
    "This request is for the %(host)s/%(endpoint)s endpoint."
)

FIELDS_PROMPT = " The response must include these specific fields: %s."

JSON_ONLY_DIRECTIVE = (
    " You must respond with ONLY valid JSON - no extra text, no markdown "
    "formatting, no explanations. Ensure all JSON strings are properly escaped. "
    "The JSON must be complete and parseable. Always return at least one "
    "key-value pair. Never return empty objects or arrays unless specifically "
    "requested."
)

USER_PROMPT = "Create a JSON response for the endpoint: %s"
USER_FIELDS_PROMPT = " with the following fields: %s"
USER_CLOSING = ". Ensure the response is valid, complete JSON with meaningful content."


def build_prompts(
    resource_name: str,
    fields: Optional[List[str]] = None,
    persona: str = "a helpful and playful API assistant",
    host: str = "api.example.com",
) -> PromptPair:
    """Build the system and user prompt for one endpoint."""
    system_prompt = PERSONA_PROMPT % {
        "persona": persona,
        "host": host,
        "endpoint": resource_name,
    }
    user_prompt = USER_PROMPT % resource_name

    if fields:
        field_list = ", ".join(fields)
        system_prompt += FIELDS_PROMPT % field_list
        user_prompt += USER_FIELDS_PROMPT % field_list

    system_prompt += JSON_ONLY_DIRECTIVE
    user_prompt += USER_CLOSING

    return PromptPair(system_prompt=system_prompt, user_prompt=user_prompt)
