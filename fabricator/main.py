from typing import Optional

import uvicorn
from litestar import Litestar
from litestar.di import Provide
from litestar.handlers import get
from litestar.exceptions import MethodNotAllowedException
from litestar.openapi import OpenAPIConfig

from fabricator.config import Settings, settings as default_settings
from fabricator.logging_config import setup_logging
from fabricator.routes.endpoints import (
    method_not_allowed_handler,
    synthesize_endpoint,
)
from fabricator.services.openai import OpenAIService
from fabricator.services.synthesizer import (
    ChatCompletionClient,
    EndpointSynthesizer,
    Sleep,
)


@get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint for the server."""
    return {"status": "ok"}


def create_app(
    settings: Optional[Settings] = None,
    completion_client: Optional[ChatCompletionClient] = None,
    sleep: Optional[Sleep] = None,
) -> Litestar:
    """
    Create and configure the Litestar application.

    The upstream client is created once here and shared by every request;
    pass ``completion_client`` to use another one (it is then not closed on
    shutdown).
    """
    settings = settings or default_settings

    on_shutdown = []
    if completion_client is None:
        openai_service = OpenAIService(
            api_key=settings.OPENAI_API_KEY,
            base_url=settings.OPENAI_BASE_URL,
            timeout=settings.OPENAI_TIMEOUT,
        )
        on_shutdown.append(openai_service.close)
        completion_client = openai_service

    synthesizer = EndpointSynthesizer(completion_client, settings, sleep=sleep)

    def provide_settings() -> Settings:
        return settings

    def provide_synthesizer() -> EndpointSynthesizer:
        return synthesizer

    openapi_config = OpenAPIConfig(
        title="Fabricator API",
        version=settings.VERSION,
        summary="A fake REST API generated by a language model",
        description=(
            "Every GET path is treated as a resource and answered with a JSON "
            "document the model invents for it."
        ),
    )

    return Litestar(
        route_handlers=[health_check, synthesize_endpoint],
        dependencies={
            "settings": Provide(provide_settings, sync_to_thread=False),
            "synthesizer": Provide(provide_synthesizer, sync_to_thread=False),
        },
        exception_handlers={
            MethodNotAllowedException: method_not_allowed_handler(settings),
        },
        on_shutdown=on_shutdown,
        openapi_config=openapi_config,
        debug=settings.DEBUG,
        # Root logging is owned by setup_logging
        logging_config=None,
    )


app = create_app()

if __name__ == "__main__":
    setup_logging(
        log_level=default_settings.LOG_LEVEL, json_logs=default_settings.LOG_JSON
    )

    uvicorn.run(
        "fabricator.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        reload=default_settings.DEBUG,
    )
