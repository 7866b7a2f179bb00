from fabricator.routes.endpoints import synthesize_endpoint

__all__ = ["synthesize_endpoint"]
