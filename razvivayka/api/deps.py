from fastapi import Request

from razvivayka.core.context import AppContext


def get_app_context(request: Request) -> AppContext:
    """
    Returns the AppContext created in the lifespan.
    Tests override this dependency with their own context.
    """
    ctx = getattr(request.app.state, "ctx", None)
    if ctx is None:
        raise RuntimeError("Application context not initialized")
    return ctx
