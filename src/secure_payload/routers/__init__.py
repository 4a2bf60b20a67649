from .webhook import router as webhook_router

_routers = [webhook_router]

__all__ = ["get_routers"]


def get_routers():
    return _routers
