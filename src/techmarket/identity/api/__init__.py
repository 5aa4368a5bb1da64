from techmarket.identity.api.routes import user_router

__all__ = ["user_router"]
