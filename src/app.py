"""Holiday Rush storefront FastAPI application.

Every router shares one ``Storefront`` (catalog, sessions, gateway), built
when the application is created and kept on ``app.state``. Each request is
wrapped in the ``ordering`` domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ordering.domain import ordering

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Initialized at module level so uvicorn workers share it.
ordering.init()

from catalogue.api import category_router, product_router  # noqa: E402
from ordering.api.routes import cart_router, checkout_router, coupon_router, order_router  # noqa: E402
from ordering.storefront import Storefront  # noqa: E402
from payments.api.routes import payment_router  # noqa: E402
from shared.config import Settings, load_settings  # noqa: E402
from shared.exception_handlers import register_exception_handlers  # noqa: E402
from shared.logging import add_context, clear_context, configure_logging  # noqa: E402


def create_app(settings: Settings | None = None, storefront: Storefront | None = None) -> FastAPI:
    if storefront is not None:
        settings = storefront.settings
    settings = settings or load_settings()
    configure_logging(env=settings.env, level=settings.log_level, log_dir=settings.log_dir)

    app = FastAPI(
        title="Holiday Rush API",
        description="Demo storefront: catalog, cart, coupons and checkout",
    )
    app.state.storefront = storefront or Storefront(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the ordering domain context for each request."""
        with ordering.domain_context():
            response = await call_next(request)
        return response

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        """Tag every log line of a request with its id and path."""
        clear_context()
        request_id = request.headers.get("x-request-id") or uuid4().hex
        add_context(request_id=request_id, path=request.url.path)
        response = await call_next(request)
        response.headers["x-request-id"] = request_id
        return response

    register_exception_handlers(app)

    # -----------------------------------------------------------------------
    # Routers
    # -----------------------------------------------------------------------
    app.include_router(product_router)
    app.include_router(category_router)
    app.include_router(cart_router)
    app.include_router(coupon_router)
    app.include_router(checkout_router)
    app.include_router(order_router)
    app.include_router(payment_router)

    # -----------------------------------------------------------------------
    # Health
    # -----------------------------------------------------------------------
    @app.get("/health")
    async def health():
        storefront = app.state.storefront
        return JSONResponse(
            content={
                "status": "ok",
                "env": storefront.settings.env,
                "products": len(storefront.catalog),
                "sessions": len(storefront.sessions),
                "orders": storefront.order_count(),
            }
        )

    return app


app = create_app()


def main() -> None:
    import uvicorn

    uvicorn.run("app:app", host="0.0.0.0", port=8000)
