"""FastAPI dependencies shared by every router."""

from fastapi import Request


def get_storefront(request: Request):
    """The application's ``Storefront``, built once at startup."""
    return request.app.state.storefront
