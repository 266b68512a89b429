"""
totpgen Web Framework Integrations

Supported frameworks:
- FastAPI: TotpRouter (install the `fastapi` extra)
"""


# Lazy import so the core does not require FastAPI
def __getattr__(name):
    """Lazy import for framework modules."""
    fastapi_exports = {
        "TotpRouter",
        "CodeRequest",
        "CodeResponse",
        "ParseRequest",
    }
    if name in fastapi_exports:
        from totpgen.integrations import fastapi
        return getattr(fastapi, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    # FastAPI
    "TotpRouter",
    "CodeRequest",
    "CodeResponse",
    "ParseRequest",
]
