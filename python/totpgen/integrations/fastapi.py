"""
FastAPI integration for totpgen.

Serves codes to a browser or other display collaborator. The router
holds no secrets between requests: each request carries its own secret
or provisioning URI.

Example:
    from fastapi import FastAPI
    from totpgen.integrations.fastapi import TotpRouter

    app = FastAPI()
    app.include_router(TotpRouter().router)

Endpoints:
    POST /totp/code   {"secret": "..."} or {"uri": "otpauth://..."}
    POST /totp/parse  {"uri": "otpauth://..."}
"""

import logging
import time
from typing import Any, Callable, Dict, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from totpgen import uri as otpauth
from totpgen.config import TotpConfig
from totpgen.errors import InvalidParameter, MissingSecret, OTPError
from totpgen.totp import TOTP

logger = logging.getLogger(__name__)


class CodeRequest(BaseModel):
    """
    Request for the current code

    Send either `secret` with optional algorithm/digits/period, or `uri`
    alone; a URI carries its own parameters.
    """

    secret: Optional[str] = Field(None, min_length=1, max_length=256)
    uri: Optional[str] = Field(None, min_length=1, max_length=2048)
    algorithm: Optional[str] = None
    digits: Optional[int] = None
    period: Optional[int] = None
    at: Optional[int] = Field(None, ge=0)


class CodeResponse(BaseModel):
    """Current code and countdown"""

    code: str
    seconds_remaining: int
    period: int
    digits: int


class ParseRequest(BaseModel):
    """Request to inspect a provisioning URI"""

    uri: str = Field(..., min_length=1, max_length=2048)


class TotpRouter:
    """FastAPI router for TOTP endpoints"""

    def __init__(self, prefix: str = "/totp", clock: Callable[[], float] = time.time):
        """
        Initialize TOTP router.

        Args:
            prefix: Route prefix
            clock: Time source used when a request has no `at`
        """
        self.clock = clock
        self.router = APIRouter(prefix=prefix, tags=["totp"])
        self._setup_routes()

    @staticmethod
    def _reject(e: OTPError) -> HTTPException:
        logger.info("Rejected TOTP request: %s", e.kind.value)
        return HTTPException(status_code=400, detail=e.to_dict())

    def _build(self, request: CodeRequest) -> TOTP:
        if request.uri:
            overrides = [
                name for name in ("algorithm", "digits", "period")
                if getattr(request, name) is not None
            ]
            if overrides:
                raise InvalidParameter(
                    "Parameters come from the URI; do not also send "
                    + ", ".join(overrides),
                    fragment=overrides[0],
                )
            return TOTP.from_uri(request.uri)
        if not request.secret:
            raise MissingSecret("Provide either secret or uri", fragment="secret")
        config = TotpConfig().with_overrides(
            algorithm=request.algorithm,
            digits=request.digits,
            period=request.period,
        )
        return TOTP.from_base32(request.secret, config)

    def _setup_routes(self) -> None:
        """Set up API routes"""

        @self.router.post("/code", response_model=CodeResponse)
        async def code(request: CodeRequest) -> Dict[str, Any]:
            """Current code for a secret or URI"""
            at = request.at if request.at is not None else self.clock()
            try:
                totp = self._build(request)
                return {
                    "code": totp.generate(at),
                    "seconds_remaining": totp.seconds_remaining(at),
                    "period": totp.config.period,
                    "digits": totp.config.digits,
                }
            except OTPError as e:
                raise self._reject(e) from e

        @self.router.post("/parse")
        async def parse(request: ParseRequest) -> Dict[str, Any]:
            """Provisioning URI fields, without the secret"""
            try:
                parsed = otpauth.parse(request.uri)
                parsed.key()
            except OTPError as e:
                raise self._reject(e) from e
            return parsed.to_dict()
