from __future__ import annotations

import hmac
from typing import Optional

from fastapi import APIRouter, Depends, Header

from briklyst.core.config import INTERNAL_METRICS_TOKEN
from briklyst.core.errors import NotFoundError
from briklyst.core.metrics import request_metrics

router = APIRouter(prefix="/internal/metrics", tags=["internal-metrics"])


def require_metrics_token(x_internal_token: Optional[str] = Header(default=None)) -> None:
    # without a configured token the endpoint does not exist
    if not INTERNAL_METRICS_TOKEN or not x_internal_token:
        raise NotFoundError()
    if not hmac.compare_digest(x_internal_token, INTERNAL_METRICS_TOKEN):
        raise NotFoundError()


@router.get("", dependencies=[Depends(require_metrics_token)])
def endpoint_metrics():
    return {"endpoints": request_metrics.snapshot()}
