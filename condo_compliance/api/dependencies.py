"""Dependency injection for FastAPI endpoints"""

from datetime import date, datetime
from typing import List
from zoneinfo import ZoneInfo

from fastapi import Header, HTTPException, Request

from condo_compliance.domain.models import ObligationDefinition


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_registry(request: Request) -> List[ObligationDefinition]:
    """Obligation registry validated at application startup"""
    return request.app.state.registry


def get_units(request: Request) -> List[str]:
    """Unit roster validated at application startup"""
    return request.app.state.units


def get_today(request: Request) -> date:
    """Read the clock once, in the condominium's timezone"""
    return datetime.now(ZoneInfo(request.app.state.timezone)).date()


def require_compliance_role(request: Request, x_user_role: str = Header("resident")) -> str:
    """
    Gate compliance cards by role.

    The caller's role comes from the authentication layer in front of this
    service; the engine itself never sees it.
    """
    if x_user_role not in request.app.state.compliance_roles:
        raise HTTPException(status_code=403, detail="Compliance status is restricted")
    return x_user_role
