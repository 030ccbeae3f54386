"""Centralized v1 API router: all module routers are included here."""

from fastapi import APIRouter

from netadmin.modules.audit.router import router as audit_router
from netadmin.modules.communications.router import router as communications_router
from netadmin.modules.governance.router import router as governance_router
from netadmin.modules.incidents.router import router as incidents_router
from netadmin.modules.organizations.router import router as organizations_router
from netadmin.schemas.responses import COMMON_ERROR_RESPONSES

v1_router = APIRouter(prefix="/api/v1", responses=COMMON_ERROR_RESPONSES)
v1_router.include_router(governance_router)
v1_router.include_router(organizations_router)
v1_router.include_router(communications_router)
v1_router.include_router(audit_router)
v1_router.include_router(incidents_router)
