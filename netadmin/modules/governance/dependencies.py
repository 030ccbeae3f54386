"""FastAPI dependencies turning the authenticated caller into an AdminContext."""

import logging
from collections.abc import Callable

from fastapi import Depends

from netadmin.exceptions import ForbiddenException
from netadmin.modules.governance.auth import AuthenticatedUser, get_current_user
from netadmin.modules.governance.context import AdminContext, resolve_admin_context
from netadmin.modules.governance.roles import is_admin

logger = logging.getLogger(__name__)


def get_admin_context(user: AuthenticatedUser = Depends(get_current_user)) -> AdminContext:
    """Context for any authenticated caller, admin or not."""
    return resolve_admin_context(user)


def require_admin(ctx: AdminContext = Depends(get_admin_context)) -> AdminContext:
    if not is_admin(ctx.role):
        logger.warning("Non-admin %s (%s) denied admin endpoint", ctx.user_id, ctx.role)
        raise ForbiddenException("Admin privileges are required")
    return ctx


def require_capability(check: Callable[[AdminContext], bool], description: str):
    """Factory for a dependency that gates an endpoint on a context-only predicate."""

    def _check(ctx: AdminContext = Depends(require_admin)) -> AdminContext:
        if not check(ctx):
            logger.warning("Admin %s (%s) denied: %s", ctx.user_id, ctx.role, description)
            raise ForbiddenException(f"Permission denied: {description}")
        return ctx

    return _check
