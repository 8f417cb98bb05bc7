"""Company scoping for documents loaded by ID.

The backend reads Firestore with a service account, so security rules do not
apply; every by-ID read or write of a company document checks the caller here.
"""

from __future__ import annotations

import logging

from app.application.dtos.common import CurrentUser
from app.domain.exceptions import AuthorizationException

logger = logging.getLogger(__name__)


def ensure_company_access(
    resource: str,
    resource_id: str,
    owner_company_id: str | None,
    user: CurrentUser | None,
    action: str = "read",
) -> None:
    """Raise AuthorizationException when the document belongs to another company.

    Documents without a ``company_id`` are left open to any signed-in user;
    older documents created by the web app do not always carry one.
    """
    if not owner_company_id:
        return
    if user is not None and user.company_id == owner_company_id:
        return
    logger.warning(
        "User %s (company %s) denied %s on %s %s of company %s",
        user.uid if user else None,
        user.company_id if user else None,
        action,
        resource,
        resource_id,
        owner_company_id,
    )
    raise AuthorizationException(resource, action)
