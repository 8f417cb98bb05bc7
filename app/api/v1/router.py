"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from app.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    bookings,
    clients,
    collectibles,
    cost_estimates,
    finance_requests,
    health,
    job_orders,
    pdf,
    petty_cash,
    products,
    quotations,
    reports,
    screen_schedules,
    service_assignments,
    site_controls,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(products.router, prefix="/products", tags=["products"])
api_router.include_router(clients.router, prefix="/clients", tags=["clients"])
api_router.include_router(quotations.router, prefix="/quotations", tags=["quotations"])
api_router.include_router(
    cost_estimates.router, prefix="/cost-estimates", tags=["cost-estimates"]
)
api_router.include_router(job_orders.router, prefix="/job-orders", tags=["job-orders"])
api_router.include_router(
    service_assignments.router, prefix="/service-assignments", tags=["service-assignments"]
)
api_router.include_router(reports.router, prefix="/reports", tags=["reports"])
api_router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])
api_router.include_router(collectibles.router, prefix="/collectibles", tags=["collectibles"])
api_router.include_router(
    finance_requests.router, prefix="/finance-requests", tags=["finance-requests"]
)
api_router.include_router(petty_cash.router, prefix="/petty-cash", tags=["petty-cash"])
api_router.include_router(
    screen_schedules.router, prefix="/screen-schedules", tags=["screen-schedules"]
)
api_router.include_router(pdf.router, prefix="/pdf", tags=["pdf"])
api_router.include_router(
    site_controls.router, prefix="/sites/{product_id}/controls", tags=["site-controls"]
)
