# capital_marketplace/routes/__init__.py
from .health_routes import router as health_router
from .company_routes import router as company_router
from .kyc_routes import router as kyc_router
from .financials_routes import router as financials_router
from .document_routes import router as document_router
from .score_routes import router as score_router
from .notification_routes import router as notification_router


def include_routes(app):
    """Include all routes in the FastAPI app."""
    # Health checks have no /api prefix (load balancers)
    app.include_router(health_router)
    app.include_router(company_router, prefix="/api/company")
    app.include_router(kyc_router, prefix="/api/kyc")
    app.include_router(financials_router, prefix="/api/financials")
    app.include_router(document_router, prefix="/api/files")
    app.include_router(score_router, prefix="/api/score")
    app.include_router(notification_router, prefix="/api/notifications")
