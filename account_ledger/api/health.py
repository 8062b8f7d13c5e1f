"""
Health check endpoint.

Used by load balancers, monitoring systems, and humans
to verify the application is running and responsive.
"""

from fastapi import APIRouter, Depends
from sqlalchemy import text

from account_ledger.errors import StoreUnavailable
from account_ledger.models.base import Database, get_database

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(database: Database = Depends(get_database)):
    """
    Return application health status including database connectivity.

    If the database cannot run a trivial query the instance is
    reported as degraded rather than failing the request.
    """
    try:
        with database.unit_of_work(write=False) as db:
            db.execute(text("SELECT 1"))
        db_status = "healthy"
    except StoreUnavailable:
        db_status = "unhealthy"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "service": "account-ledger",
        "database": db_status,
    }
