from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
import logging

from api.deps import db as deps_db
from trade_journal.db.session import Database

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def health_check():
    return {"status": "ok", "message": "Backend is running"}


@router.get("/db")
def db_health_check(database: Database = Depends(deps_db.get_database)):
    try:
        database.ping()
    except SQLAlchemyError as e:
        logger.error("Database health check failed: %s", e)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "error", "details": str(e)},
        )
    return {"status": "ok"}
