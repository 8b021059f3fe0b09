import logging

from flask import Blueprint
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from models import storage

bp = Blueprint("health", __name__)

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@bp.get("/health")
def health():
    """
    Health check (API process and database)
    ---
    tags:
      - Health
    responses:
      200:
        description: API and database are up
        schema:
          type: object
          properties:
            status:
              type: string
              example: ok
            database:
              type: string
              example: ok
            version:
              type: string
              example: 1.0.0
      503:
        description: Database unreachable
    """
    try:
        storage.get_session().execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Health check: database unreachable")
        return {"status": "degraded", "database": "unavailable", "version": VERSION}, 503
    return {"status": "ok", "database": "ok", "version": VERSION}, 200
