# app/shared/database/transaction.py
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from app.core.exceptions import ConcurrencyConflictError

logger = logging.getLogger(__name__)


@contextmanager
def atomic(db: Session) -> Iterator[Session]:
    """
    Límite transaccional de una operación de negocio.

    Todo lo escrito dentro del bloque se confirma en un único commit; ante
    cualquier excepción se hace rollback completo, de modo que una operación
    que toca varias entidades (inventario, ubicación, carro, tarea, pedido)
    nunca queda aplicada a medias.
    """
    try:
        yield db
        db.commit()
    except StaleDataError as e:
        db.rollback()
        logger.warning(f"Conflicto de concurrencia: {e}")
        raise ConcurrencyConflictError(
            "El registro fue modificado por otra operación. Reintente la solicitud"
        ) from e
    except Exception:
        db.rollback()
        raise
