"""
Configuration de la base de données pour le registre des candidats

Ce module configure le moteur SQLModel et fournit le registre des
candidats injecté dans les routers.
"""

# app_inscriptions/core/database.py
from functools import lru_cache
from typing import Optional
from sqlmodel import SQLModel, create_engine
from sqlalchemy import text
from sqlalchemy.engine import Engine
import logging

from ..core.config import settings

# Importer les modèles pour que SQLModel.metadata.create_all() fonctionne
from ..models.base import StockageCle  # noqa: F401

logger = logging.getLogger(__name__)


def build_engine(database_url: Optional[str] = None, echo: bool = False) -> Engine:
    """Crée un moteur SQLModel ; SQLite est partagé entre threads (TestClient, uvicorn)."""
    url = database_url or settings.DATABASE_URL
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, echo=echo, connect_args=connect_args)


# Engine SQLModel
engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)


def create_db_and_tables(bind: Optional[Engine] = None) -> None:
    """Crée les tables de la base de données."""
    SQLModel.metadata.create_all(bind or engine)
    logger.info("✅ Tables créées avec succès")


@lru_cache(maxsize=None)
def get_store():
    """Dépendance FastAPI : registre des candidats adossé au moteur global"""
    from ..services.candidat_service import CandidatStore
    return CandidatStore(engine, cle=settings.STORAGE_KEY)


# (facultatif) Test de connexion
def test_db_connection(bind: Optional[Engine] = None) -> bool:
    with (bind or engine).connect() as conn:
        conn.execute(text("SELECT 1"))
    return True
