"""
Router pour le tableau de bord et les statistiques
"""
from fastapi import APIRouter, Depends
from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging

from ..core.config import settings
from ..core.database import get_store
from ..schemas import StatistiquesResponse
from ..services import CandidatStore, StatistiquesService

logger = logging.getLogger(__name__)

router = APIRouter()


def fuseau_local():
    try:
        return ZoneInfo(settings.TIMEZONE)
    except ZoneInfoNotFoundError:
        # Données de fuseau absentes (Windows sans tzdata)
        logger.warning(f"⚠️ Fuseau {settings.TIMEZONE} introuvable, utilisation de UTC")
        return timezone.utc


@router.get("/stats", response_model=StatistiquesResponse)
async def get_dashboard_stats(
    store: CandidatStore = Depends(get_store),
):
    """Récupère les statistiques du tableau de bord"""
    maintenant = datetime.now(fuseau_local())
    return StatistiquesService.calculer(store.get_all(), maintenant)
