"""
Router pour les exports (JSON, CSV, Excel, document imprimable)
"""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import HTMLResponse, Response
from typing import List, Optional
import re

from ..core.config import settings
from ..core.database import get_store
from ..models.enums import FormatExport
from ..schemas import CandidatFiltres
from ..services import CandidatStore, ExportService, RechercheService
from .candidats import get_filtres

router = APIRouter()


def nom_fichier_sur(nom: Optional[str]) -> str:
    """Nom de fichier limité aux caractères sûrs pour Content-Disposition"""
    nettoye = re.sub(r"[^A-Za-z0-9_.-]+", "_", nom or "").strip("._")
    return nettoye or settings.EXPORT_FILENAME


@router.get("/fiche/{candidat_id}", response_class=HTMLResponse)
async def export_fiche(
    candidat_id: str,
    store: CandidatStore = Depends(get_store),
):
    """Fiche de renseignements imprimable d'un candidat"""
    candidat = store.get_by_id(candidat_id)
    if not candidat:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Candidat non trouvé"
        )
    return HTMLResponse(ExportService.exporter_fiche(candidat))


@router.get("/{format}")
async def export_candidats(
    format: FormatExport,
    ids: Optional[List[str]] = Query(None, description="IDs sélectionnés (sinon la liste filtrée)"),
    nom_fichier: Optional[str] = Query(None, description="Nom du fichier sans extension"),
    filtres: CandidatFiltres = Depends(get_filtres),
    store: CandidatStore = Depends(get_store),
):
    """Exporte la sélection, ou à défaut la liste filtrée"""
    candidats = store.get_all()
    if ids:
        candidats = RechercheService.selectionner(candidats, ids)
    else:
        candidats = RechercheService.filtrer(candidats, filtres)

    resultat = ExportService.exporter(candidats, format, nom_fichier=nom_fichier_sur(nom_fichier))
    return Response(
        content=resultat.contenu,
        media_type=resultat.media_type,
        headers={"Content-Disposition": f'attachment; filename="{resultat.nom_fichier}"'},
    )
