"""
Router pour la gestion des candidats
"""
from fastapi import APIRouter, Depends, HTTPException, status, Query
from typing import Optional

from ..core.config import settings
from ..core.database import get_store
from ..models.enums import (
    Arrondissement, DESTINATIONS, ExperienceGenerale, FILIERES, FORMATIONS, Genre,
    LANGUES_DISPONIBLES, Milieu, NiveauEtude, NiveauLangue, Objectif, Orientation,
    SituationMatrimoniale, SOURCES_INSCRIPTION, TypeCandidat, TypeDiplome,
)
from ..schemas import (
    Candidat, CandidatCreate, CandidatUpdate, CandidatFiltres, PaginatedResponse,
)
from ..services import CandidatStore, RechercheService

router = APIRouter()


def get_filtres(
    search: str = Query("", description="Recherche libre (nom, prénom, CIN, email, téléphone)"),
    type_candidat: Optional[str] = Query(None, description="Filtrer par type de candidat"),
    objectif: Optional[str] = Query(None, description="Filtrer par objectif"),
    source_inscription: Optional[str] = Query(None, description="Filtrer par source d'inscription"),
    genre: Optional[str] = Query(None, description="Filtrer par genre"),
    milieu: Optional[str] = Query(None, description="Filtrer par milieu"),
    orientation: Optional[str] = Query(None, description="Filtrer par orientation"),
    formation_choisie: Optional[str] = Query(None, description="Filtrer par formation"),
    arrondissement: Optional[str] = Query(None, description="Filtrer par arrondissement"),
) -> CandidatFiltres:
    """Filtres de la liste, lus depuis la query string"""
    return CandidatFiltres(
        search=search,
        type_candidat=type_candidat,
        objectif=objectif,
        source_inscription=source_inscription,
        genre=genre,
        milieu=milieu,
        orientation=orientation,
        formation_choisie=formation_choisie,
        arrondissement=arrondissement,
    )


@router.post("", response_model=Candidat, status_code=status.HTTP_201_CREATED)
async def create_candidat(
    candidat_data: CandidatCreate,
    store: CandidatStore = Depends(get_store),
):
    """Crée un nouveau candidat"""
    return store.create(candidat_data)


@router.get("", response_model=PaginatedResponse)
async def get_candidats(
    filtres: CandidatFiltres = Depends(get_filtres),
    page: int = Query(1, ge=1, description="Numéro de page"),
    taille: int = Query(settings.PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Taille de page"),
    store: CandidatStore = Depends(get_store),
):
    """Récupère la liste des candidats avec filtres et pagination"""
    candidats = RechercheService.filtrer(store.get_all(), filtres)
    return RechercheService.paginer(candidats, page, taille)


@router.get("/options")
async def get_options():
    """Valeurs proposées par le formulaire d'inscription"""
    return {
        "genres": [g.value for g in Genre],
        "situations_matrimoniales": [s.value for s in SituationMatrimoniale],
        "arrondissements": [a.value for a in Arrondissement],
        "milieux": [m.value for m in Milieu],
        "types_candidat": [t.value for t in TypeCandidat],
        "niveaux_etude": [n.value for n in NiveauEtude],
        "types_diplome": [t.value for t in TypeDiplome],
        "experiences": [e.value for e in ExperienceGenerale],
        "niveaux_langue": [n.value for n in NiveauLangue],
        "objectifs": [o.value for o in Objectif],
        "orientations": [o.value for o in Orientation],
        "filieres": FILIERES,
        "langues": LANGUES_DISPONIBLES,
        "sources_inscription": SOURCES_INSCRIPTION,
        "formations": FORMATIONS,
        "destinations": DESTINATIONS,
    }


@router.get("/{candidat_id}", response_model=Candidat)
async def get_candidat(
    candidat_id: str,
    store: CandidatStore = Depends(get_store),
):
    """Récupère un candidat par ID"""
    candidat = store.get_by_id(candidat_id)
    if not candidat:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Candidat non trouvé"
        )
    return candidat


@router.put("/{candidat_id}", response_model=Candidat)
async def update_candidat(
    candidat_id: str,
    candidat_data: CandidatUpdate,
    store: CandidatStore = Depends(get_store),
):
    """Met à jour un candidat (les champs d'identité restent inchangés)"""
    candidat = store.update(candidat_id, candidat_data)
    if not candidat:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Candidat non trouvé"
        )
    return candidat


@router.delete("/{candidat_id}")
async def delete_candidat(
    candidat_id: str,
    store: CandidatStore = Depends(get_store),
):
    """Supprime un candidat ; supprimer un ID absent n'est pas une erreur"""
    return {"id": candidat_id, "supprime": store.delete(candidat_id)}
