"""
Schémas Pydantic pour la recherche et les filtres
"""
from pydantic import BaseModel
from typing import List, Optional

from .candidat_schemas import Candidat


class CandidatFiltres(BaseModel):
    """Conjonction de filtres ; "all", "" ou None = aucune contrainte"""
    search: str = ""
    type_candidat: Optional[str] = None
    objectif: Optional[str] = None
    source_inscription: Optional[str] = None
    genre: Optional[str] = None
    milieu: Optional[str] = None
    orientation: Optional[str] = None
    formation_choisie: Optional[str] = None
    arrondissement: Optional[str] = None
    # Étend la recherche libre à l'email et au téléphone
    inclure_contact: bool = True


class PaginatedResponse(BaseModel):
    items: List[Candidat]
    total: int
    page: int
    taille: int
    pages: int
