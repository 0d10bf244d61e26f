"""
Schémas Pydantic de l'application
"""
from .candidat_schemas import (
    Candidat, CandidatBase, CandidatCreate, CandidatUpdate, ChampPersonnalise, Langue,
    CHAMPS_IDENTITE, CHAMPS_MODIFIABLES, ORDRE_CHAMPS,
)
from .recherche_schemas import CandidatFiltres, PaginatedResponse
from .statistiques_schemas import BucketPeriode, StatistiquesResponse

__all__ = [
    "Candidat",
    "CandidatBase",
    "CandidatCreate",
    "CandidatUpdate",
    "ChampPersonnalise",
    "Langue",
    "CHAMPS_IDENTITE",
    "CHAMPS_MODIFIABLES",
    "ORDRE_CHAMPS",
    "CandidatFiltres",
    "PaginatedResponse",
    "BucketPeriode",
    "StatistiquesResponse",
]
