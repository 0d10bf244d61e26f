"""
Services de l'application d'inscription des candidats
"""
from .candidat_service import CandidatStore
from .recherche_service import EtatListe, RechercheService
from .statistiques_service import StatistiquesService
from .export_service import ExportResultat, ExportService

__all__ = [
    "CandidatStore",
    "EtatListe",
    "RechercheService",
    "StatistiquesService",
    "ExportResultat",
    "ExportService",
]
