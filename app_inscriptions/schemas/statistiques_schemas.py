"""
Schémas Pydantic pour les statistiques
"""
from pydantic import BaseModel
from typing import Dict, List
from datetime import datetime


class BucketPeriode(BaseModel):
    nom: str            # libellé court (axe du graphique)
    libelle: str        # libellé complet (infobulle)
    debut: datetime
    fin: datetime
    inscriptions: int


class StatistiquesResponse(BaseModel):
    total: int
    par_type: Dict[str, int]
    par_genre: Dict[str, int]
    par_objectif: Dict[str, int]
    semaines: List[BucketPeriode]
    mois: List[BucketPeriode]
    cette_semaine: int
    ce_mois: int
    cette_annee: int
    dates_invalides: int = 0
