from datetime import datetime, timedelta, timezone

import pytest

from app_inscriptions.core.database import build_engine
from app_inscriptions.schemas import Candidat
from app_inscriptions.services import CandidatStore


class HorlogeFixe:
    """Horloge injectable, avancée à la main"""

    def __init__(self, instant: datetime) -> None:
        self.instant = instant

    def __call__(self) -> datetime:
        return self.instant

    def avancer(self, **delta) -> None:
        self.instant += timedelta(**delta)


def _donnees_candidat(**surcharges) -> dict:
    donnees = {
        "nom": "BENALI",
        "prenom": "Youssef",
        "cin": "AB123456",
        "dateNaissance": "1998-05-15",
        "lieuNaissance": "Rabat",
        "genre": "Homme",
        "adresse": "25 Rue Mohamed V",
        "arrondissement": "Agdal Riad",
        "telephone": "0612345678",
        "email": "youssef.benali@email.com",
        "typeCandidat": "Jeune diplômé en chômage",
        "situationMatrimoniale": "Célibataire",
        "niveauEtude": "Supérieur",
        "typeDiplome": "Bac+3",
        "filiereDiplome": "Informatique",
        "experienceGenerale": "Moins d'un an",
        "langues": [
            {"name": "Arabe", "level": "Natif"},
            {"name": "Français", "level": "Courant"},
        ],
        "milieu": "Urbain",
        "sourceInscription": "ANAPEC",
        "objectif": "Employabilité",
        "formationChoisie": "Développement Web",
        "orientation": "Interne",
        "destination": "Centre de formation",
        "dateOrientation": "2024-01-15",
        "observations": "Candidat motivé.",
    }
    donnees.update(surcharges)
    return donnees


@pytest.fixture
def donnees():
    """Fabrique de données de formulaire valides (clés camelCase)"""
    return _donnees_candidat


@pytest.fixture
def fiche():
    """Fabrique de fiches Candidat complètes, sans passer par le registre"""
    compteur = {"n": 0}

    def _fiche(date_creation: str = "2026-10-14T09:30:00.000Z", **surcharges) -> Candidat:
        compteur["n"] += 1
        valeurs = _donnees_candidat(**surcharges)
        valeurs.setdefault("id", f"CND-TEST-{compteur['n']:03d}")
        valeurs.setdefault("dateModification", date_creation)
        valeurs["dateCreation"] = date_creation
        return Candidat.model_validate(valeurs)

    return _fiche


@pytest.fixture
def horloge() -> HorlogeFixe:
    return HorlogeFixe(datetime(2026, 10, 14, 9, 30, tzinfo=timezone.utc))


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'candidats.db'}")
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine, horloge) -> CandidatStore:
    return CandidatStore(engine, cle="candidates_db", horloge=horloge)
