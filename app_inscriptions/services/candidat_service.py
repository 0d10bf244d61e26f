"""
Service de gestion des candidats

Le registre complet est rangé sous une seule clé de stockage, sous forme
d'un tableau JSON. Chaque mutation relit l'instantané, le modifie en
mémoire puis réécrit le tableau entier dans une seule transaction.
"""
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union
from datetime import datetime, timezone
import json
import logging
import secrets
import string

from pydantic import TypeAdapter, ValidationError
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel

from ..core.exceptions import ErreurPersistance
from ..core.utils import DateUtils
from ..models.base import StockageCle
from ..schemas import (
    Candidat, CandidatCreate, CandidatUpdate, CHAMPS_IDENTITE, CHAMPS_MODIFIABLES,
)

logger = logging.getLogger(__name__)

_ALPHABET_ID = string.digits + string.ascii_uppercase
_LISTE_CANDIDATS = TypeAdapter(List[Candidat])


def generer_id(instant: datetime) -> str:
    """Identifiant opaque : CND-<epoch ms>-<9 caractères base36>"""
    suffixe = "".join(secrets.choice(_ALPHABET_ID) for _ in range(9))
    return f"CND-{int(DateUtils.vers_utc(instant).timestamp() * 1000)}-{suffixe}"


class CandidatStore:
    """Registre des candidats (création, lecture, modification, suppression)"""

    def __init__(
        self,
        engine: Engine,
        cle: str = "candidates_db",
        horloge: Optional[Callable[[], datetime]] = None,
    ):
        self.engine = engine
        self.cle = cle
        self.horloge = horloge or (lambda: datetime.now(timezone.utc))
        SQLModel.metadata.create_all(engine, tables=[StockageCle.__table__])

    # ----------------------------
    # Accès au stockage
    # ----------------------------
    def _lire(self) -> List[Candidat]:
        try:
            with Session(self.engine) as session:
                entree = session.get(StockageCle, self.cle)
                valeur = entree.valeur if entree else None
        except SQLAlchemyError as e:
            logger.error(f"❌ Lecture impossible de la clé {self.cle}: {e}")
            raise ErreurPersistance(f"Lecture impossible de la clé {self.cle}", cle=self.cle) from e

        if valeur is None:
            return []
        try:
            return _LISTE_CANDIDATS.validate_python(json.loads(valeur))
        except (ValueError, ValidationError) as e:
            logger.error(f"❌ Contenu illisible sous la clé {self.cle}: {e}")
            raise ErreurPersistance(f"Contenu illisible sous la clé {self.cle}", cle=self.cle) from e

    def _ecrire(self, candidats: List[Candidat]) -> None:
        # Sérialiser avant d'ouvrir la transaction : un échec ici ne touche pas au stockage
        try:
            valeur = json.dumps([c.to_dict() for c in candidats], ensure_ascii=False)
        except (TypeError, ValueError) as e:
            logger.error(f"❌ Sérialisation impossible du registre: {e}")
            raise ErreurPersistance("Sérialisation impossible du registre", cle=self.cle) from e

        with Session(self.engine) as session:
            try:
                entree = session.get(StockageCle, self.cle)
                if entree is None:
                    entree = StockageCle(cle=self.cle, valeur=valeur, modifie_le=self.horloge())
                else:
                    entree.valeur = valeur
                    entree.modifie_le = self.horloge()
                session.add(entree)
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                logger.error(f"❌ Écriture impossible de la clé {self.cle}: {e}")
                raise ErreurPersistance(f"Écriture impossible de la clé {self.cle}", cle=self.cle) from e

    def _prochaine_modification(self, actuel: Candidat) -> str:
        """Horodatage de modification qui ne recule jamais, même si l'horloge recule"""
        instant = DateUtils.vers_utc(self.horloge())
        for precedent in (actuel.date_creation, actuel.date_modification):
            date_precedente = DateUtils.parse_iso(precedent)
            if date_precedente is not None and date_precedente > instant:
                instant = date_precedente
        return DateUtils.horodatage(instant)

    # ----------------------------
    # Opérations du registre
    # ----------------------------
    def create(self, data: Union[CandidatCreate, Mapping[str, Any]]) -> Candidat:
        """Crée un nouveau candidat"""
        if not isinstance(data, CandidatCreate):
            data = CandidatCreate.model_validate(data)

        candidats = self._lire()
        existants = {c.id for c in candidats}
        instant = self.horloge()
        identifiant = generer_id(instant)
        while identifiant in existants:
            identifiant = generer_id(instant)

        horodatage = DateUtils.horodatage(instant)
        candidat = Candidat.model_validate({
            **data.model_dump(),
            "id": identifiant,
            "date_creation": horodatage,
            "date_modification": horodatage,
        })
        candidats.append(candidat)
        self._ecrire(candidats)
        logger.info(f"✅ Candidat créé : {identifiant}")
        return candidat

    def get_all(self) -> List[Candidat]:
        """Tous les candidats, dans l'ordre d'insertion"""
        return self._lire()

    def get_by_id(self, candidat_id: str) -> Optional[Candidat]:
        """Récupère un candidat par ID"""
        return next((c for c in self._lire() if c.id == candidat_id), None)

    def count(self) -> int:
        return len(self._lire())

    def update(self, candidat_id: str, partial: Union[CandidatUpdate, Mapping[str, Any]]) -> Optional[Candidat]:
        """Met à jour un candidat ; None si l'ID est inconnu"""
        if not isinstance(partial, CandidatUpdate):
            partial = CandidatUpdate.model_validate(partial)

        candidats = self._lire()
        index = next((i for i, c in enumerate(candidats) if c.id == candidat_id), None)
        if index is None:
            logger.info(f"Candidat introuvable pour modification : {candidat_id}")
            return None

        actuel = candidats[index]
        fournis = partial.model_dump(exclude_unset=True)
        ignores = sorted(
            champ for champ in fournis
            if champ in CHAMPS_IDENTITE and fournis[champ] != getattr(actuel, champ)
        )
        if ignores:
            logger.warning(f"⚠️ Champs d'identité en lecture seule ignorés pour {candidat_id}: {', '.join(ignores)}")

        donnees = actuel.model_dump()
        for champ, valeur in fournis.items():
            if champ in CHAMPS_MODIFIABLES:
                donnees[champ] = valeur
        donnees["date_modification"] = self._prochaine_modification(actuel)

        candidats[index] = Candidat.model_validate(donnees)
        self._ecrire(candidats)
        logger.info(f"✅ Candidat modifié : {candidat_id}")
        return candidats[index]

    def delete(self, candidat_id: str) -> bool:
        """Supprime un candidat ; False si rien n'a été supprimé"""
        candidats = self._lire()
        restants = [c for c in candidats if c.id != candidat_id]
        if len(restants) == len(candidats):
            return False
        self._ecrire(restants)
        logger.info(f"🗑️ Candidat supprimé : {candidat_id}")
        return True

    def import_records(self, records: Iterable[Union[Candidat, Mapping[str, Any]]], remplacer: bool = False) -> int:
        """Importe des fiches complètes (export JSON) en conservant ID et horodatages.

        Un ID déjà présent remplace la fiche existante à sa place.
        """
        importes = [r if isinstance(r, Candidat) else Candidat.model_validate(r) for r in records]
        candidats = [] if remplacer else self._lire()
        positions: Dict[str, int] = {c.id: i for i, c in enumerate(candidats)}
        for candidat in importes:
            if candidat.id in positions:
                candidats[positions[candidat.id]] = candidat
            else:
                positions[candidat.id] = len(candidats)
                candidats.append(candidat)
        self._ecrire(candidats)
        logger.info(f"📥 {len(importes)} candidat(s) importé(s) sous la clé {self.cle}")
        return len(importes)

    def seed_demo(self) -> int:
        """Insère les candidats de démonstration si le registre est vide"""
        if self._lire():
            return 0
        for donnees in CANDIDATS_DEMO:
            self.create(donnees)
        logger.info(f"🌱 {len(CANDIDATS_DEMO)} candidats de démonstration insérés")
        return len(CANDIDATS_DEMO)


CANDIDATS_DEMO: List[Dict[str, Any]] = [
    {
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
        "occupationMere": "Enseignante",
        "occupationPere": "Commerçant",
        "niveauEtude": "Supérieur",
        "typeDiplome": "Bac+3",
        "filiereDiplome": "Informatique",
        "experienceGenerale": "Moins d'un an",
        "langues": [
            {"name": "Arabe", "level": "Natif"},
            {"name": "Français", "level": "Courant"},
            {"name": "Anglais", "level": "Intermédiaire"},
        ],
        "milieu": "Urbain",
        "sourceInscription": "ANAPEC",
        "objectif": "Employabilité",
        "formationChoisie": "Développement Web",
        "orientation": "Interne",
        "destination": "Centre de formation",
        "dateOrientation": "2024-01-15",
        "observations": "Candidat motivé avec de bonnes compétences techniques.",
    },
    {
        "nom": "CHAKIR",
        "prenom": "Fatima",
        "cin": "CD789012",
        "dateNaissance": "2000-08-22",
        "lieuNaissance": "Casablanca",
        "genre": "Femme",
        "adresse": "10 Avenue Hassan II",
        "arrondissement": "Hassan",
        "telephone": "0698765432",
        "email": "fatima.chakir@email.com",
        "typeCandidat": "NEET",
        "situationMatrimoniale": "Célibataire",
        "occupationMere": "Femme au foyer",
        "occupationPere": "Retraité",
        "niveauEtude": "Secondaire qualifiant",
        "typeDiplome": "Bac",
        "filiereDiplome": "Commerce",
        "experienceGenerale": "Pas d'expérience",
        "langues": [
            {"name": "Arabe", "level": "Natif"},
            {"name": "Français", "level": "Avancé"},
        ],
        "milieu": "Urbain",
        "sourceInscription": "Réseaux sociaux",
        "objectif": "Formation",
        "formationChoisie": "Marketing Digital",
        "orientation": "Externe",
        "destination": "Entreprise partenaire",
        "dateOrientation": "2024-02-01",
        "observations": "Intéressée par le marketing digital.",
    },
    {
        "nom": "EL AMRANI",
        "prenom": "Omar",
        "cin": "EF345678",
        "dateNaissance": "1995-03-10",
        "lieuNaissance": "Fès",
        "genre": "Homme",
        "adresse": "5 Rue Ibn Khaldoun",
        "arrondissement": "Youssoufia",
        "telephone": "0654321098",
        "email": "omar.elamrani@email.com",
        "typeCandidat": "Jeune diplômé actif",
        "situationMatrimoniale": "Marié(e)",
        "occupationMere": "Artisane",
        "occupationPere": "Agriculteur",
        "niveauEtude": "Supérieur",
        "typeDiplome": "Bac+5",
        "filiereDiplome": "Gestion",
        "experienceGenerale": "Entre 3 et 5 ans",
        "langues": [
            {"name": "Arabe", "level": "Natif"},
            {"name": "Français", "level": "Courant"},
            {"name": "Anglais", "level": "Avancé"},
            {"name": "Espagnol", "level": "Débutant"},
        ],
        "milieu": "Périurbain",
        "sourceInscription": "Partenaire",
        "objectif": "Entrepreneuriat",
        "formationChoisie": "Gestion de projet",
        "orientation": "Interne",
        "destination": "Incubateur",
        "dateOrientation": "2024-01-20",
        "observations": "Projet de création d'entreprise dans le secteur agricole.",
    },
]
