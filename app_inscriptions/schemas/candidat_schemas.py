"""
Schémas Pydantic pour les candidats

Les attributs sont en snake_case côté Python et sérialisés en camelCase
(``dateNaissance``, ``typeCandidat``...) dans le stockage et les exports.
"""
from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Optional

from ..core.utils import DateUtils
from ..models.enums import (
    Arrondissement, ExperienceGenerale, FILIERES, Genre, Milieu, NiveauEtude,
    NiveauLangue, Objectif, Orientation, SituationMatrimoniale, TypeCandidat,
    TypeDiplome,
)

# Ordre des champs d'un candidat sérialisé (JSON stocké et export JSON)
ORDRE_CHAMPS = [
    "id", "nom", "prenom", "cin", "dateNaissance", "lieuNaissance", "genre",
    "adresse", "arrondissement", "telephone", "email", "typeCandidat",
    "situationMatrimoniale", "occupationMere", "occupationPere", "niveauEtude",
    "typeDiplome", "filiereDiplome", "experienceGenerale", "langues", "milieu",
    "sourceInscription", "objectif", "formationChoisie", "orientation",
    "destination", "dateOrientation", "observations", "customFields",
    "dateCreation", "dateModification",
]

# Champs d'identité : en lecture seule après la création
CHAMPS_IDENTITE = frozenset({
    "nom", "prenom", "cin", "date_naissance", "lieu_naissance", "genre",
    "adresse", "arrondissement", "telephone", "email",
})


def _langues_uniques(langues):
    vus = set()
    for langue in langues or []:
        cle = langue.name.strip().casefold()
        if cle in vus:
            raise ValueError(f"Langue en double : {langue.name}")
        vus.add(cle)
    return langues


def _filiere_connue(filiere):
    if filiere is not None and filiere not in FILIERES:
        raise ValueError(f"Filière inconnue : {filiere}")
    return filiere


class SchemaCamel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Langue(BaseModel):
    name: str
    level: NiveauLangue


class ChampPersonnalise(BaseModel):
    label: str
    value: str


class CandidatBase(SchemaCamel):
    # Identité
    nom: str
    prenom: str
    cin: str
    date_naissance: str
    lieu_naissance: str
    genre: Genre
    adresse: str
    arrondissement: Arrondissement
    telephone: str
    email: str

    # Type et situation
    type_candidat: TypeCandidat
    situation_matrimoniale: SituationMatrimoniale
    occupation_mere: Optional[str] = None
    occupation_pere: Optional[str] = None

    # Formation & expérience
    niveau_etude: NiveauEtude
    type_diplome: TypeDiplome
    filiere_diplome: str
    experience_generale: ExperienceGenerale
    langues: List[Langue] = []

    # Orientation
    milieu: Milieu
    source_inscription: str
    objectif: Objectif
    formation_choisie: str
    orientation: Orientation
    destination: str
    date_orientation: Optional[str] = None
    observations: Optional[str] = None

    custom_fields: List[ChampPersonnalise] = []

    @field_validator("langues")
    @classmethod
    def _verifier_langues(cls, v):
        return _langues_uniques(v)

    @field_validator("filiere_diplome")
    @classmethod
    def _verifier_filiere(cls, v):
        return _filiere_connue(v)


class CandidatCreate(CandidatBase):
    pass


class CandidatUpdate(SchemaCamel):
    """Modification partielle : seuls les champs explicitement fournis comptent"""
    nom: Optional[str] = None
    prenom: Optional[str] = None
    cin: Optional[str] = None
    date_naissance: Optional[str] = None
    lieu_naissance: Optional[str] = None
    genre: Optional[Genre] = None
    adresse: Optional[str] = None
    arrondissement: Optional[Arrondissement] = None
    telephone: Optional[str] = None
    email: Optional[str] = None
    type_candidat: Optional[TypeCandidat] = None
    situation_matrimoniale: Optional[SituationMatrimoniale] = None
    occupation_mere: Optional[str] = None
    occupation_pere: Optional[str] = None
    niveau_etude: Optional[NiveauEtude] = None
    type_diplome: Optional[TypeDiplome] = None
    filiere_diplome: Optional[str] = None
    experience_generale: Optional[ExperienceGenerale] = None
    langues: Optional[List[Langue]] = None
    milieu: Optional[Milieu] = None
    source_inscription: Optional[str] = None
    objectif: Optional[Objectif] = None
    formation_choisie: Optional[str] = None
    orientation: Optional[Orientation] = None
    destination: Optional[str] = None
    date_orientation: Optional[str] = None
    observations: Optional[str] = None
    custom_fields: Optional[List[ChampPersonnalise]] = None

    @field_validator("langues")
    @classmethod
    def _verifier_langues(cls, v):
        return _langues_uniques(v)

    @field_validator("filiere_diplome")
    @classmethod
    def _verifier_filiere(cls, v):
        return _filiere_connue(v)


# Champs qu'une modification a le droit de toucher
CHAMPS_MODIFIABLES = frozenset(CandidatUpdate.model_fields) - CHAMPS_IDENTITE


class Candidat(CandidatBase):
    """Fiche candidat telle qu'enregistrée"""
    model_config = ConfigDict(frozen=True)

    id: str
    date_creation: str
    date_modification: str

    @model_validator(mode="after")
    def _verifier_horodatages(self):
        creation = DateUtils.parse_iso(self.date_creation)
        modification = DateUtils.parse_iso(self.date_modification)
        if creation is None:
            raise ValueError(f"Date de création illisible : {self.date_creation!r}")
        if modification is None:
            raise ValueError(f"Date de modification illisible : {self.date_modification!r}")
        if modification < creation:
            raise ValueError("La date de modification précède la date de création")
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Dictionnaire JSON (clés camelCase) dans l'ordre du modèle de données"""
        data = self.model_dump(mode="json", by_alias=True)
        return {cle: data[cle] for cle in ORDRE_CHAMPS if cle in data}
