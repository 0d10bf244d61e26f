# app_inscriptions/models/enums.py
from enum import Enum


class Genre(str, Enum):
    HOMME = "Homme"
    FEMME = "Femme"


class SituationMatrimoniale(str, Enum):
    CELIBATAIRE = "Célibataire"
    MARIE = "Marié(e)"
    DIVORCE = "Divorcé(e)"
    VEUF = "Veuf(ve)"


class Milieu(str, Enum):
    URBAIN = "Urbain"
    RURAL = "Rural"
    PERIURBAIN = "Périurbain"


class Arrondissement(str, Enum):
    AGDAL_RIAD = "Agdal Riad"
    HAY_RIAD = "Hay Riad"
    HASSAN = "Hassan"
    SOUISSI = "Souissi"
    YACOUB_EL_MANSOUR = "Yacoub El Mansour"
    AKKARI = "Akkari"
    OCEAN = "Océan"
    YOUSSOUFIA = "Youssoufia"
    TAKADDOUM = "Takaddoum"
    HAY_EL_FATH = "Hay El Fath"
    AUTRE = "Autre"


class TypeCandidat(str, Enum):
    DIPLOME_ACTIF = "Jeune diplômé actif"
    DIPLOME_CHOMAGE = "Jeune diplômé en chômage"
    NEET = "NEET"


class NiveauEtude(str, Enum):
    SANS = "Sans"
    PRIMAIRE = "Primaire"
    SECONDAIRE_COLLEGIAL = "Secondaire collégial"
    SECONDAIRE_QUALIFIANT = "Secondaire qualifiant"
    SUPERIEUR = "Supérieur"


class TypeDiplome(str, Enum):
    SANS = "Sans"
    NIVEAU_BAC = "Niveau Bac"
    BAC = "Bac"
    BAC_2 = "Bac+2"
    BAC_3 = "Bac+3"
    BAC_4 = "Bac+4"
    BAC_5 = "Bac+5"
    SUPERIEUR_BAC_5 = "Supérieur à Bac+5"
    BREVET = "Brevet"


class ExperienceGenerale(str, Enum):
    AUCUNE = "Pas d'expérience"
    MOINS_UN_AN = "Moins d'un an"
    UN_A_TROIS_ANS = "Entre 1 et 3 ans"
    TROIS_A_CINQ_ANS = "Entre 3 et 5 ans"
    PLUS_DE_CINQ_ANS = "Plus de 5 ans"


class NiveauLangue(str, Enum):
    DEBUTANT = "Débutant"
    INTERMEDIAIRE = "Intermédiaire"
    AVANCE = "Avancé"
    COURANT = "Courant"
    NATIF = "Natif"


class Objectif(str, Enum):
    ENTREPRENEURIAT = "Entrepreneuriat"
    ESS = "ESS"                        # Économie sociale et solidaire
    FORMATION = "Formation"
    EMPLOYABILITE = "Employabilité"


class Orientation(str, Enum):
    INTERNE = "Interne"
    EXTERNE = "Externe"


class FormatExport(str, Enum):
    JSON = "json"
    CSV = "csv"
    EXCEL = "excel"
    PDF = "pdf"


# Catalogues ouverts (chaînes libres proposées par le formulaire)
SOURCES_INSCRIPTION = [
    "ANAPEC", "Entraide Nationale", "Réseaux sociaux", "Bouche à oreille",
    "Site web", "Partenaire", "Événement", "Autre",
]

FORMATIONS = [
    "Développement Web", "Marketing Digital", "Comptabilité",
    "Gestion de projet", "Design Graphique", "Commerce",
    "Artisanat", "Agriculture", "Tourisme", "Autre",
]

DESTINATIONS = [
    "Centre de formation", "Entreprise partenaire", "Coopérative",
    "Incubateur", "Association", "Autre",
]

# Catalogue fermé : la filière du diplôme est validée contre cette liste
FILIERES = [
    "Informatique", "Gestion", "Commerce", "Droit", "Économie",
    "Lettres", "Sciences", "Ingénierie", "Médecine", "Art",
    "Agriculture", "Tourisme", "Autre", "Non applicable",
]

LANGUES_DISPONIBLES = [
    "Arabe", "Français", "Anglais", "Espagnol", "Allemand", "Amazigh", "Autre",
]
