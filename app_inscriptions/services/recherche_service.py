"""
Service de recherche, filtrage et pagination des candidats
"""
from typing import Iterable, List, Optional, Sequence
import logging
import math

from ..schemas import Candidat, CandidatFiltres, PaginatedResponse

logger = logging.getLogger(__name__)

# Valeurs de filtre signifiant "aucune contrainte"
TOUS = "all"

# Filtres catégoriels à correspondance exacte : nom du filtre == attribut du candidat
FILTRES_CATEGORIELS = (
    "type_candidat",
    "objectif",
    "source_inscription",
    "genre",
    "milieu",
    "orientation",
    "formation_choisie",
    "arrondissement",
)


def _valeur(champ) -> str:
    if champ is None:
        return ""
    return getattr(champ, "value", champ)


def _sans_contrainte(valeur: Optional[str]) -> bool:
    return valeur is None or valeur == "" or valeur == TOUS


class RechercheService:
    """Service de filtrage et de pagination (aucune mutation des listes reçues)"""

    @staticmethod
    def correspond(candidat: Candidat, filtres: CandidatFiltres) -> bool:
        """Vrai si le candidat satisfait tous les filtres"""
        # Espaces de début et de fin ignorés : "  benali " trouve BENALI
        recherche = filtres.search.strip().casefold()
        if recherche:
            champs = [candidat.nom, candidat.prenom, candidat.cin]
            if filtres.inclure_contact:
                champs += [candidat.email, candidat.telephone]
            if not any(recherche in (champ or "").casefold() for champ in champs):
                return False

        for nom_filtre in FILTRES_CATEGORIELS:
            attendu = getattr(filtres, nom_filtre)
            if _sans_contrainte(attendu):
                continue
            if _valeur(getattr(candidat, nom_filtre)) != attendu:
                return False
        return True

    @staticmethod
    def filtrer(candidats: Iterable[Candidat], filtres: Optional[CandidatFiltres] = None) -> List[Candidat]:
        """Candidats satisfaisant les filtres, dans l'ordre d'origine"""
        if filtres is None:
            return list(candidats)
        return [c for c in candidats if RechercheService.correspond(c, filtres)]

    @staticmethod
    def selectionner(candidats: Iterable[Candidat], ids: Iterable[str]) -> List[Candidat]:
        """Candidats dont l'ID est sélectionné, dans l'ordre du registre"""
        selection = set(ids)
        return [c for c in candidats if c.id in selection]

    @staticmethod
    def nombre_pages(total: int, taille: int) -> int:
        return max(1, math.ceil(total / taille))

    @staticmethod
    def paginer(candidats: Sequence[Candidat], page: int = 1, taille: int = 10) -> PaginatedResponse:
        """Découpe une page (numérotée à partir de 1).

        Une page au-delà de la dernière renvoie une liste vide ; le numéro de
        page renvoyé reste toujours compris entre 1 et le nombre de pages.
        """
        if taille <= 0:
            raise ValueError("La taille de page doit être supérieure à 0")
        candidats = list(candidats)
        total = len(candidats)
        pages = RechercheService.nombre_pages(total, taille)
        page = max(1, page)
        debut = (page - 1) * taille
        return PaginatedResponse(
            items=candidats[debut:debut + taille],
            total=total,
            page=min(page, pages),
            taille=taille,
            pages=pages,
        )


class EtatListe:
    """État de la vue liste : filtres courants et page courante.

    Tout changement de filtre ramène à la page 1.
    """

    def __init__(self, taille: int = 10, filtres: Optional[CandidatFiltres] = None):
        if taille <= 0:
            raise ValueError("La taille de page doit être supérieure à 0")
        self.taille = taille
        self.filtres = filtres or CandidatFiltres()
        self.page = 1

    def appliquer_filtres(self, filtres: CandidatFiltres) -> None:
        if filtres != self.filtres:
            self.filtres = filtres
            self.page = 1

    def modifier_filtre(self, **valeurs) -> None:
        self.appliquer_filtres(self.filtres.model_copy(update=valeurs))

    def effacer_filtres(self) -> None:
        self.appliquer_filtres(CandidatFiltres())

    def aller_a(self, page: int, total: int) -> int:
        pages = RechercheService.nombre_pages(total, self.taille)
        self.page = min(max(1, page), pages)
        return self.page

    def page_suivante(self, total: int) -> int:
        return self.aller_a(self.page + 1, total)

    def page_precedente(self, total: int) -> int:
        return self.aller_a(self.page - 1, total)

    def afficher(self, candidats: Sequence[Candidat]) -> PaginatedResponse:
        """Filtre puis pagine selon l'état courant"""
        filtres = RechercheService.filtrer(candidats, self.filtres)
        return RechercheService.paginer(filtres, self.page, self.taille)
