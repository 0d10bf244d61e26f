"""
Service de calcul des statistiques

Fonction pure de (candidats, maintenant) : les bornes des semaines et des
mois sont calculées à partir de l'instant fourni, jamais de l'horloge.
"""
from typing import Dict, Iterable, List, Optional, Tuple
from datetime import datetime, time, timedelta, timezone
import calendar
import logging

from ..core.utils import DateUtils, MOIS_COURTS, MOIS_LONGS
from ..models.enums import Genre, Objectif, TypeCandidat
from ..schemas import BucketPeriode, Candidat, StatistiquesResponse

logger = logging.getLogger(__name__)

NB_SEMAINES = 4
NB_MOIS = 6

Intervalle = Tuple[datetime, datetime]


def debut_semaine(instant: datetime) -> datetime:
    """Lundi 00:00 de la semaine contenant l'instant"""
    lundi = instant.date() - timedelta(days=instant.weekday())
    return datetime.combine(lundi, time.min, tzinfo=instant.tzinfo)


def fin_semaine(instant: datetime) -> datetime:
    """Dimanche 23:59:59.999999 de la semaine contenant l'instant"""
    return debut_semaine(instant) + timedelta(days=7) - timedelta(microseconds=1)


def intervalle_mois(annee: int, mois: int, tz) -> Intervalle:
    dernier_jour = calendar.monthrange(annee, mois)[1]
    debut = datetime(annee, mois, 1, tzinfo=tz)
    fin = datetime(annee, mois, dernier_jour, 23, 59, 59, 999999, tzinfo=tz)
    return debut, fin


def mois_decale(annee: int, mois: int, decalage: int) -> Tuple[int, int]:
    """(année, mois) décalé de ``decalage`` mois (négatif = passé)"""
    index = annee * 12 + (mois - 1) + decalage
    return index // 12, index % 12 + 1


def _libelle_jour(valeur: datetime) -> str:
    return f"{valeur.day:02d} {MOIS_COURTS[valeur.month - 1]}"


class StatistiquesService:
    """Service de calcul des statistiques du tableau de bord"""

    @staticmethod
    def repartition(valeurs: Iterable[str], categories: Iterable[str]) -> Dict[str, int]:
        """Compte par catégorie ; toutes les catégories sont présentes, même à 0"""
        comptes = {categorie: 0 for categorie in categories}
        for valeur in valeurs:
            if valeur in comptes:
                comptes[valeur] += 1
        return comptes

    @staticmethod
    def dates_inscription(candidats: Iterable[Candidat], tz) -> Tuple[List[datetime], int]:
        """Dates d'inscription lisibles (dans le fuseau tz) et nombre de dates illisibles"""
        dates = []
        invalides = 0
        for candidat in candidats:
            valeur = DateUtils.parse_iso(candidat.date_creation, tz=tz)
            if valeur is not None:
                try:
                    valeur = valeur.astimezone(tz)
                except OverflowError:
                    # Aux bornes de datetime, hors de toute période
                    valeur = None
            if valeur is None:
                invalides += 1
                logger.debug(f"Date d'inscription illisible ignorée pour {candidat.id}: {candidat.date_creation!r}")
                continue
            dates.append(valeur)
        return dates, invalides

    @staticmethod
    def compter(dates: Iterable[datetime], debut: datetime, fin: datetime) -> int:
        return sum(1 for d in dates if debut <= d <= fin)

    @staticmethod
    def semaines(dates: List[datetime], maintenant: datetime, nombre: int = NB_SEMAINES) -> List[BucketPeriode]:
        """Les ``nombre`` dernières semaines (lundi-dimanche), de la plus ancienne à la courante"""
        buckets = []
        for i in range(nombre):
            reference = maintenant - timedelta(weeks=nombre - 1 - i)
            debut, fin = debut_semaine(reference), fin_semaine(reference)
            buckets.append(BucketPeriode(
                nom=f"S{debut.isocalendar()[1]}",
                libelle=f"{_libelle_jour(debut)} - {_libelle_jour(fin)}",
                debut=debut,
                fin=fin,
                inscriptions=StatistiquesService.compter(dates, debut, fin),
            ))
        return buckets

    @staticmethod
    def mois(dates: List[datetime], maintenant: datetime, nombre: int = NB_MOIS) -> List[BucketPeriode]:
        """Les ``nombre`` derniers mois civils, du plus ancien au courant"""
        buckets = []
        for i in range(nombre):
            annee, mois = mois_decale(maintenant.year, maintenant.month, -(nombre - 1 - i))
            debut, fin = intervalle_mois(annee, mois, maintenant.tzinfo)
            buckets.append(BucketPeriode(
                nom=MOIS_COURTS[mois - 1],
                libelle=f"{MOIS_LONGS[mois - 1]} {annee}",
                debut=debut,
                fin=fin,
                inscriptions=StatistiquesService.compter(dates, debut, fin),
            ))
        return buckets

    @staticmethod
    def calculer(candidats: Iterable[Candidat], maintenant: Optional[datetime] = None) -> StatistiquesResponse:
        """Récupère les statistiques du tableau de bord"""
        candidats = list(candidats)
        if maintenant is None:
            maintenant = datetime.now(timezone.utc)
        elif maintenant.tzinfo is None:
            maintenant = maintenant.replace(tzinfo=timezone.utc)
        tz = maintenant.tzinfo

        dates, invalides = StatistiquesService.dates_inscription(candidats, tz)
        if invalides:
            logger.info(f"{invalides} date(s) d'inscription illisible(s) exclue(s) des périodes")

        debut_mois, fin_mois = intervalle_mois(maintenant.year, maintenant.month, tz)
        debut_annee = datetime(maintenant.year, 1, 1, tzinfo=tz)
        fin_annee = datetime(maintenant.year, 12, 31, 23, 59, 59, 999999, tzinfo=tz)

        return StatistiquesResponse(
            total=len(candidats),
            par_type=StatistiquesService.repartition(
                (c.type_candidat.value for c in candidats), (t.value for t in TypeCandidat)
            ),
            par_genre=StatistiquesService.repartition(
                (c.genre.value for c in candidats), (g.value for g in Genre)
            ),
            par_objectif=StatistiquesService.repartition(
                (c.objectif.value for c in candidats), (o.value for o in Objectif)
            ),
            semaines=StatistiquesService.semaines(dates, maintenant),
            mois=StatistiquesService.mois(dates, maintenant),
            cette_semaine=StatistiquesService.compter(dates, debut_semaine(maintenant), fin_semaine(maintenant)),
            ce_mois=StatistiquesService.compter(dates, debut_mois, fin_mois),
            cette_annee=StatistiquesService.compter(dates, debut_annee, fin_annee),
            dates_invalides=invalides,
        )
