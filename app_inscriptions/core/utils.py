"""
Module utilitaire pour les traitements communs
"""
import logging
from typing import Optional
from datetime import date, datetime, timezone

logger = logging.getLogger(__name__)

MOIS_COURTS = [
    "janv.", "févr.", "mars", "avr.", "mai", "juin",
    "juil.", "août", "sept.", "oct.", "nov.", "déc.",
]

MOIS_LONGS = [
    "janvier", "février", "mars", "avril", "mai", "juin",
    "juillet", "août", "septembre", "octobre", "novembre", "décembre",
]


class DateUtils:
    """Utilitaires pour les dates ISO-8601 stockées en chaînes"""

    @staticmethod
    def vers_utc(valeur: datetime) -> datetime:
        """Ramène une date en UTC (une date naïve est supposée déjà en UTC)"""
        if valeur.tzinfo is None:
            return valeur.replace(tzinfo=timezone.utc)
        return valeur.astimezone(timezone.utc)

    @staticmethod
    def horodatage(valeur: datetime) -> str:
        """Horodatage ISO-8601 UTC à la milliseconde, suffixe Z (2024-01-15T10:30:00.000Z)"""
        utc = DateUtils.vers_utc(valeur)
        return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    @staticmethod
    def parse_iso(valeur: Optional[str], tz=timezone.utc) -> Optional[datetime]:
        """Analyse une date ou un horodatage ISO ; None si illisible.

        Une date sans heure ou un horodatage sans fuseau est interprété dans ``tz``.
        """
        if not valeur or not isinstance(valeur, str):
            return None
        texte = valeur.strip()
        if texte.endswith(("Z", "z")):
            texte = texte[:-1] + "+00:00"
        try:
            resultat = datetime.fromisoformat(texte)
        except ValueError:
            return None
        if resultat.tzinfo is None:
            resultat = resultat.replace(tzinfo=tz)
        return resultat

    @staticmethod
    def format_date_fr(valeur: Optional[str]) -> str:
        """Formate une date ISO en jj/mm/aaaa ; renvoie la valeur brute si illisible"""
        if not valeur:
            return ""
        try:
            return date.fromisoformat(valeur.strip()[:10]).strftime("%d/%m/%Y")
        except ValueError:
            logger.debug(f"Date illisible conservée telle quelle : {valeur!r}")
            return valeur
