"""
Service d'export des candidats (JSON, CSV, Excel, document imprimable)

Toutes les fonctions sont pures : même liste de candidats, même contenu.
Seul le document imprimable et la fiche embarquent une date de génération,
isolée sur une seule ligne.
"""
from typing import Callable, List, Optional, Sequence, Tuple
from dataclasses import dataclass
from datetime import datetime, timezone
import csv
import io
import json
import logging

from pydantic import TypeAdapter

from ..models.enums import FormatExport
from ..schemas import Candidat
from ..templates import format_langues, render, valeur

logger = logging.getLogger(__name__)

BOM = "\ufeff"

# Schéma fixe des exports tabulaires : (en-tête, extraction de la cellule)
COLONNES_EXPORT: List[Tuple[str, Callable[[Candidat], str]]] = [
    ("ID", lambda c: c.id),
    ("Nom", lambda c: c.nom),
    ("Prénom", lambda c: c.prenom),
    ("CIN", lambda c: c.cin),
    ("Date de naissance", lambda c: c.date_naissance),
    ("Lieu de naissance", lambda c: c.lieu_naissance),
    ("Genre", lambda c: c.genre),
    ("Adresse", lambda c: c.adresse),
    ("Arrondissement", lambda c: c.arrondissement),
    ("Téléphone", lambda c: c.telephone),
    ("Email", lambda c: c.email),
    ("Type de candidat", lambda c: c.type_candidat),
    ("Situation matrimoniale", lambda c: c.situation_matrimoniale),
    ("Occupation mère", lambda c: c.occupation_mere),
    ("Occupation père", lambda c: c.occupation_pere),
    ("Niveau d'étude", lambda c: c.niveau_etude),
    ("Type de diplôme", lambda c: c.type_diplome),
    ("Filière", lambda c: c.filiere_diplome),
    ("Expérience générale", lambda c: c.experience_generale),
    ("Langues", lambda c: format_langues(c.langues)),
    ("Milieu", lambda c: c.milieu),
    ("Source d'inscription", lambda c: c.source_inscription),
    ("Objectif", lambda c: c.objectif),
    ("Formation choisie", lambda c: c.formation_choisie),
    ("Orientation", lambda c: c.orientation),
    ("Destination", lambda c: c.destination),
    ("Date d'orientation", lambda c: c.date_orientation),
    ("Observations", lambda c: c.observations),
    ("Date de création", lambda c: c.date_creation),
    ("Date de modification", lambda c: c.date_modification),
]

EN_TETES = [en_tete for en_tete, _ in COLONNES_EXPORT]

# Extension et type MIME par format
FORMATS = {
    FormatExport.JSON: (".json", "application/json"),
    FormatExport.CSV: (".csv", "text/csv; charset=utf-8"),
    FormatExport.EXCEL: (".xls", "application/vnd.ms-excel; charset=utf-8"),
    FormatExport.PDF: (".html", "text/html; charset=utf-8"),
}

_LISTE_CANDIDATS = TypeAdapter(List[Candidat])


@dataclass
class ExportResultat:
    contenu: bytes
    nom_fichier: str
    media_type: str


def ligne(candidat: Candidat) -> List[str]:
    """Les cellules d'un candidat dans l'ordre des colonnes d'export"""
    return [str(valeur(extraire(candidat))) for _, extraire in COLONNES_EXPORT]


def _genere_le(genere_le: Optional[datetime]) -> datetime:
    return genere_le or datetime.now(timezone.utc)


class ExportService:
    """Service de sérialisation des candidats"""

    @staticmethod
    def exporter_json(candidats: Sequence[Candidat]) -> str:
        """Tableau JSON indenté des fiches complètes"""
        return json.dumps([c.to_dict() for c in candidats], ensure_ascii=False, indent=2)

    @staticmethod
    def importer_json(contenu) -> List[Candidat]:
        """Reconstruit les candidats à partir d'un export JSON"""
        if isinstance(contenu, bytes):
            contenu = contenu.decode("utf-8")
        return _LISTE_CANDIDATS.validate_json(contenu)

    @staticmethod
    def exporter_csv(candidats: Sequence[Candidat]) -> str:
        """CSV précédé d'un BOM UTF-8, toutes les cellules entre guillemets"""
        buf = io.StringIO()
        writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
        writer.writerow(EN_TETES)
        for candidat in candidats:
            writer.writerow(ligne(candidat))
        return BOM + buf.getvalue()

    @staticmethod
    def exporter_excel(candidats: Sequence[Candidat]) -> str:
        """Tableau HTML lisible par les tableurs"""
        return render(
            "export_excel.html",
            en_tetes=EN_TETES,
            lignes=[ligne(c) for c in candidats],
        )

    @staticmethod
    def exporter_pdf(candidats: Sequence[Candidat], genere_le: Optional[datetime] = None) -> str:
        """Document imprimable : une section par candidat"""
        return render(
            "export_pdf.html",
            candidats=candidats,
            genere_le=_genere_le(genere_le),
        )

    @staticmethod
    def exporter_fiche(candidat: Candidat, genere_le: Optional[datetime] = None) -> str:
        """Fiche de renseignements officielle d'un candidat"""
        return render(
            "fiche_candidat.html",
            c=candidat,
            genere_le=_genere_le(genere_le),
        )

    @staticmethod
    def exporter(
        candidats: Sequence[Candidat],
        format: FormatExport,
        nom_fichier: str = "candidats",
        genere_le: Optional[datetime] = None,
    ) -> ExportResultat:
        """Exporte dans le format demandé et renvoie le contenu prêt à télécharger"""
        format = FormatExport(format)
        if format == FormatExport.JSON:
            contenu = ExportService.exporter_json(candidats)
        elif format == FormatExport.CSV:
            contenu = ExportService.exporter_csv(candidats)
        elif format == FormatExport.EXCEL:
            contenu = ExportService.exporter_excel(candidats)
        else:
            contenu = ExportService.exporter_pdf(candidats, genere_le=genere_le)

        extension, media_type = FORMATS[format]
        logger.info(f"📤 Export {format.value} : {len(candidats)} candidat(s)")
        return ExportResultat(
            contenu=contenu.encode("utf-8"),
            nom_fichier=f"{nom_fichier}{extension}",
            media_type=media_type,
        )
