"""
Configuration des templates Jinja2 des exports
"""
from pathlib import Path
import logging

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from ..core.utils import DateUtils

# Configuration du logger
logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent

templates = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)


# Filtres personnalisés pour Jinja2
def format_date(value):
    """Formate une date ISO en jj/mm/aaaa"""
    if value:
        return DateUtils.format_date_fr(value)
    return "Non renseigné"


def format_datetime(value):
    """Formate une date et heure"""
    if value:
        return value.strftime("%d/%m/%Y à %H:%M")
    return "Non renseigné"


def format_langues(langues):
    """Langues au format "Nom (Niveau); Nom (Niveau)" """
    return "; ".join(f"{l.name} ({l.level.value})" for l in langues or [])


def valeur(value):
    """Valeur d'un enum (ou la chaîne telle quelle), vide si absente"""
    if value is None:
        return ""
    return getattr(value, "value", value)


templates.filters.update(
    format_date=format_date,
    format_datetime=format_datetime,
    format_langues=format_langues,
    valeur=valeur,
)


def render(nom_template: str, **contexte) -> str:
    """Rend un template d'export"""
    logger.debug(f"Rendu du template {nom_template}")
    return templates.get_template(nom_template).render(**contexte)
