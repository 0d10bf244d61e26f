import json
import logging
import re

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app_inscriptions.core.exceptions import ErreurPersistance
from app_inscriptions.models.base import StockageCle
from app_inscriptions.models.enums import Objectif
from app_inscriptions.schemas import ORDRE_CHAMPS, CandidatUpdate
from app_inscriptions.services import CandidatStore
from app_inscriptions.services import candidat_service
from app_inscriptions.services.candidat_service import CANDIDATS_DEMO, generer_id


def lire_brut(engine, cle="candidates_db"):
    with Session(engine) as session:
        entree = session.get(StockageCle, cle)
        return None if entree is None else entree.valeur


def test_empty_store_returns_empty_list(store):
    assert store.get_all() == []
    assert store.count() == 0
    assert store.get_by_id("CND-inconnu") is None


def test_create_then_get_by_id(store, donnees):
    cree = store.create(donnees())

    assert store.get_by_id(cree.id) == cree
    assert cree.nom == "BENALI"
    assert cree.objectif == Objectif.EMPLOYABILITE
    assert [l.name for l in cree.langues] == ["Arabe", "Français"]


def test_create_assigns_id_and_timestamps(store, donnees):
    cree = store.create(donnees())

    assert re.fullmatch(r"CND-\d+-[0-9A-Z]{9}", cree.id)
    assert cree.date_creation == "2026-10-14T09:30:00.000Z"
    assert cree.date_modification == cree.date_creation


def test_create_ignores_supplied_id_and_dates(store, donnees):
    cree = store.create(donnees(id="CND-force", dateCreation="2000-01-01T00:00:00.000Z"))

    assert cree.id != "CND-force"
    assert cree.date_creation == "2026-10-14T09:30:00.000Z"


def test_generated_ids_are_unique(store, donnees):
    ids = {store.create(donnees(cin=f"CIN{i}")).id for i in range(20)}
    assert len(ids) == 20


def test_generer_id_embeds_epoch_millis(horloge):
    identifiant = generer_id(horloge())
    assert identifiant.split("-")[1] == str(int(horloge().timestamp() * 1000))


def test_get_all_keeps_insertion_order(store, donnees, horloge):
    noms = ["ALAMI", "BERRADA", "CHRAIBI"]
    for nom in noms:
        store.create(donnees(nom=nom))
        horloge.avancer(seconds=1)

    assert [c.nom for c in store.get_all()] == noms


def test_duplicate_cin_is_accepted(store, donnees):
    store.create(donnees())
    store.create(donnees())
    assert store.count() == 2


def test_create_rejects_value_outside_catalog(store, donnees):
    with pytest.raises(ValidationError):
        store.create(donnees(objectif="Voyage"))
    assert store.count() == 0


def test_create_rejects_missing_required_field(store, donnees):
    valeurs = donnees()
    del valeurs["cin"]
    with pytest.raises(ValidationError):
        store.create(valeurs)


def test_create_rejects_duplicate_language(store, donnees):
    langues = [{"name": "Arabe", "level": "Natif"}, {"name": "arabe", "level": "Courant"}]
    with pytest.raises(ValidationError):
        store.create(donnees(langues=langues))


def test_create_rejects_unknown_filiere(store, donnees):
    with pytest.raises(ValidationError):
        store.create(donnees(filiereDiplome="Astrologie"))


def test_parents_occupations_are_optional(store, donnees):
    cree = store.create(donnees())
    assert cree.occupation_mere is None

    autre = store.create(donnees(occupationMere="Enseignante", occupationPere="Commerçant"))
    assert store.get_by_id(autre.id).occupation_pere == "Commerçant"


def test_update_changes_editable_fields(store, donnees, horloge):
    cree = store.create(donnees())
    horloge.avancer(minutes=5)

    modifie = store.update(cree.id, {"objectif": "Formation", "observations": "Relancé"})

    assert modifie.objectif == Objectif.FORMATION
    assert modifie.observations == "Relancé"
    assert modifie.id == cree.id
    assert modifie.date_creation == cree.date_creation
    assert modifie.date_modification == "2026-10-14T09:35:00.000Z"
    assert store.get_by_id(cree.id) == modifie


def test_update_accepts_update_schema(store, donnees):
    cree = store.create(donnees())
    modifie = store.update(cree.id, CandidatUpdate(formation_choisie="Comptabilité"))
    assert modifie.formation_choisie == "Comptabilité"


def test_update_ignores_identity_fields(store, donnees, caplog):
    cree = store.create(donnees())

    with caplog.at_level(logging.WARNING):
        modifie = store.update(cree.id, {"nom": "AUTRE", "cin": "ZZ000000", "milieu": "Rural"})

    assert modifie.nom == "BENALI"
    assert modifie.cin == "AB123456"
    assert modifie.milieu.value == "Rural"
    assert "cin" in caplog.text and "nom" in caplog.text


def test_update_cannot_touch_id_or_creation_date(store, donnees):
    cree = store.create(donnees())
    modifie = store.update(cree.id, {"id": "CND-pirate", "dateCreation": "1999-01-01T00:00:00.000Z"})

    assert modifie.id == cree.id
    assert modifie.date_creation == cree.date_creation


def test_update_modification_date_never_goes_backwards(store, donnees, horloge):
    cree = store.create(donnees())
    horloge.avancer(hours=-2)

    modifie = store.update(cree.id, {"observations": "Horloge en retard"})

    assert modifie.date_modification >= cree.date_modification


def test_update_unknown_id_returns_none_and_keeps_store(store, donnees, engine):
    store.create(donnees())
    avant = lire_brut(engine)

    assert store.update("CND-inconnu", {"observations": "x"}) is None
    assert lire_brut(engine) == avant


def test_update_rejects_invalid_value(store, donnees):
    cree = store.create(donnees())
    with pytest.raises(ValidationError):
        store.update(cree.id, {"orientation": "Ailleurs"})
    assert store.get_by_id(cree.id) == cree


def test_delete_removes_record(store, donnees):
    cree = store.create(donnees())
    garde = store.create(donnees(nom="GARDE"))

    assert store.delete(cree.id) is True
    assert store.get_by_id(cree.id) is None
    assert store.get_all() == [garde]


def test_delete_twice_returns_false(store, donnees):
    cree = store.create(donnees())
    assert store.delete(cree.id) is True
    assert store.delete(cree.id) is False


def test_delete_unknown_id_does_not_write(store, engine):
    assert store.delete("CND-inconnu") is False
    assert lire_brut(engine) is None


def test_snapshot_is_json_array_under_single_key(store, donnees, engine):
    cree = store.create(donnees())

    brut = json.loads(lire_brut(engine))

    assert isinstance(brut, list)
    assert list(brut[0]) == ORDRE_CHAMPS
    assert brut[0]["id"] == cree.id
    assert brut[0]["typeCandidat"] == "Jeune diplômé en chômage"


def test_snapshot_is_shared_between_store_instances(store, donnees, engine, horloge):
    cree = store.create(donnees())
    autre = CandidatStore(engine, cle="candidates_db", horloge=horloge)
    assert autre.get_by_id(cree.id) == cree


def test_keys_are_isolated(store, donnees, engine, horloge):
    store.create(donnees())
    autre = CandidatStore(engine, cle="autre_cle", horloge=horloge)
    assert autre.get_all() == []


def test_failed_commit_keeps_previous_snapshot(store, donnees, engine, monkeypatch):
    premier = store.create(donnees())
    avant = lire_brut(engine)

    def echec(self):
        raise SQLAlchemyError("disque plein")

    monkeypatch.setattr(Session, "commit", echec)
    with pytest.raises(ErreurPersistance):
        store.create(donnees(nom="PERDU"))
    with pytest.raises(ErreurPersistance):
        store.delete(premier.id)
    monkeypatch.undo()

    assert lire_brut(engine) == avant
    assert store.get_all() == [premier]


def test_failed_serialization_keeps_previous_snapshot(store, donnees, engine, monkeypatch):
    store.create(donnees())
    avant = lire_brut(engine)

    def echec(*args, **kwargs):
        raise TypeError("objet non sérialisable")

    monkeypatch.setattr(candidat_service.json, "dumps", echec)
    with pytest.raises(ErreurPersistance):
        store.create(donnees(nom="PERDU"))
    monkeypatch.undo()

    assert lire_brut(engine) == avant


def test_unreadable_snapshot_raises(store, engine):
    with Session(engine) as session:
        session.add(StockageCle(cle="candidates_db", valeur="{pas du json"))
        session.commit()

    with pytest.raises(ErreurPersistance) as excinfo:
        store.get_all()
    assert excinfo.value.cle == "candidates_db"


def test_import_records_keeps_ids_and_replaces_existing(store, donnees, engine, horloge):
    cree = store.create(donnees())
    source = CandidatStore(engine, cle="source", horloge=horloge)
    nouveau = source.create(donnees(nom="NOUVEAU"))
    remplace = {**cree.to_dict(), "observations": "Importé"}

    assert store.import_records([remplace, nouveau]) == 2

    tous = store.get_all()
    assert [c.id for c in tous] == [cree.id, nouveau.id]
    assert tous[0].observations == "Importé"
    assert tous[0].date_creation == cree.date_creation


def test_import_records_replace_all(store, donnees, fiche):
    store.create(donnees())
    store.import_records([fiche()], remplacer=True)
    assert [c.id for c in store.get_all()] == ["CND-TEST-001"]


def test_seed_demo_only_fills_empty_store(store, donnees):
    assert store.seed_demo() == len(CANDIDATS_DEMO)
    assert [c.nom for c in store.get_all()] == ["BENALI", "CHAKIR", "EL AMRANI"]
    assert store.seed_demo() == 0
    assert store.count() == len(CANDIDATS_DEMO)


def test_import_rejects_modification_before_creation(store, donnees, engine):
    store.create(donnees())
    avant = lire_brut(engine)
    fiche = {
        **donnees(),
        "id": "CND-ANCIEN",
        "dateCreation": "2026-10-14T09:30:00.000Z",
        "dateModification": "2001-01-01T00:00:00.000Z",
    }

    with pytest.raises(ValidationError):
        store.import_records([fiche])
    assert lire_brut(engine) == avant


def test_import_rejects_unreadable_timestamp(store, donnees, engine):
    fiche = {
        **donnees(),
        "id": "CND-ANCIEN",
        "dateCreation": "pas une date",
        "dateModification": "2026-10-14T09:30:00.000Z",
    }

    with pytest.raises(ValidationError):
        store.import_records([fiche])
    assert lire_brut(engine) is None


def test_storage_row_uses_injected_clock(store, donnees, engine, horloge):
    store.create(donnees())

    with Session(engine) as session:
        entree = session.get(StockageCle, "candidates_db")
        assert entree.modifie_le.replace(tzinfo=None) == horloge().replace(tzinfo=None)
