"""Fixtures partagées : base SQLite par test, client HTTP authentifié."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "cle-de-test-suffisamment-longue-pour-hs256")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

import app.models  # noqa: F401
from app.core.security import create_access_token
from app.database import Base, creer_engine, get_db
from app.main import app
from app.models.client import Client
from app.models.entreprise import Entreprise


@pytest.fixture
def engine(tmp_path):
    """Base SQLite dans un fichier : plusieurs connexions voient les mêmes données."""
    engine = creer_engine(f"sqlite:///{tmp_path / 'compta.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def _creer_entreprise(session_factory, nom, siret, taux_tva_defaut=None):
    db = session_factory()
    try:
        entreprise = Entreprise(
            nom=nom,
            siret=siret,
            email_contact="contact@example.fr",
            taux_tva_defaut=taux_tva_defaut,
        )
        db.add(entreprise)
        db.commit()
        return entreprise.id
    finally:
        db.close()


def _creer_client(session_factory, tenant_id, num_dossier="AM0028", raison_sociale="Boulangerie Martin"):
    db = session_factory()
    try:
        client = Client(tenant_id=tenant_id, num_dossier=num_dossier, raison_sociale=raison_sociale)
        db.add(client)
        db.commit()
        return client.id
    finally:
        db.close()


@pytest.fixture
def entreprise_id(session_factory):
    return _creer_entreprise(session_factory, "Cabinet Dupont", "12345678900012")


@pytest.fixture
def autre_entreprise_id(session_factory):
    return _creer_entreprise(session_factory, "Cabinet Leroy", "98765432100019")


@pytest.fixture
def client_id(session_factory, entreprise_id):
    return _creer_client(session_factory, entreprise_id)


@pytest.fixture
def creer_client(session_factory):
    """Fabrique de clients supplémentaires : creer_client(tenant_id, num_dossier)."""

    def _creer(tenant_id, num_dossier, raison_sociale="Client test"):
        return _creer_client(session_factory, tenant_id, num_dossier, raison_sociale)

    return _creer


@pytest.fixture
def http(session_factory):
    """TestClient branché sur la base du test (sans événement de démarrage)."""

    def _get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(entreprise_id):
    token = create_access_token({"tenant_id": entreprise_id, "user_id": 7})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def autre_auth_headers(autre_entreprise_id):
    token = create_access_token({"tenant_id": autre_entreprise_id, "user_id": 9})
    return {"Authorization": f"Bearer {token}"}
