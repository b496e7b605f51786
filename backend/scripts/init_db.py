"""
Initialise la base de données.
Crée les tables, l'entreprise (tenant) si absente, et affiche un token d'accès.

Usage:
    python scripts/init_db.py --nom "Cabinet Martin" --email contact@cabinet-martin.fr --siret 12345678900012
"""
import sys
import os
import argparse

# Ajouter le répertoire racine au path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.database import engine, SessionLocal
from app.models.base import Base
from app.models.entreprise import Entreprise
from app.core.security import create_access_token


def create_tables():
    """Créer toutes les tables"""
    print("[*] Création des tables...")
    Base.metadata.create_all(bind=engine)
    print("[+] Tables créées")


def create_entreprise(nom: str, email: str, siret: str = None) -> int:
    """Créer l'entreprise si elle n'existe pas (recherche par SIRET, sinon par nom)"""
    db = SessionLocal()
    try:
        query = db.query(Entreprise)
        if siret:
            existing = query.filter(Entreprise.siret == siret).first()
        else:
            existing = query.filter(Entreprise.nom == nom).first()
        if existing:
            print(f"[!] Entreprise {existing.nom} existe déjà (ID: {existing.id})")
            return existing.id

        entreprise = Entreprise(
            nom=nom,
            siret=siret,
            email_contact=email,
            actif=True
        )
        db.add(entreprise)
        db.commit()
        db.refresh(entreprise)
        print(f"[+] Entreprise créée avec l'ID: {entreprise.id}")
        return entreprise.id
    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Initialiser la base de données")
    parser.add_argument("--nom", required=True, help="Nom de l'entreprise")
    parser.add_argument("--email", required=True, help="Email de contact")
    parser.add_argument("--siret", help="SIRET (14 chiffres)")
    parser.add_argument("--user-id", type=int, default=1, help="user_id inscrit dans le token")
    parser.add_argument("--skip-tables", action="store_true", help="Ne pas créer les tables")

    args = parser.parse_args()

    if args.siret and (len(args.siret) != 14 or not args.siret.isdigit()):
        print("[ERREUR] Le SIRET doit contenir 14 chiffres")
        sys.exit(1)

    print("=" * 50)
    print("INITIALISATION DE LA BASE DE DONNÉES")
    print("=" * 50)

    if not args.skip_tables:
        create_tables()

    tenant_id = create_entreprise(args.nom, args.email, args.siret)
    token = create_access_token({"tenant_id": tenant_id, "user_id": args.user_id})

    print("=" * 50)
    print("[+] Initialisation terminée")
    print(f"[*] Token: {token}")
    print("=" * 50)


if __name__ == "__main__":
    main()
