"""Tests des routes /clients et /entreprise."""

URL = "/api/v1/clients/"


class TestClients:
    def test_creation(self, http, auth_headers, entreprise_id):
        resp = http.post(URL, json={
            "num_dossier": " bt0012 ",
            "raison_sociale": "Garage Petit",
            "siret": "11122233300044",
            "email": "contact@garage-petit.fr",
        }, headers=auth_headers)
        assert resp.status_code == 201, resp.text
        client = resp.json()
        assert client["num_dossier"] == "BT0012"
        assert client["tenant_id"] == entreprise_id

    def test_num_dossier_unique(self, http, auth_headers, client_id):
        resp = http.post(URL, json={"num_dossier": "AM0028", "raison_sociale": "Doublon"}, headers=auth_headers)
        assert resp.status_code == 400

    def test_num_dossier_reutilisable_dans_une_autre_entreprise(self, http, autre_auth_headers, client_id):
        resp = http.post(URL, json={"num_dossier": "AM0028", "raison_sociale": "Homonyme"}, headers=autre_auth_headers)
        assert resp.status_code == 201

    def test_siret_invalide(self, http, auth_headers):
        resp = http.post(URL, json={
            "num_dossier": "XX0001", "raison_sociale": "Test", "siret": "1234567890123A",
        }, headers=auth_headers)
        assert resp.status_code == 422

    def test_liste_et_recherche(self, http, auth_headers, entreprise_id, client_id, creer_client):
        creer_client(entreprise_id, "BT0001", "Pharmacie Centrale")

        resp = http.get(URL, headers=auth_headers)
        assert resp.json()["total"] == 2
        assert [c["num_dossier"] for c in resp.json()["items"]] == ["AM0028", "BT0001"]

        resp = http.get(URL, params={"busca": "pharma"}, headers=auth_headers)
        assert [c["num_dossier"] for c in resp.json()["items"]] == ["BT0001"]

    def test_liste_isolee_par_entreprise(self, http, autre_auth_headers, client_id):
        assert http.get(URL, headers=autre_auth_headers).json()["total"] == 0

    def test_modification(self, http, auth_headers, client_id):
        resp = http.put(f"{URL}{client_id}", json={"telephone": "0102030405"}, headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json()["telephone"] == "0102030405"
        assert resp.json()["raison_sociale"] == "Boulangerie Martin"

    def test_modification_num_dossier_en_doublon(self, http, auth_headers, entreprise_id, client_id, creer_client):
        creer_client(entreprise_id, "BT0001")
        resp = http.put(f"{URL}{client_id}", json={"num_dossier": "bt0001"}, headers=auth_headers)
        assert resp.status_code == 400

    def test_suppression(self, http, auth_headers, client_id):
        assert http.delete(f"{URL}{client_id}", headers=auth_headers).status_code == 204
        assert http.get(f"{URL}{client_id}", headers=auth_headers).status_code == 404

    def test_suppression_refusee_avec_documents(self, http, auth_headers, client_id):
        resp = http.post("/api/v1/documents/", json={
            "type_document": "DEVIS",
            "client_id": client_id,
            "lignes": [{"description": "Création de société", "quantite": "1", "prix_unitaire": "500"}],
        }, headers=auth_headers)
        assert resp.status_code == 201

        resp = http.delete(f"{URL}{client_id}", headers=auth_headers)
        assert resp.status_code == 400


class TestEntreprise:
    def test_profil(self, http, auth_headers):
        resp = http.get("/api/v1/entreprise/", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json()["nom"] == "Cabinet Dupont"
        assert resp.json()["taux_tva_defaut"] is None

    def test_modification(self, http, auth_headers):
        resp = http.put("/api/v1/entreprise/", json={
            "telephone": "0400000000", "taux_tva_defaut": "5.5",
        }, headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json()["telephone"] == "0400000000"
        assert float(resp.json()["taux_tva_defaut"]) == 5.5

    def test_siret_deja_utilise(self, http, auth_headers, autre_entreprise_id):
        resp = http.put("/api/v1/entreprise/", json={"siret": "98765432100019"}, headers=auth_headers)
        assert resp.status_code == 400

    def test_taux_hors_bornes(self, http, auth_headers):
        resp = http.put("/api/v1/entreprise/", json={"taux_tva_defaut": "120"}, headers=auth_headers)
        assert resp.status_code == 422
