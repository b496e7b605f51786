"""Tests du calcul HT / TVA / TTC."""

from decimal import Decimal

import pytest

from app.services.montants_service import (
    arrondir,
    calculer_montant_ligne,
    calculer_montants,
    somme_lignes,
)


class TestCalculerMontants:
    def test_exemple_nominal(self):
        montants = calculer_montants(150, 50, 20)
        assert montants.sous_total == Decimal("150.00")
        assert montants.reduction == Decimal("50.00")
        assert montants.montant_ht == Decimal("100.00")
        assert montants.montant_tva == Decimal("20.00")
        assert montants.montant_ttc == Decimal("120.00")

    def test_taux_par_defaut(self):
        assert calculer_montants(100).montant_tva == Decimal("20.00")
        assert calculer_montants(100, 0, None).taux_tva == Decimal("20")

    def test_taux_reduit(self):
        montants = calculer_montants(200, 0, Decimal("5.5"))
        assert montants.montant_tva == Decimal("11.00")
        assert montants.montant_ttc == Decimal("211.00")

    def test_taux_zero(self):
        montants = calculer_montants(80, 0, 0)
        assert montants.montant_tva == Decimal("0.00")
        assert montants.montant_ttc == Decimal("80.00")

    def test_arrondi_demi_superieur_au_centime(self):
        montants = calculer_montants(10.005, 0, 20)
        assert montants.sous_total == Decimal("10.01")
        assert montants.montant_ht == Decimal("10.01")
        assert montants.montant_tva == Decimal("2.00")
        assert montants.montant_ttc == Decimal("12.01")

    def test_reduction_superieure_au_sous_total(self):
        montants = calculer_montants(30, 50, 20)
        assert montants.montant_ht == Decimal("0.00")
        assert montants.montant_tva == Decimal("0.00")
        assert montants.montant_ttc == Decimal("0.00")

    @pytest.mark.parametrize("valeur", [-10, None, "abc", float("nan"), float("inf"), True])
    def test_sous_total_invalide_ramene_a_zero(self, valeur):
        montants = calculer_montants(valeur, 0, 20)
        assert montants.sous_total == Decimal("0.00")
        assert montants.montant_ttc == Decimal("0.00")

    def test_reduction_negative_ignoree(self):
        montants = calculer_montants(100, -20, 20)
        assert montants.reduction == Decimal("0.00")
        assert montants.montant_ht == Decimal("100.00")

    def test_taux_negatif_ramene_a_zero(self):
        assert calculer_montants(100, 0, -5).montant_tva == Decimal("0.00")

    def test_chaines_numeriques_acceptees(self):
        montants = calculer_montants("99.99", " 9.99 ", "20")
        assert montants.montant_ht == Decimal("90.00")
        assert montants.montant_ttc == Decimal("108.00")

    def test_invariants_ht_et_ttc(self):
        for sous_total, reduction, taux in [(123.45, 3.21, 20), (0.01, 0, 5.5), (999.99, 999.98, 10)]:
            m = calculer_montants(sous_total, reduction, taux)
            assert m.montant_ht >= 0
            assert m.montant_ht <= m.sous_total
            assert m.montant_ttc >= m.montant_ht
            assert abs(m.montant_ttc - (m.montant_ht + m.montant_tva)) <= Decimal("0.01")

    def test_fonction_pure(self):
        assert calculer_montants(42.42, 2, 20) == calculer_montants(42.42, 2, 20)

    def test_resultat_immuable(self):
        montants = calculer_montants(10)
        with pytest.raises(Exception):
            montants.montant_ht = Decimal("1")


class TestLignes:
    def test_montant_ligne(self):
        assert calculer_montant_ligne(3, Decimal("19.99")) == Decimal("59.97")

    def test_montant_ligne_arrondi(self):
        assert calculer_montant_ligne(Decimal("0.333"), 10) == Decimal("3.33")

    def test_montant_ligne_invalide(self):
        assert calculer_montant_ligne(-1, 10) == Decimal("0.00")

    def test_somme_lignes(self):
        assert somme_lignes([Decimal("10.50"), 4, "0.25"]) == Decimal("14.75")

    def test_somme_vide(self):
        assert somme_lignes([]) == Decimal(0)

    def test_arrondir(self):
        assert arrondir(Decimal("2.345")) == Decimal("2.35")
        assert arrondir(Decimal("2.344")) == Decimal("2.34")
