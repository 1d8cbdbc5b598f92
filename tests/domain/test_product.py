"""Unit tests for the Product aggregate."""

import pytest

from studio30.domain.exceptions import ValidationError
from tests.fakes import make_product


class TestProduct:

    def test_total_is_sum_of_cells(self):
        product = make_product(1, {"Preto": {"P": 1, "M": 2}, "Azul": {"U": 4}})
        assert product.stock == 7
        assert product.variants[0].total_quantity == 3

    def test_recompute_after_cell_change(self):
        product = make_product(1, {"Preto": {"M": 2}})
        product.variants[0].size_stock[0].quantity = 5
        assert product.recompute_stock() == 5
        assert product.stock == 5

    def test_check_invariants_detects_stale_total(self):
        product = make_product(1, {"Preto": {"M": 2}})
        product.stock = 10
        with pytest.raises(ValidationError, match="does not match"):
            product.check_invariants()

    def test_check_invariants_detects_negative_cell(self):
        product = make_product(1, {"Preto": {"M": 2}})
        product.variants[0].size_stock[0].quantity = -1
        product.recompute_stock()
        with pytest.raises(ValidationError, match="Negative stock"):
            product.check_invariants()

    def test_clone_is_independent(self):
        product = make_product(1, {"Preto": {"M": 2}})
        copy = product.clone()

        copy.variants[0].size_stock[0].quantity = 0
        copy.variants.append(copy.variants[0])

        assert product.variants[0].size_stock[0].quantity == 2
        assert len(product.variants) == 1

    def test_color_names_and_sizes_keep_order(self):
        product = make_product(1, {"Rosa": {"G": 0, "P": 1}, "Azul": {"M": 1}})
        assert product.color_names == ["Rosa", "Azul"]
        assert product.variants[0].sizes == ["G", "P"]
