"""
Testes para a verificação dos vetores contra os limites.

Vetores calculados diretamente da decomposição devem sempre passar; qualquer
coeficiente adulterado para fora do intervalo deve ser rejeitado.
"""

import copy

import pytest

from greco.bounds import InputValidationBounds
from greco.constants import ZKP_MODULUS
from greco.constraints import check_constraints
from greco.exceptions import ConstraintViolation, InvariantViolation


class TestConsistency:
    """Vetores e limites dos mesmos parâmetros são consistentes."""

    def test_default_scenario_passes(self, default_bounds, default_vectors):
        """N=2048, t=1032193, um módulo: decomposição e verificação passam."""
        check_constraints(default_bounds, default_vectors, ZKP_MODULUS)

    def test_multiple_moduli_pass(self, small_bounds, small_vectors):
        small_bounds.check_constraints(small_vectors, ZKP_MODULUS)

    def test_r1_within_derived_bounds(self, small_bounds, small_vectors):
        for i, row in enumerate(small_vectors.r1is):
            assert all(small_bounds.r1_low[i] <= c <= small_bounds.r1_up[i] for c in row)


class TestViolations:
    """Coeficientes fora do limite levantam ConstraintViolation."""

    def test_secret_key_above_bound(self, default_bounds, default_vectors):
        """sk com coeficiente sk_bound + 1 não pode passar silenciosamente."""
        vectors = copy.deepcopy(default_vectors)
        vectors.sk[0] = default_bounds.sk + 1

        with pytest.raises(ConstraintViolation) as exc_info:
            check_constraints(default_bounds, vectors, ZKP_MODULUS)

        error = exc_info.value
        assert isinstance(error, InvariantViolation)
        assert error.name == "sk"
        assert error.representation == "centered"
        assert error.index == 0
        assert error.actual == default_bounds.sk + 1

    def test_error_below_bound(self, small_bounds, small_vectors):
        vectors = copy.deepcopy(small_vectors)
        vectors.e[4] = -(small_bounds.e + 1)

        with pytest.raises(ConstraintViolation) as exc_info:
            small_bounds.check_constraints(vectors, ZKP_MODULUS)

        assert exc_info.value.name == "e"
        assert exc_info.value.index == 4

    def test_r1_above_bound(self, small_bounds, small_vectors):
        vectors = copy.deepcopy(small_vectors)
        vectors.r1is[1][0] = small_bounds.r1_up[1] + 1

        with pytest.raises(ConstraintViolation) as exc_info:
            check_constraints(small_bounds, vectors, ZKP_MODULUS)

        assert exc_info.value.name == "r1is"
        assert exc_info.value.component == 1

    def test_r1_below_bound(self, small_bounds, small_vectors):
        vectors = copy.deepcopy(small_vectors)
        vectors.r1is[0][-1] = small_bounds.r1_low[0] - 1

        with pytest.raises(ConstraintViolation) as exc_info:
            check_constraints(small_bounds, vectors, ZKP_MODULUS)

        assert exc_info.value.name == "r1is"
        assert exc_info.value.component == 0

    def test_r2_above_bound(self, small_bounds, small_vectors):
        vectors = copy.deepcopy(small_vectors)
        vectors.r2is[0][2] = small_bounds.r2[0] + 1

        with pytest.raises(ConstraintViolation) as exc_info:
            check_constraints(small_bounds, vectors, ZKP_MODULUS)

        assert exc_info.value.name == "r2is"

    def test_public_key_checked_against_own_component(self, small_bounds, small_vectors):
        vectors = copy.deepcopy(small_vectors)
        vectors.pk0is[1][0] = small_bounds.r2[1] + 1

        with pytest.raises(ConstraintViolation) as exc_info:
            check_constraints(small_bounds, vectors, ZKP_MODULUS)

        assert exc_info.value.name == "pk0is"
        assert exc_info.value.component == 1

    def test_ciphertext_above_bound(self, small_bounds, small_vectors):
        vectors = copy.deepcopy(small_vectors)
        vectors.ct1is[0][0] = -(small_bounds.r2[0] + 1)

        with pytest.raises(ConstraintViolation) as exc_info:
            check_constraints(small_bounds, vectors, ZKP_MODULUS)

        assert exc_info.value.name == "ct1is"

    def test_reports_first_offending_coefficient(self, small_bounds, small_vectors):
        """Com vários coeficientes fora do limite, o primeiro índice é reportado."""
        vectors = copy.deepcopy(small_vectors)
        vectors.r1is[0][9] = small_bounds.r1_up[0] + 2
        vectors.r1is[0][3] = small_bounds.r1_low[0] - 1

        with pytest.raises(ConstraintViolation) as exc_info:
            check_constraints(small_bounds, vectors, ZKP_MODULUS)

        assert exc_info.value.index == 3
        assert exc_info.value.actual == small_bounds.r1_low[0] - 1
        assert exc_info.value.representation == "centered"

    def test_component_count_mismatch(self, small_params, small_vectors):
        bounds = InputValidationBounds.compute(small_params, level=1)

        with pytest.raises(InvariantViolation):
            check_constraints(bounds, small_vectors, ZKP_MODULUS)

    def test_message_contains_context(self, small_bounds, small_vectors):
        vectors = copy.deepcopy(small_vectors)
        vectors.r2is[1][0] = small_bounds.r2[1] + 1

        with pytest.raises(ConstraintViolation) as exc_info:
            check_constraints(small_bounds, vectors, ZKP_MODULUS)

        message = str(exc_info.value)
        assert "componente 1" in message
        assert "r2is" in message
