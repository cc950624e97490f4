"""
Testes para o cálculo dos limites de validação de entrada.
"""

import pytest

from greco.bounds import (
    InputValidationBounds,
    compute_tag,
    modular_inverse,
    plaintext_bounds,
)
from greco.constants import BFVParameters
from greco.exceptions import ModularInverseError, ParameterError
from greco.polynomial import reduce_and_center

Q = 18014398492704769
T = 1032193


class TestPlaintextBounds:
    """Testes para o intervalo do plaintext centrado."""

    def test_odd_plaintext_modulus(self):
        assert plaintext_bounds(T) == (-516096, 516096)

    @pytest.mark.parametrize("t", [3, 5, 17, 65537, T])
    def test_odd_range_size(self, t):
        low, high = plaintext_bounds(t)
        assert high - low == t - 1

    def test_even_plaintext_modulus(self):
        assert plaintext_bounds(8) == (-5, 3)

    @pytest.mark.parametrize("t", [2, 4, 8, 10])
    def test_even_low_one_below_centering(self, t):
        """Para t par, ptxt_low fica uma unidade abaixo do menor representante centrado."""
        centered = [reduce_and_center(x, t) for x in range(t)]
        low, high = plaintext_bounds(t)

        assert low == min(centered) - 1
        assert high == max(centered)

    @pytest.mark.parametrize("t", [2, 4, 8, 10, 65536, 1 << 40])
    def test_even_range_size(self, t):
        """Para t par, ptxt_high - ptxt_low = t."""
        low, high = plaintext_bounds(t)

        assert high == (t - 1) // 2
        assert high - low == t


class TestModularInverse:
    """Testes para o inverso modular."""

    def test_inverse(self):
        inv = modular_inverse((-T) % Q, Q)
        assert (inv * (-T)) % Q == 1
        assert 0 <= inv < Q

    def test_non_invertible(self):
        with pytest.raises(ModularInverseError) as exc_info:
            modular_inverse(6, 9)

        assert exc_info.value.modulus == 9

    def test_non_invertible_is_arithmetic_error(self):
        with pytest.raises(ArithmeticError):
            modular_inverse(0, 7)


class TestInputValidationBounds:
    """Testes para InputValidationBounds.compute."""

    def test_default_scenario(self, default_bounds):
        """N=2048, t=1032193, q=18014398492704769 e B=19."""
        qi_bound = 9007199246352384

        assert default_bounds.r2 == [qi_bound]
        assert default_bounds.a == qi_bound
        assert default_bounds.sk == 19
        assert default_bounds.e == 19
        assert default_bounds.moduli == [Q]
        assert default_bounds.size == (10 * 2048 - 4) * 1 + 4 * 2048

    def test_r1_bounds_formula(self, default_bounds):
        qi_bound = (Q - 1) // 2
        k0 = pow((-T) % Q, -1, Q)
        noise = (2048 * 19 + 2) * qi_bound + 19

        assert default_bounds.r1_low == [(-516096 * k0 - noise) // Q]
        assert default_bounds.r1_up == [(516096 * k0 + noise) // Q]
        assert default_bounds.r1_low[0] < 0 < default_bounds.r1_up[0]

    def test_q_mod_t(self, default_bounds):
        assert default_bounds.q_mod_t == reduce_and_center(Q, T)

    def test_determinism(self, default_params, default_bounds):
        """Parâmetros idênticos produzem limites e TAG idênticos."""
        again = InputValidationBounds.compute(BFVParameters.default_config())

        assert again == default_bounds
        assert again.tag == default_bounds.tag

    def test_tag_in_range(self, default_bounds):
        assert 0 <= default_bounds.tag < Q

    def test_multiple_moduli(self, small_params, small_bounds):
        assert small_bounds.num_moduli == 2
        assert small_bounds.r2 == [(qi - 1) // 2 for qi in small_params.moduli]
        assert small_bounds.a == small_bounds.r2[0]
        assert small_bounds.size == (10 * 16 - 4) * 2 + 4 * 16

    def test_level_drops_moduli(self, small_params):
        bounds = InputValidationBounds.compute(small_params, level=1)

        assert bounds.moduli == [small_params.moduli[0]]
        assert len(bounds.r1_low) == len(bounds.r1_up) == len(bounds.r2) == 1
        assert bounds.size == (10 * 16 - 4) + 4 * 16

    def test_invalid_level(self, small_params):
        with pytest.raises(ParameterError):
            InputValidationBounds.compute(small_params, level=2)

    def test_largest_u64_modulus(self):
        """O maior primo de 64 bits ainda gera TAG e limites de largura fixa."""
        qi = (1 << 64) - 59
        bounds = InputValidationBounds.compute(
            BFVParameters(degree=16, plaintext_modulus=65537, moduli=[qi])
        )

        assert 0 <= bounds.tag < qi
        assert bounds.fixed_width()["r2_bounds"] == [(qi - 1) // 2]

    def test_plaintext_modulus_not_invertible(self):
        """-t sem inverso módulo q_i levanta ModularInverseError."""
        params = BFVParameters(degree=4, plaintext_modulus=6, moduli=[9])

        with pytest.raises(ModularInverseError):
            InputValidationBounds.compute(params)


class TestTag:
    """Testes para a TAG de separação de domínio."""

    def test_tag_depends_on_moduli(self):
        size = 28668
        tag_a = compute_tag(2048, (Q - 1) // 2, [Q], size, Q)
        tag_b = compute_tag(2048, (Q - 1) // 2, [Q + 2], size, Q)
        assert tag_a != tag_b

    def test_tag_depends_on_degree(self):
        tag_a = compute_tag(2048, 5, [Q], 100, Q)
        tag_b = compute_tag(4096, 5, [Q], 100, Q)
        assert tag_a != tag_b

    def test_tag_is_pure(self):
        assert compute_tag(16, 5, [97, 193], 100, 97 * 193) == compute_tag(
            16, 5, [97, 193], 100, 97 * 193
        )


class TestFixedWidth:
    """Testes para a conversão em tipos de largura fixa."""

    def _bounds(self, **overrides):
        values = dict(
            sk=19, e=19, a=48, r1_low=[-10], r1_up=[10], r2=[48],
            moduli=[97], q_mod_t=1, size=100, tag=5,
        )
        values.update(overrides)
        return InputValidationBounds(**values)

    def test_fixed_width_values(self, default_bounds):
        fixed = default_bounds.fixed_width()

        assert fixed["sk_bound"] == 19
        assert fixed["e_bound"] == 19
        assert fixed["a_bound"] == default_bounds.a
        assert fixed["r1_low_bounds"] == default_bounds.r1_low
        assert fixed["r1_up_bounds"] == default_bounds.r1_up
        assert fixed["r2_bounds"] == default_bounds.r2

    def test_r1_low_overflow(self):
        with pytest.raises(ParameterError):
            self._bounds(r1_low=[-(1 << 63) - 1]).fixed_width()

    def test_r2_overflow(self):
        with pytest.raises(ParameterError):
            self._bounds(r2=[1 << 64]).fixed_width()

    def test_negative_unsigned_bound(self):
        with pytest.raises(ParameterError):
            self._bounds(r1_up=[-1]).fixed_width()
