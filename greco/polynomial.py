"""
Aritmética polinomial com coeficientes de precisão arbitrária.

Os polinômios são representados pelos coeficientes em ordem decrescente de grau
(o coeficiente líder vem primeiro), armazenados em arrays numpy de dtype=object
para que cada coeficiente seja um int do Python, sem risco de overflow.

Além das operações de anel (soma, subtração, multiplicação, divisão longa),
o módulo oferece:
- Redução pelo polinômio ciclotômico X^N + 1
- Redução centrada dos coeficientes módulo um inteiro
- Verificação de intervalos nas formas centrada e padrão
"""

import numpy as np
from typing import Iterable, List, Sequence, Tuple, Union

from .exceptions import DivisionByZeroError, InvalidDivisorError, ParameterError


def _as_bigint_array(coefficients: Iterable[int]) -> np.ndarray:
    # int() converte escalares numpy (int64/uint64) para int do Python
    return np.array([int(c) for c in coefficients], dtype=object)


def _div_trunc(a: int, b: int) -> int:
    """Divisão inteira truncada em direção a zero."""
    quotient = abs(a) // abs(b)
    return -quotient if (a < 0) != (b < 0) else quotient


def _nonzero_indices(coeffs: np.ndarray) -> List[int]:
    return [i for i, c in enumerate(coeffs) if c != 0]


class Polynomial:
    """
    Polinômio com coeficientes inteiros em ordem decrescente de grau.

    É um tipo valor: todas as operações devolvem uma nova instância e
    nenhuma delas altera os operandos.

    Attributes:
        coefficients: Cópia da lista de coeficientes (maior grau primeiro)
        degree: Grau formal do polinômio (len(coefficients) - 1)
    """

    def __init__(self, coefficients: Iterable[int]):
        """
        Cria um polinômio a partir dos coeficientes.

        Args:
            coefficients: Coeficientes em ordem decrescente de grau.
                Ex.: [2, 3, 1] representa 2x² + 3x + 1
        """
        self._coeffs = _as_bigint_array(coefficients)

    @classmethod
    def zero(cls, degree: int) -> "Polynomial":
        """Cria o polinômio nulo com degree + 1 coeficientes."""
        return Polynomial([0] * (degree + 1))

    @classmethod
    def constant(cls, constant: int) -> "Polynomial":
        """Cria o polinômio constante."""
        return Polynomial([constant])

    @property
    def coefficients(self) -> List[int]:
        return self._coeffs.tolist()

    @property
    def degree(self) -> int:
        return max(len(self._coeffs) - 1, 0)

    def __len__(self) -> int:
        return len(self._coeffs)

    def copy(self) -> "Polynomial":
        return Polynomial(self._coeffs)

    def is_zero(self) -> bool:
        """Verifica se todos os coeficientes são zero (lista vazia inclusive)."""
        return all(c == 0 for c in self._coeffs)

    def trim_leading_zeros(self) -> "Polynomial":
        """Remove coeficientes líderes nulos, mantendo pelo menos um coeficiente."""
        start = 0
        while start < len(self._coeffs) - 1 and self._coeffs[start] == 0:
            start += 1
        return Polynomial(self._coeffs[start:])

    # === OPERAÇÕES DE ANEL ===
    def add(self, other: "Polynomial") -> "Polynomial":
        """
        Soma dois polinômios alinhando os coeficientes pelo termo constante.

        Args:
            other: Polinômio a ser somado

        Returns:
            Polynomial: Soma com max(len(self), len(other)) coeficientes
        """
        length = max(len(self._coeffs), len(other._coeffs))
        result = np.zeros(length, dtype=object)
        result[length - len(self._coeffs):] += self._coeffs
        result[length - len(other._coeffs):] += other._coeffs
        return Polynomial(result)

    def neg(self) -> "Polynomial":
        return Polynomial(-self._coeffs)

    def sub(self, other: "Polynomial") -> "Polynomial":
        return self.add(other.neg())

    def scalar_mul(self, scalar: int) -> "Polynomial":
        return Polynomial(self._coeffs * int(scalar))

    def mul(self, other: "Polynomial") -> "Polynomial":
        """
        Multiplicação ingênua (convolução) de dois polinômios.

        O resultado sempre tem len(self) + len(other) - 1 coeficientes,
        ou seja, grau deg(self) + deg(other), mesmo quando um dos fatores é nulo.

        Args:
            other: Segundo fator

        Returns:
            Polynomial: Produto self * other
        """
        a, b = self._coeffs, other._coeffs
        if len(a) == 0 or len(b) == 0:
            return Polynomial.zero(0)

        product = np.zeros(len(a) + len(b) - 1, dtype=object)

        # Percorre o fator mais esparso; a convolução é comutativa
        a_support = _nonzero_indices(a)
        b_support = _nonzero_indices(b)
        if len(b_support) < len(a_support):
            a, b = b, a
            a_support = b_support

        for i in a_support:
            product[i : i + len(b)] += b * a[i]

        return Polynomial(product)

    def div(self, divisor: "Polynomial") -> Tuple["Polynomial", "Polynomial"]:
        """
        Divisão longa de polinômios.

        Cada coeficiente do quociente é obtido por divisão inteira truncada
        pelo coeficiente líder do divisor. Coeficientes líderes nulos do resto
        são removidos.

        Args:
            divisor: Polinômio divisor

        Returns:
            Tuple[Polynomial, Polynomial]: (quociente, resto)

        Raises:
            DivisionByZeroError: Se o divisor for o polinômio nulo
            InvalidDivisorError: Se o coeficiente líder do divisor for zero
        """
        if divisor.is_zero():
            raise DivisionByZeroError()

        leading = divisor._coeffs[0]
        if leading == 0:
            raise InvalidDivisorError()

        if self.degree < divisor.degree:
            return Polynomial.zero(0), self.copy()

        quotient = np.zeros(len(self._coeffs) - len(divisor._coeffs) + 1, dtype=object)
        remainder = self._coeffs.copy()

        # Só as posições não nulas do divisor alteram o resto (X^N + 1 tem duas)
        support = np.array(_nonzero_indices(divisor._coeffs), dtype=np.intp)
        divisor_support = divisor._coeffs[support]

        for i in range(len(quotient)):
            coeff = _div_trunc(remainder[i], leading)
            if coeff == 0:
                continue
            quotient[i] = coeff
            remainder[support + i] -= divisor_support * coeff

        start = 0
        while start < len(remainder) and remainder[start] == 0:
            start += 1
        if start == len(remainder):
            return Polynomial(quotient), Polynomial.zero(0)

        return Polynomial(quotient), Polynomial(remainder[start:])

    def reduce_by_cyclotomic(
        self, cyclo: Union["Polynomial", Sequence[int]]
    ) -> "Polynomial":
        """
        Reduz o polinômio módulo o polinômio ciclotômico.

        O resto da divisão é alinhado à direita em exatamente N coeficientes,
        onde N é o grau do ciclotômico.

        Args:
            cyclo: Polinômio ciclotômico (tipicamente X^N + 1) ou seus coeficientes

        Returns:
            Polynomial: Resto com N coeficientes
        """
        if not isinstance(cyclo, Polynomial):
            cyclo = Polynomial(cyclo)

        n = len(cyclo) - 1
        _, remainder = self.div(cyclo)

        out = np.zeros(n, dtype=object)
        rem = remainder._coeffs
        start = max(n - len(rem), 0)
        end = min(start + len(rem), n)
        out[start:end] = rem[: end - start]
        return Polynomial(out)

    def center_modulo(self, modulus: int) -> "Polynomial":
        """
        Reduz cada coeficiente módulo `modulus` na representação centrada.

        Args:
            modulus: Módulo da redução

        Returns:
            Polynomial: Coeficientes no intervalo centrado (ver reduce_and_center)
        """
        return Polynomial(_center_array(self._coeffs, modulus))

    def evaluate(self, x: int) -> int:
        """Avalia o polinômio em x pelo método de Horner."""
        result = 0
        for coeff in self._coeffs:
            result = result * x + coeff
        return int(result)

    # === OPERADORES ===
    def __add__(self, other: "Polynomial") -> "Polynomial":
        return self.add(other)

    def __sub__(self, other: "Polynomial") -> "Polynomial":
        return self.sub(other)

    def __neg__(self) -> "Polynomial":
        return self.neg()

    def __mul__(self, other: Union["Polynomial", int]) -> "Polynomial":
        if isinstance(other, Polynomial):
            return self.mul(other)
        return self.scalar_mul(other)

    def __rmul__(self, other: int) -> "Polynomial":
        return self.scalar_mul(other)

    def __divmod__(self, divisor: "Polynomial") -> Tuple["Polynomial", "Polynomial"]:
        return self.div(divisor)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.coefficients == other.coefficients

    def __repr__(self) -> str:
        coeffs = self.coefficients
        if len(coeffs) > 8:
            shown = ", ".join(str(c) for c in coeffs[:4])
            return f"Polynomial([{shown}, ...] grau={self.degree})"
        return f"Polynomial({coeffs})"


class CyclotomicModulus(Polynomial):
    """
    Polinômio de redução X^N + 1 do anel R = Z[X]/(X^N + 1).

    Construído uma vez por grau N e tratado como constante.
    """

    def __init__(self, degree: int):
        if degree < 1:
            raise ParameterError(f"Grau do ciclotômico deve ser positivo: {degree}")
        coeffs = [0] * (degree + 1)
        coeffs[0] = 1  # termo X^N
        coeffs[degree] = 1  # termo constante
        super().__init__(coeffs)
        self.ring_degree = degree


# === REDUÇÃO E CENTRALIZAÇÃO ===
def _check_modulus(modulus: int) -> int:
    modulus = int(modulus)
    if modulus < 1:
        raise ParameterError(f"Módulo deve ser positivo: {modulus}")
    return modulus


def _center_array(coeffs: np.ndarray, modulus: int) -> np.ndarray:
    modulus = _check_modulus(modulus)
    half_modulus = modulus // 2
    reduced = coeffs % modulus
    if modulus % 2 == 1:
        mask = reduced > half_modulus
    else:
        mask = reduced >= half_modulus
    return np.where(mask, reduced - modulus, reduced)


def reduce_and_center(x: int, modulus: int) -> int:
    """
    Reduz um inteiro módulo `modulus` e o leva à representação centrada.

    - Módulo ímpar m: resultado em [-(m-1)/2, (m-1)/2]
    - Módulo par m: resultado em [-m/2, m/2 - 1] (assimétrico em uma unidade)

    Args:
        x: Valor a ser reduzido
        modulus: Módulo positivo

    Returns:
        int: Representante centrado de x
    """
    modulus = _check_modulus(modulus)
    half_modulus = modulus // 2
    r = int(x) % modulus
    if modulus % 2 == 1:
        if r > half_modulus:
            r -= modulus
    elif r >= half_modulus:
        r -= modulus
    return r


def reduce_and_center_coefficients(coefficients: Sequence[int], modulus: int) -> List[int]:
    """Aplica reduce_and_center a cada coeficiente."""
    return _center_array(_as_bigint_array(coefficients), modulus).tolist()


def reduce_in_ring(
    coefficients: Sequence[int], cyclo: Union[Polynomial, Sequence[int]], modulus: int
) -> List[int]:
    """
    Reduz um polinômio no anel R_q = Z_q[X]/(X^N + 1).

    Duas reduções são aplicadas:
    1. Redução polinomial pelo ciclotômico (grau < N)
    2. Redução centrada dos coeficientes módulo q

    Args:
        coefficients: Coeficientes em ordem decrescente de grau
        cyclo: Polinômio ciclotômico
        modulus: Módulo dos coeficientes

    Returns:
        List[int]: N coeficientes centrados
    """
    reduced = Polynomial(coefficients).reduce_by_cyclotomic(cyclo)
    return reduced.center_modulo(modulus).coefficients


def reduce_coefficients(coefficients: Sequence[int], p: int) -> List[int]:
    """Leva cada coeficiente para [0, p) somando p antes de reduzir."""
    p = int(p)
    return [(int(c) + p) % p for c in coefficients]


def reduce_coefficients_2d(matrix: Sequence[Sequence[int]], p: int) -> List[List[int]]:
    return [reduce_coefficients(row, p) for row in matrix]


# === VERIFICAÇÃO DE INTERVALOS ===
def range_check_centered(vec: Sequence[int], lower_bound: int, upper_bound: int) -> bool:
    """Verifica se todos os coeficientes estão em [lower_bound, upper_bound]."""
    return all(lower_bound <= c <= upper_bound for c in vec)


def range_check_standard_2bounds(
    vec: Sequence[int], low_bound: int, up_bound: int, modulus: int
) -> bool:
    """
    Verifica intervalos assimétricos na forma padrão (não centrada).

    Cada coeficiente deve estar em [0, up_bound] (valores positivos) ou em
    [modulus + low_bound, modulus) (valores negativos representados módulo p).

    Args:
        vec: Coeficientes em [0, modulus)
        low_bound: Limite inferior (tipicamente negativo)
        up_bound: Limite superior
        modulus: Módulo da representação

    Returns:
        bool: True se todos os coeficientes respeitam os limites
    """
    return all(
        (0 <= c <= up_bound) or (modulus + low_bound <= c < modulus) for c in vec
    )


def range_check_standard(vec: Sequence[int], bound: int, modulus: int) -> bool:
    """Caso simétrico de range_check_standard_2bounds: [0, bound] ∪ [modulus - bound, modulus)."""
    return range_check_standard_2bounds(vec, -bound, bound, modulus)
