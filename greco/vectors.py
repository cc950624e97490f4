"""
Vetores de validação de entrada para as provas Greco.

Para cada módulo q_i da base RNS, a equação do ciphertext

    ct0_i = pk0_i · sk + e + r1_i · q_i + r2_i · (X^N + 1)

é resolvida sobre os inteiros, produzindo as testemunhas r1_i e r2_i.
Os componentes são independentes e calculados em paralelo; os resultados
são tuplas indexadas combinadas depois que todas as tarefas terminam.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple

from .constants import BFVParameters
from .exceptions import InvariantViolation, ParameterError
from .polynomial import (
    CyclotomicModulus,
    Polynomial,
    reduce_and_center_coefficients,
    reduce_coefficients,
    reduce_coefficients_2d,
    reduce_in_ring,
)

logger = logging.getLogger(__name__)

# Linhas RNS: uma linha de N coeficientes por módulo, grau crescente
RNSRows = Sequence[Sequence[int]]


def _centered_row(row: Sequence[int], modulus: int) -> List[int]:
    """Converte uma linha RNS para inteiros centrados em ordem decrescente de grau."""
    return reduce_and_center_coefficients([int(c) for c in reversed(row)], modulus)


def _first_difference(expected: Sequence[int], actual: Sequence[int]):
    for index, (a, b) in enumerate(zip(expected, actual)):
        if a != b:
            return index, a, b
    return min(len(expected), len(actual)), len(expected), len(actual)


def _require_equal(description: str, expected, actual, component: int):
    expected = list(expected)
    actual = list(actual)
    if expected != actual:
        index, exp, act = _first_difference(expected, actual)
        raise InvariantViolation(
            f"{description} (primeira diferença no coeficiente {index})",
            component=component,
            expected=exp,
            actual=act,
        )


def _require_degree(name: str, poly: Polynomial, degree: int, component: int):
    if poly.degree != degree:
        raise InvariantViolation(
            f"Grau inesperado de {name}",
            component=component,
            expected=degree,
            actual=poly.degree,
        )


def _require_zero_remainder(name: str, remainder: Polynomial, component: int):
    if not remainder.is_zero():
        raise InvariantViolation(
            f"Resto não nulo na divisão de {name}",
            component=component,
            expected=0,
            actual=remainder,
        )


def _compute_component(
    i: int,
    qi: int,
    ct0_row: Sequence[int],
    ct1_row: Sequence[int],
    pk0_row: Sequence[int],
    pk1_row: Sequence[int],
    sk: List[int],
    e: List[int],
    cyclo: CyclotomicModulus,
    n: int,
):
    logger.debug("Calculando componente %d (q=%d)", i, qi)

    ct0i = _centered_row(ct0_row, qi)
    ct1i = _centered_row(ct1_row, qi)
    pk0i = _centered_row(pk0_row, qi)
    pk1i = _centered_row(pk1_row, qi)

    # ct0i_hat = pk0i * sk + e, grau 2(N-1)
    ct0i_hat = Polynomial(pk0i) * Polynomial(sk) + Polynomial(e)
    _require_degree("ct0i_hat", ct0i_hat, 2 * (n - 1), i)

    # ct0i_hat reduzido em R_qi deve coincidir com ct0i
    ct0i_hat_mod_rqi = reduce_in_ring(ct0i_hat.coefficients, cyclo, qi)
    _require_equal("ct0_i difere de ct0_i_hat em R_qi", ct0i, ct0i_hat_mod_rqi, i)

    # Numerador de r2i: ct0i - ct0i_hat, reduzido e centrado em Z_qi
    ct0i_minus_ct0i_hat = Polynomial(ct0i) - ct0i_hat
    _require_degree("ct0i - ct0i_hat", ct0i_minus_ct0i_hat, 2 * (n - 1), i)
    ct0i_minus_ct0i_hat_mod_zqi = ct0i_minus_ct0i_hat.center_modulo(qi)

    # r2i = (ct0i - ct0i_hat) / (X^N + 1) em Z_qi, resto vazio
    r2i, r2i_rem = ct0i_minus_ct0i_hat_mod_zqi.div(cyclo)
    _require_zero_remainder("r2i", r2i_rem, i)
    _require_degree("r2i", r2i, n - 2, i)

    r2i_times_cyclo = r2i * cyclo
    _require_equal(
        "(ct0i - ct0i_hat) difere de r2i * ciclotômico em Z_qi",
        ct0i_minus_ct0i_hat_mod_zqi.coefficients,
        r2i_times_cyclo.center_modulo(qi).coefficients,
        i,
    )
    _require_degree("r2i * ciclotômico", r2i_times_cyclo, 2 * (n - 1), i)

    # r1i = (ct0i - ct0i_hat - r2i * cyclo) / qi, resto vazio
    r1i_num = ct0i_minus_ct0i_hat - r2i_times_cyclo
    _require_degree("numerador de r1i", r1i_num, 2 * (n - 1), i)

    r1i, r1i_rem = r1i_num.div(Polynomial.constant(qi))
    _require_zero_remainder("r1i", r1i_rem, i)
    _require_degree("r1i", r1i, 2 * (n - 1), i)

    r1i_times_qi = r1i.scalar_mul(qi)
    _require_equal("r1i * qi difere do numerador", r1i_num.coefficients, r1i_times_qi.coefficients, i)

    # ct0i = ct0i_hat + r1i * qi + r2i * cyclo sobre os inteiros
    ct0i_calculated = (ct0i_hat + r1i_times_qi + r2i_times_cyclo).trim_leading_zeros()
    _require_equal(
        "Identidade ct0i = ct0i_hat + r1i*qi + r2i*ciclotômico não vale",
        Polynomial(ct0i).trim_leading_zeros().coefficients,
        ct0i_calculated.coefficients,
        i,
    )

    # ct1i = pk1i (o segundo componente não carrega testemunha)
    _require_equal("ct1_i difere de pk1_i", pk1i, ct1i, i)

    return i, r2i.coefficients, r1i.coefficients, ct0i, ct1i, pk0i, pk1i


class InputValidationVectors:
    """
    Vetores centrados necessários para a prova de validação de entrada.

    Os campos por componente são listas (uma por módulo q_i) de listas de
    coeficientes em ordem decrescente de grau; sk e e são compartilhados.

    Attributes:
        pk0is, pk1is: Componentes da chave pública por módulo (N coeficientes)
        ct0is, ct1is: Componentes do ciphertext por módulo (N coeficientes)
        r1is: Testemunhas r1_i (2N - 1 coeficientes)
        r2is: Testemunhas r2_i (N - 1 coeficientes)
        sk: Chave secreta (N coeficientes)
        e: Polinômio de erro (N coeficientes)
    """

    PER_COMPONENT_FIELDS = ("pk0is", "pk1is", "ct0is", "ct1is", "r1is", "r2is")
    SHARED_FIELDS = ("sk", "e")

    def __init__(
        self,
        pk0is: List[List[int]],
        pk1is: List[List[int]],
        ct0is: List[List[int]],
        ct1is: List[List[int]],
        r1is: List[List[int]],
        r2is: List[List[int]],
        sk: List[int],
        e: List[int],
    ):
        self.pk0is = pk0is
        self.pk1is = pk1is
        self.ct0is = ct0is
        self.ct1is = ct1is
        self.r1is = r1is
        self.r2is = r2is
        self.sk = sk
        self.e = e

    @classmethod
    def zeros(cls, num_moduli: int, degree: int) -> "InputValidationVectors":
        """
        Cria vetores nulos com as dimensões corretas.

        Args:
            num_moduli: Número de módulos (tamanho das listas externas)
            degree: Grau N do anel

        Returns:
            InputValidationVectors: Todos os coeficientes iguais a zero
        """

        def rows(length):
            return [[0] * length for _ in range(num_moduli)]

        return cls(
            pk0is=rows(degree),
            pk1is=rows(degree),
            ct0is=rows(degree),
            ct1is=rows(degree),
            r1is=rows(2 * (degree - 1) + 1),
            r2is=rows(degree - 1),
            sk=[0] * degree,
            e=[0] * degree,
        )

    @property
    def num_moduli(self) -> int:
        return len(self.r2is)

    def standard_form(self, p: int) -> "InputValidationVectors":
        """
        Leva todos os coeficientes para [0, p) sem centralizar.

        A instância original não é alterada; ela continua sendo a
        representação canônica usada nas verificações de limites.

        Args:
            p: Módulo do sistema de provas

        Returns:
            InputValidationVectors: Cópia com coeficientes em [0, p)
        """
        return InputValidationVectors(
            pk0is=reduce_coefficients_2d(self.pk0is, p),
            pk1is=reduce_coefficients_2d(self.pk1is, p),
            ct0is=reduce_coefficients_2d(self.ct0is, p),
            ct1is=reduce_coefficients_2d(self.ct1is, p),
            r1is=reduce_coefficients_2d(self.r1is, p),
            r2is=reduce_coefficients_2d(self.r2is, p),
            sk=reduce_coefficients(self.sk, p),
            e=reduce_coefficients(self.e, p),
        )

    def to_json(self) -> dict:
        """Serializa os vetores como listas de strings decimais."""
        result = {}
        for name in self.PER_COMPONENT_FIELDS:
            result[name] = [[str(c) for c in row] for row in getattr(self, name)]
        for name in self.SHARED_FIELDS:
            result[name] = [str(c) for c in getattr(self, name)]
        return result

    def check_correct_lengths(self, num_moduli: int, degree: int) -> bool:
        """
        Verifica se todos os vetores têm as dimensões esperadas.

        Args:
            num_moduli: Número esperado de módulos
            degree: Grau N esperado

        Returns:
            bool: True se todas as dimensões estiverem corretas
        """
        expected_inner = {
            "pk0is": degree,
            "pk1is": degree,
            "ct0is": degree,
            "ct1is": degree,
            "r1is": 2 * (degree - 1) + 1,
            "r2is": degree - 1,
        }
        for name, inner in expected_inner.items():
            rows = getattr(self, name)
            if len(rows) != num_moduli or any(len(row) != inner for row in rows):
                return False
        return len(self.sk) == degree and len(self.e) == degree

    def __eq__(self, other) -> bool:
        if not isinstance(other, InputValidationVectors):
            return NotImplemented
        return vars(self) == vars(other)

    @classmethod
    def compute(
        cls,
        sk_rns: RNSRows,
        e_rns: RNSRows,
        ct: Tuple[RNSRows, RNSRows],
        pk: Tuple[RNSRows, RNSRows],
        params: BFVParameters,
        level: int = 0,
        max_workers: Optional[int] = None,
    ) -> "InputValidationVectors":
        """
        Calcula os vetores de validação centrados de uma instância de criptografia.

        Ver https://eprint.iacr.org/2024/594 para a construção Greco.

        Args:
            sk_rns: Chave secreta em RNS (linhas por módulo, grau crescente)
            e_rns: Polinômio de erro em RNS
            ct: Ciphertext (ct0, ct1), cada um em RNS
            pk: Chave pública (pk0, pk1), cada uma em RNS
            params: Parâmetros BFV
            level: Nível do contexto
            max_workers: Número de threads (None usa o padrão do executor)

        Returns:
            InputValidationVectors: Vetores centrados

        Raises:
            ParameterError: Se o nível não existir ou as entradas tiverem
                dimensões incompatíveis com o contexto
            InvariantViolation: Se alguma identidade da decomposição falhar
        """
        moduli = params.moduli_at_level(level)
        n = params.degree
        num_moduli = len(moduli)

        ct0_rows, ct1_rows = ct
        pk0_rows, pk1_rows = pk
        for name, rows in (
            ("sk", sk_rns),
            ("e", e_rns),
            ("ct0", ct0_rows),
            ("ct1", ct1_rows),
            ("pk0", pk0_rows),
            ("pk1", pk1_rows),
        ):
            if len(rows) < num_moduli or any(len(rows[i]) != n for i in range(num_moduli)):
                raise ParameterError(
                    f"Polinômio {name} deve ter {num_moduli} linhas de {n} coeficientes"
                )

        # sk e e são pequenos: a primeira linha RNS basta
        sk = _centered_row(sk_rns[0], moduli[0])
        e = _centered_row(e_rns[0], moduli[0])

        cyclo = params.get_cyclotomic_modulus()

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [
                executor.submit(
                    _compute_component,
                    i,
                    qi,
                    ct0_rows[i],
                    ct1_rows[i],
                    pk0_rows[i],
                    pk1_rows[i],
                    sk,
                    e,
                    cyclo,
                    n,
                )
                for i, qi in enumerate(moduli)
            ]
            results = [future.result() for future in futures]

        res = cls.zeros(num_moduli, n)
        for i, r2i, r1i, ct0i, ct1i, pk0i, pk1i in results:
            res.r2is[i] = r2i
            res.r1is[i] = r1i
            res.ct0is[i] = ct0i
            res.ct1is[i] = ct1i
            res.pk0is[i] = pk0i
            res.pk1is[i] = pk1i

        res.sk = sk
        res.e = e

        logger.info("Vetores calculados para %d componente(s), N=%d", num_moduli, n)
        return res
