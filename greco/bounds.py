"""
Cálculo dos limites de validação de entrada para as provas Greco.

Os limites dependem apenas dos parâmetros do anel (não das testemunhas) e
determinam os intervalos que o circuito aritmético verifica para cada
coeficiente: chave secreta, erro, componentes do ciphertext e as testemunhas
r1_i e r2_i de cada módulo RNS.
"""

import logging
from typing import List, Sequence, Tuple

from blake3 import blake3

from .constants import U64_MAX, BFVParameters
from .constraints import check_constraints
from .exceptions import ModularInverseError, ParameterError
from .polynomial import reduce_and_center

logger = logging.getLogger(__name__)

I64_MIN = -(1 << 63)
I64_MAX = (1 << 63) - 1


def plaintext_bounds(t: int) -> Tuple[int, int]:
    """
    Calcula o intervalo [ptxt_low, ptxt_high] dos coeficientes do plaintext centrado.

    Para t par o intervalo é assimétrico: o limite inferior não é apenas o
    simétrico do superior, e ptxt_high - ptxt_low = t. Para t ímpar,
    ptxt_high - ptxt_low = t - 1.

    Para t par o intervalo tem uma unidade a mais que a centralização módulo t
    ([-t/2, t/2 - 1]): ptxt_low = -t/2 - 1.

    Args:
        t: Módulo do plaintext

    Returns:
        Tuple[int, int]: (ptxt_low, ptxt_high)
    """
    ptxt_high = (t - 1) // 2
    if t % 2 == 1:
        ptxt_low = -(t - 1) // 2
    else:
        ptxt_low = -(t - 1) // 2 - 1
    return ptxt_low, ptxt_high


def modular_inverse(value: int, modulus: int) -> int:
    """
    Inverso de value módulo modulus, em [0, modulus).

    Raises:
        ModularInverseError: Se value não for invertível
    """
    try:
        return pow(value, -1, modulus)
    except ValueError as exc:
        raise ModularInverseError(value, modulus) from exc


def _minimal_le_bytes(value: int) -> bytes:
    # Representação little-endian mínima (zero vira b"\x00")
    return value.to_bytes(max(1, (value.bit_length() + 7) // 8), "little")


def compute_tag(
    degree: int, a_bound: int, moduli: Sequence[int], size: int, modulus: int
) -> int:
    """
    Calcula a TAG que amarra o arquivo de constantes ao conjunto de parâmetros.

    O hash BLAKE3 recebe, em ordem: o grau (u64 little-endian), o limite de `a`
    (u64 LE), os módulos concatenados (u64 LE cada), o tamanho do payload e 2L
    (ambos em bytes LE mínimos). O digest é interpretado em little-endian e
    reduzido módulo q = ∏ q_i.

    Args:
        degree: Grau N do anel
        a_bound: Limite (q_1 - 1)/2 do primeiro módulo
        moduli: Base RNS
        size: Tamanho do payload (10N - 4)·L + 4N
        modulus: Produto dos módulos

    Returns:
        int: TAG em [0, modulus)
    """
    hasher = blake3()
    hasher.update(degree.to_bytes(8, "little"))
    hasher.update(a_bound.to_bytes(8, "little"))
    hasher.update(b"".join(qi.to_bytes(8, "little") for qi in moduli))
    hasher.update(_minimal_le_bytes(size))
    hasher.update(_minimal_le_bytes(2 * len(moduli)))
    return int.from_bytes(hasher.digest(), "little") % modulus


class InputValidationBounds:
    """
    Limites dos vetores de validação de entrada.

    Derivados uma vez a partir dos parâmetros BFV e imutáveis daí em diante.

    Attributes:
        sk: Limite simétrico dos coeficientes da chave secreta
        e: Limite simétrico dos coeficientes do erro
        a: Limite do polinômio público (igual a r2[0])
        r1_low: Limites inferiores de r1_i, um por módulo
        r1_up: Limites superiores de r1_i, um por módulo
        r2: Limites simétricos (q_i - 1)/2 de r2_i, um por módulo
        moduli: Base RNS do nível
        q_mod_t: q mod t na representação centrada
        size: Tamanho do payload do circuito
        tag: TAG de separação de domínio
    """

    def __init__(
        self,
        sk: int,
        e: int,
        a: int,
        r1_low: List[int],
        r1_up: List[int],
        r2: List[int],
        moduli: List[int],
        q_mod_t: int,
        size: int,
        tag: int,
    ):
        self.sk = sk
        self.e = e
        self.a = a
        self.r1_low = list(r1_low)
        self.r1_up = list(r1_up)
        self.r2 = list(r2)
        self.moduli = list(moduli)
        self.q_mod_t = q_mod_t
        self.size = size
        self.tag = tag

    @property
    def num_moduli(self) -> int:
        return len(self.moduli)

    @classmethod
    def compute(cls, params: BFVParameters, level: int = 0) -> "InputValidationBounds":
        """
        Calcula os limites de validação a partir dos parâmetros BFV.

        Para cada módulo q_i:
        - r2_i ∈ [-(q_i-1)/2, (q_i-1)/2]
        - k0_i = (-t)^(-1) mod q_i
        - r1_i ∈ [⌊(ptxt_low·|k0_i| - ((N·B+2)·(q_i-1)/2 + B)) / q_i⌋,
                  ⌊(ptxt_high·|k0_i| + (N·B+2)·(q_i-1)/2 + B) / q_i⌋]

        onde B = ⌈6σ⌉ é usado tanto para a chave secreta quanto para o erro
        (a chave secreta é amostrada da gaussiana discreta, não ternária).

        Args:
            params: Parâmetros BFV
            level: Nível do contexto, que determina quantos módulos são usados

        Returns:
            InputValidationBounds: Limites derivados

        Raises:
            ParameterError: Se o nível não existir nos parâmetros
            ModularInverseError: Se -t não for invertível módulo algum q_i
        """
        moduli = params.moduli_at_level(level)
        q = params.modulus_at_level(level)
        n = params.degree
        t = params.plaintext_modulus

        q_mod_t = reduce_and_center(q, t)

        gauss_bound = params.gaussian_bound()
        sk_bound = gauss_bound
        e_bound = gauss_bound

        ptxt_low, ptxt_high = plaintext_bounds(t)

        r1_low: List[int] = []
        r1_up: List[int] = []
        r2: List[int] = []

        for i, qi in enumerate(moduli):
            qi_bound = (qi - 1) // 2

            # k0_i mapeia a contribuição do plaintext para o componente i
            k0qi = modular_inverse((-t) % qi, qi)

            noise_term = (n * gauss_bound + 2) * qi_bound + gauss_bound

            r2.append(qi_bound)
            r1_low.append((ptxt_low * abs(k0qi) - noise_term) // qi)
            r1_up.append((ptxt_high * abs(k0qi) + noise_term) // qi)

            logger.debug(
                "Limites do componente %d (q=%d): r1=[%d, %d], r2=%d",
                i, qi, r1_low[i], r1_up[i], qi_bound,
            )

        # Limite de a coincide com o de r2 no primeiro módulo
        a_bound = r2[0]

        size = (10 * n - 4) * len(moduli) + 4 * n
        tag = compute_tag(n, a_bound, moduli, size, q)

        logger.info("Limites calculados para %d módulo(s), N=%d", len(moduli), n)

        return cls(
            sk=sk_bound,
            e=e_bound,
            a=a_bound,
            r1_low=r1_low,
            r1_up=r1_up,
            r2=r2,
            moduli=moduli,
            q_mod_t=q_mod_t,
            size=size,
            tag=tag,
        )

    def check_constraints(self, vecs, p: int):
        """
        Verifica os vetores de validação contra estes limites.

        Atalho para constraints.check_constraints(self, vecs, p).

        Raises:
            ConstraintViolation: Se algum coeficiente estiver fora do limite
        """
        check_constraints(self, vecs, p)

    def fixed_width(self) -> dict:
        """
        Converte os limites para os tipos de largura fixa do arquivo de constantes.

        Returns:
            dict: sk_bound, e_bound, a_bound e r2_bounds como u64,
                r1_low_bounds como i64 e r1_up_bounds como u64

        Raises:
            ParameterError: Se algum limite não couber no tipo de destino
        """

        def as_u64(name, value):
            if not 0 <= value <= U64_MAX:
                raise ParameterError(f"Limite {name}={value} não cabe em u64")
            return value

        def as_i64(name, value):
            if not I64_MIN <= value <= I64_MAX:
                raise ParameterError(f"Limite {name}={value} não cabe em i64")
            return value

        return {
            "sk_bound": as_u64("sk", self.sk),
            "e_bound": as_u64("e", self.e),
            "a_bound": as_u64("a", self.a),
            "r1_low_bounds": [as_i64("r1_low", b) for b in self.r1_low],
            "r1_up_bounds": [as_u64("r1_up", b) for b in self.r1_up],
            "r2_bounds": [as_u64("r2", b) for b in self.r2],
        }

    def __eq__(self, other) -> bool:
        if not isinstance(other, InputValidationBounds):
            return NotImplemented
        return vars(self) == vars(other)

    def __repr__(self) -> str:
        return (
            f"InputValidationBounds(L={self.num_moduli}, sk={self.sk}, e={self.e}, "
            f"r2={self.r2}, r1_low={self.r1_low}, r1_up={self.r1_up}, tag={self.tag})"
        )
