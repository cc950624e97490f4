"""
Parâmetros centralizados do anel BFV usados pelo gerador Greco.

O anel é R_q = Z_q[X]/(X^N + 1), onde q = q_1 · q_2 · ... · q_L é representado
em RNS (Residue Number System) pelos primos q_i.

Configuração padrão:
- N = 2048 (grau do polinômio ciclotômico)
- t = 1032193 (módulo do plaintext)
- q_1 = 18014398492704769 (um único módulo RNS)
- σ² = 10 (variância da gaussiana discreta, limite ⌈6σ⌉ = 19)
"""

import numpy as np
from typing import List, Sequence, Tuple

from .exceptions import ParameterError
from .polynomial import CyclotomicModulus

# Módulo do corpo escalar da BN254, usado pelo sistema de provas
ZKP_MODULUS = (
    21888242871839275222246405745257275088548364400416034343698204186575808495617
)

# Módulos RNS são inteiros de 64 bits sem sinal
U64_MAX = (1 << 64) - 1


class BFVParameters:
    """
    Parâmetros do anel BFV (imutáveis após a construção).

    Attributes:
        degree: Grau N do polinômio ciclotômico (potência de 2)
        plaintext_modulus: Módulo t do espaço de plaintexts
        moduli: Base RNS (q_1, ..., q_L) do espaço de ciphertexts
        variance: Variância σ² da distribuição de erro
    """

    __slots__ = ("_degree", "_plaintext_modulus", "_moduli", "_variance")

    def __init__(
        self,
        degree: int = 2048,
        plaintext_modulus: int = 1032193,
        moduli: Sequence[int] = (18014398492704769,),
        variance: float = 10,
    ):
        """
        Inicializa e valida os parâmetros do anel.

        Args:
            degree: Grau N do anel (potência de 2)
            plaintext_modulus: Módulo t do plaintext
            moduli: Lista ordenada de módulos q_i
            variance: Variância σ² do erro gaussiano

        Raises:
            ParameterError: Se algum parâmetro for inválido
        """
        object.__setattr__(self, "_degree", int(degree))
        object.__setattr__(self, "_plaintext_modulus", int(plaintext_modulus))
        object.__setattr__(self, "_moduli", tuple(int(q) for q in moduli))
        object.__setattr__(self, "_variance", variance)
        self.validate_parameters()

    def __setattr__(self, name, value):
        raise AttributeError("BFVParameters é imutável")

    @property
    def degree(self) -> int:
        return self._degree

    @property
    def plaintext_modulus(self) -> int:
        return self._plaintext_modulus

    @property
    def moduli(self) -> Tuple[int, ...]:
        return self._moduli

    @property
    def variance(self) -> float:
        return self._variance

    @property
    def num_moduli(self) -> int:
        return len(self._moduli)

    def validate_parameters(self):
        """
        Valida os parâmetros do anel.

        Raises:
            ParameterError: Se o grau não for potência de 2, se a base RNS estiver
                vazia ou mal formada (módulo fora de [2, 2^64)), ou se t ou σ²
                forem inválidos
        """
        n = self._degree
        if n < 2 or n & (n - 1) != 0:
            raise ParameterError(f"Grau N deve ser uma potência de 2 maior que 1: {n}")

        if self._plaintext_modulus < 2:
            raise ParameterError(
                f"Módulo do plaintext deve ser maior que 1: {self._plaintext_modulus}"
            )

        if not self._moduli:
            raise ParameterError("Lista de módulos não pode estar vazia")

        for i, qi in enumerate(self._moduli):
            if qi < 2:
                raise ParameterError(f"Módulo q_{i} inválido: {qi}")
            if qi > U64_MAX:
                raise ParameterError(f"Módulo q_{i} não cabe em u64: {qi}")

        if len(set(self._moduli)) != len(self._moduli):
            raise ParameterError(f"Módulos repetidos na base RNS: {list(self._moduli)}")

        if not np.isfinite(self._variance) or self._variance <= 0:
            raise ParameterError(f"Variância deve ser positiva: {self._variance}")

    # === CONTEXTOS POR NÍVEL ===
    def moduli_at_level(self, level: int) -> List[int]:
        """
        Retorna a base RNS do contexto no nível especificado.

        O nível ℓ descarta os ℓ últimos módulos da base, mantendo L - ℓ módulos.

        Args:
            level: Nível do contexto (0 = base completa)

        Returns:
            List[int]: Módulos (q_1, ..., q_{L-ℓ})

        Raises:
            ParameterError: Se o nível não existir
        """
        if level < 0 or level >= len(self._moduli):
            raise ParameterError(
                f"Nível deve estar entre 0 e {len(self._moduli) - 1}, recebido: {level}"
            )
        return list(self._moduli[: len(self._moduli) - level])

    def modulus_at_level(self, level: int) -> int:
        """Retorna q = ∏ q_i do contexto no nível especificado."""
        q = 1
        for qi in self.moduli_at_level(level):
            q *= qi
        return q

    # === ESTRUTURAS ALGÉBRICAS ===
    def get_cyclotomic_modulus(self) -> CyclotomicModulus:
        """
        Retorna o polinômio ciclotômico X^N + 1.

        Returns:
            CyclotomicModulus: O polinômio de redução do anel
        """
        return CyclotomicModulus(self._degree)

    def gaussian_bound(self) -> int:
        """Limite ⌈6·σ⌉ dos coeficientes amostrados da gaussiana discreta."""
        return int(np.ceil(6 * np.sqrt(self._variance)))

    # === CONFIGURAÇÕES ===
    @classmethod
    def default_config(cls):
        """
        Configuração padrão do gerador: N=2048, t=1032193, um módulo de 54 bits.

        Returns:
            BFVParameters: Parâmetros padrão
        """
        return cls()

    @classmethod
    def small_config(cls):
        """
        Configuração reduzida para testes e demonstrações (N=16, dois módulos).

        Returns:
            BFVParameters: Parâmetros de brinquedo, sem segurança
        """
        return cls(
            degree=16,
            plaintext_modulus=1032193,
            moduli=(4503599625535489, 4503599626321921),
            variance=10,
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, BFVParameters):
            return NotImplemented
        return (
            self._degree == other._degree
            and self._plaintext_modulus == other._plaintext_modulus
            and self._moduli == other._moduli
            and self._variance == other._variance
        )

    def __hash__(self) -> int:
        return hash((self._degree, self._plaintext_modulus, self._moduli, self._variance))

    def __repr__(self) -> str:
        return (
            f"BFVParameters(degree={self._degree}, "
            f"plaintext_modulus={self._plaintext_modulus}, "
            f"moduli={list(self._moduli)}, variance={self._variance})"
        )

    def print_parameters_summary(self):
        """
        Imprime um resumo dos parâmetros configurados.
        """
        print("=== PARÂMETROS DO ANEL BFV ===")
        print(f"N (grau): {self._degree}")
        print(f"t (módulo do plaintext): {self._plaintext_modulus}")
        print(f"Base RNS: {len(self._moduli)} módulos")
        for i, qi in enumerate(self._moduli):
            print(f"  - q_{i}: {qi} (~{qi.bit_length()} bits)")
        print(f"Variância do erro (σ²): {self._variance}")
        print(f"Limite gaussiano (⌈6σ⌉): {self.gaussian_bound()}")
        print("=" * 30)
