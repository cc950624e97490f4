"""
Fábrica de instâncias de criptografia BFV para alimentar o gerador Greco.

Produz instâncias bem formadas (sk, e, pk, ct) em RNS, com a mesma forma que
o esquema de criptografia entrega ao gerador. Não é uma implementação
completa do BFV: a chave pública é amostrada de forma uniforme e o
ciphertext satisfaz ct0_i = [pk0_i · sk + e]_{R_qi}, ct1_i = pk1_i.

Toda amostragem recebe um numpy.random.Generator explícito.
"""

import logging
from typing import List, Optional, Tuple

import numpy as np

from .constants import BFVParameters
from .polynomial import Polynomial, reduce_coefficients, reduce_in_ring

logger = logging.getLogger(__name__)

# Linhas RNS em grau crescente, uma por módulo
RNSPoly = List[List[int]]


class EncryptionData:
    """
    Instância de criptografia em representação RNS.

    Attributes:
        ciphertext: Par (ct0, ct1), cada um com uma linha por módulo
        public_key: Par (pk0, pk1), cada um com uma linha por módulo
        sk_rns: Chave secreta reduzida por módulo
        e_rns: Erro reduzido por módulo
        params: Parâmetros BFV usados na amostragem
    """

    def __init__(
        self,
        ciphertext: Tuple[RNSPoly, RNSPoly],
        public_key: Tuple[RNSPoly, RNSPoly],
        sk_rns: RNSPoly,
        e_rns: RNSPoly,
        params: BFVParameters,
    ):
        self.ciphertext = ciphertext
        self.public_key = public_key
        self.sk_rns = sk_rns
        self.e_rns = e_rns
        self.params = params

    def __repr__(self) -> str:
        return (
            f"EncryptionData(N={self.params.degree}, "
            f"L={self.params.num_moduli})"
        )


class BFVEncryptionFactory:
    """
    Fábrica para amostragem de instâncias de criptografia BFV.

    Distribuições utilizadas:
    - DG(σ²): Gaussiana discreta arredondada, truncada em [-⌈6σ⌉, ⌈6σ⌉]
      (chave secreta e erro)
    - U(R_qi): Coeficientes uniformes em [0, q_i) (chave pública)
    """

    def __init__(self, params: Optional[BFVParameters] = None):
        """
        Inicializa a fábrica com os parâmetros do anel.

        Args:
            params: Parâmetros BFV (usa padrão se None)
        """
        if params is None:
            params = BFVParameters.default_config()

        self.params = params

    def generate_gaussian_poly(self, rng: np.random.Generator) -> List[int]:
        """
        Amostra N coeficientes da gaussiana discreta com a variância configurada.

        Args:
            rng: Gerador de números aleatórios

        Returns:
            List[int]: Coeficientes em grau crescente, limitados por ⌈6σ⌉
        """
        sigma = np.sqrt(self.params.variance)
        bound = self.params.gaussian_bound()
        coeffs = np.round(rng.normal(0, sigma, size=self.params.degree))
        coeffs = np.clip(coeffs, -bound, bound).astype(np.int64)
        return [int(c) for c in coeffs]

    def generate_uniform_poly(self, rng: np.random.Generator, q_bound: int) -> List[int]:
        """
        Amostra N coeficientes uniformes em [0, q_bound), com q_bound < 2^64.

        Args:
            rng: Gerador de números aleatórios
            q_bound: Limite superior exclusivo

        Returns:
            List[int]: Coeficientes em grau crescente
        """
        coeffs = rng.integers(0, q_bound, size=self.params.degree, dtype=np.uint64)
        return [int(c) for c in coeffs]

    def generate_sample_encryption(
        self, rng: Optional[np.random.Generator] = None
    ) -> EncryptionData:
        """
        Gera uma instância de criptografia bem formada.

        Para cada módulo q_i:
        - pk0_i, pk1_i ← U(R_qi)
        - ct0_i = [pk0_i · sk + e]_{R_qi}
        - ct1_i = pk1_i

        Args:
            rng: Gerador de números aleatórios (default_rng(0) se None)

        Returns:
            EncryptionData: Instância com todos os polinômios em RNS
        """
        if rng is None:
            rng = np.random.default_rng(0)

        params = self.params
        cyclo = params.get_cyclotomic_modulus()

        sk = self.generate_gaussian_poly(rng)
        e = self.generate_gaussian_poly(rng)

        # Polinômio guarda o coeficiente líder primeiro
        sk_poly = Polynomial(reversed(sk))
        e_poly = Polynomial(reversed(e))

        ct0_rows, ct1_rows = [], []
        pk0_rows, pk1_rows = [], []
        sk_rns, e_rns = [], []

        for i, qi in enumerate(params.moduli):
            logger.debug("Amostrando componente %d (q=%d)", i, qi)

            pk0 = self.generate_uniform_poly(rng, qi)
            pk1 = self.generate_uniform_poly(rng, qi)

            ct0_hat = Polynomial(reversed(pk0)) * sk_poly + e_poly
            ct0 = reduce_coefficients(reduce_in_ring(ct0_hat.coefficients, cyclo, qi), qi)

            ct0_rows.append(ct0[::-1])
            ct1_rows.append(list(pk1))
            pk0_rows.append(pk0)
            pk1_rows.append(pk1)
            sk_rns.append(reduce_coefficients(sk, qi))
            e_rns.append(reduce_coefficients(e, qi))

        logger.info("Instância de criptografia amostrada com %d módulo(s)", params.num_moduli)

        return EncryptionData(
            ciphertext=(ct0_rows, ct1_rows),
            public_key=(pk0_rows, pk1_rows),
            sk_rns=sk_rns,
            e_rns=e_rns,
            params=params,
        )


def create_encryption_factory(
    params: Optional[BFVParameters] = None,
) -> BFVEncryptionFactory:
    """
    Função de conveniência para criar uma fábrica de instâncias.

    Args:
        params: Parâmetros BFV (usa padrão se None)

    Returns:
        BFVEncryptionFactory: Nova instância da fábrica
    """
    return BFVEncryptionFactory(params)
