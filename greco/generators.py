"""
Geradores dos arquivos consumidos pelo circuito Noir.

- constants.nr: declarações globais com N, L, limites, módulos, SIZE e TAG
- Prover.toml: vetores de validação como elementos de corpo em strings decimais
"""

import logging
import os

from .bounds import InputValidationBounds
from .constants import BFVParameters
from .vectors import InputValidationVectors

logger = logging.getLogger(__name__)


def _format_array(values) -> str:
    return "[" + ", ".join(str(v) for v in values) + "]"


def _format_strings(values) -> str:
    return "[" + ", ".join(f'"{v}"' for v in values) + "]"


class NoirGenerator:
    """Gera o arquivo de constantes constants.nr."""

    FILENAME = "constants.nr"

    def generate(
        self,
        bounds: InputValidationBounds,
        params: BFVParameters,
        output_dir: str,
    ) -> str:
        """
        Escreve constants.nr em output_dir.

        Args:
            bounds: Limites derivados dos parâmetros
            params: Parâmetros BFV
            output_dir: Diretório de saída (criado se não existir)

        Returns:
            str: Caminho do arquivo gerado

        Raises:
            ParameterError: Se algum limite não couber no tipo de largura fixa
        """
        fixed = bounds.fixed_width()
        num_moduli = bounds.num_moduli

        os.makedirs(output_dir, exist_ok=True)
        output_path = os.path.join(output_dir, self.FILENAME)

        with open(output_path, "w") as f:
            f.write(
                "/// `N` is the degree of the cyclotomic polynomial defining the ring "
                "`Rq = Zq[X]/(X^N + 1)`.\n"
            )
            f.write(f"pub global N: u32 = {params.degree};\n")
            f.write("/// `L` is the dimension size of the polynomials.\n")
            f.write(f"pub global L: u32 = {num_moduli};\n")
            f.write(
                "/// The coefficients of the polynomial `e` should exist in the interval "
                "`[-E_BOUND, E_BOUND]`.\n"
            )
            f.write(f"pub global E_BOUND: u64 = {fixed['e_bound']};\n")
            f.write(
                "/// The coefficients of the polynomial `sk` should exist in the interval "
                "`[-SK_BOUND, SK_BOUND]`.\n"
            )
            f.write(f"pub global SK_BOUND: u64 = {fixed['sk_bound']};\n")
            f.write(
                "/// The coefficients of the polynomials `r1is` should exist in the interval "
                "`[R1_LOW_BOUNDS[i], R1_UP_BOUNDS[i]]`.\n"
            )
            f.write(
                f"pub global R1_LOW_BOUNDS: [i64; {num_moduli}] = "
                f"{_format_array(fixed['r1_low_bounds'])};\n"
            )
            f.write(
                f"pub global R1_UP_BOUNDS: [u64; {num_moduli}] = "
                f"{_format_array(fixed['r1_up_bounds'])};\n"
            )
            f.write(
                "/// The coefficients of the polynomials `r2is` should exist in the interval "
                "`[-R2_BOUNDS[i], R2_BOUNDS[i]]` where `R2_BOUNDS[i]` is equal to `(qi-1)/2`.\n"
            )
            f.write(
                f"pub global R2_BOUNDS: [u64; {num_moduli}] = "
                f"{_format_array(fixed['r2_bounds'])};\n"
            )
            f.write(
                "/// List of scalars `qis` such that `qis[i]` is the modulus of the i-th "
                "CRT basis of `q` (ciphertext space modulus).\n"
            )
            f.write(
                f"pub global QIS: [Field; {num_moduli}] = {_format_array(bounds.moduli)};\n"
            )
            f.write("/// Size of the payload.\n")
            f.write(f"pub global SIZE: u32 = {bounds.size};\n")
            f.write("/// Constant value for the SAFE sponge algorithm.\n")
            f.write(f"pub global TAG: Field = {bounds.tag};\n")

        logger.info("Constantes Noir escritas em %s", output_path)
        return output_path


class TomlGenerator:
    """Gera o arquivo de entradas do provador Prover.toml."""

    FILENAME = "Prover.toml"

    def generate(self, vectors: InputValidationVectors, output_dir: str) -> str:
        """
        Escreve Prover.toml em output_dir.

        Os vetores devem estar na forma padrão (ver
        InputValidationVectors.standard_form); os coeficientes são escritos
        como strings decimais.

        Args:
            vectors: Vetores de validação na forma padrão
            output_dir: Diretório de saída (criado se não existir)

        Returns:
            str: Caminho do arquivo gerado
        """
        data = vectors.to_json()

        os.makedirs(output_dir, exist_ok=True)
        output_path = os.path.join(output_dir, self.FILENAME)

        with open(output_path, "w") as f:
            for name in ("ct0is", "ct1is", "pk0is", "pk1is", "r1is", "r2is"):
                for row in data[name]:
                    f.write(f"[[{name}]]\n")
                    f.write(f"coefficients = {_format_strings(row)}\n\n")

            for name in ("sk", "e"):
                f.write(f"[{name}]\n")
                f.write(f"coefficients = {_format_strings(data[name])}\n\n")

        logger.info("Entradas do provador escritas em %s", output_path)
        return output_path
