"""
Ponto de entrada do gerador Greco.

Executa o pipeline completo: amostra uma instância de criptografia, calcula
os vetores de validação e os limites, verifica as restrições e escreve
constants.nr e (opcionalmente) Prover.toml.

Uso:
    python -m greco.main -d 2048 -t 1032193 -q 18014398492704769 -o output
"""

import argparse
import logging
import sys
from typing import List, Optional

import numpy as np

from .bounds import InputValidationBounds
from .constants import ZKP_MODULUS, BFVParameters
from .encryption_factory import create_encryption_factory
from .exceptions import GrecoError
from .generators import NoirGenerator, TomlGenerator
from .vectors import InputValidationVectors

logger = logging.getLogger(__name__)


class GeneratorConfig:
    """
    Configuração de saída do gerador.

    Attributes:
        output_dir: Diretório onde os arquivos são escritos
        generate_toml: Se Prover.toml deve ser gerado
        max_workers: Threads para o cálculo por componente (None = padrão)
    """

    def __init__(
        self,
        output_dir: str = "output",
        generate_toml: bool = True,
        max_workers: Optional[int] = None,
    ):
        self.output_dir = output_dir
        self.generate_toml = generate_toml
        self.max_workers = max_workers


class GenerationResults:
    """
    Resultado de uma execução do gerador.

    Attributes:
        bounds: Limites derivados
        vectors: Vetores de validação na representação centrada
        noir_file: Caminho de constants.nr
        toml_file: Caminho de Prover.toml (None se não gerado)
    """

    def __init__(
        self,
        bounds: InputValidationBounds,
        vectors: InputValidationVectors,
        noir_file: str,
        toml_file: Optional[str] = None,
    ):
        self.bounds = bounds
        self.vectors = vectors
        self.noir_file = noir_file
        self.toml_file = toml_file


def generate_all_outputs(
    params: BFVParameters,
    generator_config: Optional[GeneratorConfig] = None,
    rng: Optional[np.random.Generator] = None,
) -> GenerationResults:
    """
    Gera todos os artefatos para um conjunto de parâmetros.

    Args:
        params: Parâmetros BFV
        generator_config: Configuração de saída (usa padrão se None)
        rng: Gerador de números aleatórios para a amostragem (default_rng(0) se None)

    Returns:
        GenerationResults: Limites, vetores e caminhos dos arquivos

    Raises:
        GrecoError: Se qualquer etapa falhar
    """
    if generator_config is None:
        generator_config = GeneratorConfig()

    factory = create_encryption_factory(params)
    encryption = factory.generate_sample_encryption(rng)

    vectors = InputValidationVectors.compute(
        encryption.sk_rns,
        encryption.e_rns,
        encryption.ciphertext,
        encryption.public_key,
        params,
        max_workers=generator_config.max_workers,
    )
    bounds = InputValidationBounds.compute(params)

    bounds.check_constraints(vectors, ZKP_MODULUS)

    noir_file = NoirGenerator().generate(bounds, params, generator_config.output_dir)

    toml_file = None
    if generator_config.generate_toml:
        toml_file = TomlGenerator().generate(
            vectors.standard_form(ZKP_MODULUS), generator_config.output_dir
        )

    logger.info("Geração concluída em %s", generator_config.output_dir)
    return GenerationResults(bounds, vectors, noir_file, toml_file)


def _parse_moduli(value: str) -> List[int]:
    try:
        return [int(q.strip()) for q in value.split(",")]
    except ValueError:
        raise argparse.ArgumentTypeError(f"Módulos inválidos: {value}")


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Inteiro inválido: {value}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"Valor deve ser positivo: {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="greco-generator",
        description="Gera constantes e entradas do provador para provas Greco",
    )
    parser.add_argument("-d", "--degree", type=_positive_int, default=2048,
                        help="Grau do polinômio ciclotômico (potência de 2)")
    parser.add_argument("-t", "--plaintext-modulus", type=_positive_int, default=1032193,
                        help="Módulo do plaintext")
    parser.add_argument("-q", "--moduli", type=_parse_moduli, default=[18014398492704769],
                        help="Módulos do ciphertext separados por vírgula")
    parser.add_argument("--variance", type=float, default=10,
                        help="Variância da gaussiana discreta")
    parser.add_argument("-o", "--output-dir", default="output",
                        help="Diretório de saída")
    parser.add_argument("--no-toml", action="store_true",
                        help="Não gera o arquivo Prover.toml")
    parser.add_argument("--seed", type=int, default=0,
                        help="Semente do gerador de números aleatórios")
    parser.add_argument("--workers", type=_positive_int, default=None,
                        help="Número de threads para o cálculo por componente")
    parser.add_argument("--verbose", action="store_true",
                        help="Mostra o log de progresso")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO)

    print("=== GERADOR GRECO ===")

    try:
        params = BFVParameters(
            degree=args.degree,
            plaintext_modulus=args.plaintext_modulus,
            moduli=args.moduli,
            variance=args.variance,
        )
        params.print_parameters_summary()
        print(f"Diretório de saída: {args.output_dir}")
        print(f"Gerar Prover.toml: {not args.no_toml}")

        generator_config = GeneratorConfig(
            output_dir=args.output_dir,
            generate_toml=not args.no_toml,
            max_workers=args.workers,
        )
        results = generate_all_outputs(
            params, generator_config, rng=np.random.default_rng(args.seed)
        )
    except (GrecoError, OSError) as exc:
        print(f"Erro: {exc}", file=sys.stderr)
        return 1

    print("\nArquivos gerados:")
    print(f"- Constantes Noir: {results.noir_file}")
    if results.toml_file is not None:
        print(f"- Prover TOML: {results.toml_file}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
