"""
Testes para o pipeline completo e a interface de linha de comando.
"""

import os

import numpy as np
import pytest

from greco.constants import BFVParameters
from greco.main import GeneratorConfig, build_parser, generate_all_outputs, main

SMALL_ARGS = ["-d", "16", "-q", "4503599625535489,4503599626321921"]


class TestGenerateAllOutputs:
    """Testes para generate_all_outputs."""

    def test_writes_both_files(self, small_params, tmp_path):
        config = GeneratorConfig(output_dir=str(tmp_path))
        results = generate_all_outputs(small_params, config, rng=np.random.default_rng(5))

        assert os.path.exists(results.noir_file)
        assert os.path.exists(results.toml_file)
        assert results.vectors.check_correct_lengths(2, 16)
        assert results.bounds.num_moduli == 2

    def test_without_toml(self, small_params, tmp_path):
        config = GeneratorConfig(output_dir=str(tmp_path), generate_toml=False)
        results = generate_all_outputs(small_params, config)

        assert results.toml_file is None
        assert not os.path.exists(os.path.join(str(tmp_path), "Prover.toml"))

    def test_reproducible(self, small_params, tmp_path):
        first = generate_all_outputs(
            small_params, GeneratorConfig(output_dir=str(tmp_path / "a"), max_workers=1)
        )
        second = generate_all_outputs(
            small_params, GeneratorConfig(output_dir=str(tmp_path / "b"))
        )

        assert first.vectors == second.vectors
        assert open(first.toml_file).read() == open(second.toml_file).read()

    def test_single_modulus(self, tmp_path):
        params = BFVParameters(degree=32, moduli=[4503599625535489])
        results = generate_all_outputs(params, GeneratorConfig(output_dir=str(tmp_path)))

        assert results.bounds.moduli == [4503599625535489]


class TestCommandLine:
    """Testes para a interface de linha de comando."""

    def test_parser_defaults(self):
        args = build_parser().parse_args([])

        assert args.degree == 2048
        assert args.plaintext_modulus == 1032193
        assert args.moduli == [18014398492704769]
        assert args.output_dir == "output"
        assert not args.no_toml

    def test_parse_moduli_list(self):
        args = build_parser().parse_args(["-q", "97, 193,257"])
        assert args.moduli == [97, 193, 257]

    def test_run(self, tmp_path, capsys):
        exit_code = main(SMALL_ARGS + ["-o", str(tmp_path), "--seed", "3"])
        captured = capsys.readouterr()

        assert exit_code == 0
        assert "GERADOR GRECO" in captured.out
        assert "constants.nr" in captured.out
        assert os.path.exists(os.path.join(str(tmp_path), "Prover.toml"))

    def test_no_toml_flag(self, tmp_path, capsys):
        exit_code = main(SMALL_ARGS + ["-o", str(tmp_path), "--no-toml", "--workers", "1"])

        assert exit_code == 0
        assert os.path.exists(os.path.join(str(tmp_path), "constants.nr"))
        assert not os.path.exists(os.path.join(str(tmp_path), "Prover.toml"))

    def test_invalid_degree_exits_with_error(self, tmp_path, capsys):
        """Grau que não é potência de 2 termina com status não nulo, sem traceback."""
        exit_code = main(["-d", "100", "-o", str(tmp_path)])
        captured = capsys.readouterr()

        assert exit_code == 1
        assert "Erro" in captured.err
        assert "Traceback" not in captured.err

    def test_modulus_above_u64_exits_with_error(self, tmp_path, capsys):
        """Módulo acima de 64 bits termina com status 1, sem traceback."""
        exit_code = main(
            ["-d", "16", "-t", "65537", "-q", "18446744073709551629", "-o", str(tmp_path)]
        )
        captured = capsys.readouterr()

        assert exit_code == 1
        assert "u64" in captured.err
        assert "Traceback" not in captured.err
        assert not os.path.exists(os.path.join(str(tmp_path), "constants.nr"))

    def test_invalid_moduli_string(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["-q", "97,abc"])

        assert exc_info.value.code == 2

    def test_non_positive_degree(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["-d", "0"])

        assert exc_info.value.code == 2
