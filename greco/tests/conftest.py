"""
Fixtures compartilhadas pelos testes do gerador Greco.

As instâncias com N=2048 são caras; por isso são criadas uma única vez
por sessão.
"""

import numpy as np
import pytest

from greco.bounds import InputValidationBounds
from greco.constants import BFVParameters
from greco.encryption_factory import create_encryption_factory
from greco.vectors import InputValidationVectors


def _compute_vectors(params, encryption, **kwargs):
    return InputValidationVectors.compute(
        encryption.sk_rns,
        encryption.e_rns,
        encryption.ciphertext,
        encryption.public_key,
        params,
        **kwargs,
    )


@pytest.fixture(scope="session")
def default_params():
    return BFVParameters.default_config()


@pytest.fixture(scope="session")
def default_encryption(default_params):
    factory = create_encryption_factory(default_params)
    return factory.generate_sample_encryption(np.random.default_rng(2024))


@pytest.fixture(scope="session")
def default_vectors(default_params, default_encryption):
    return _compute_vectors(default_params, default_encryption)


@pytest.fixture(scope="session")
def default_bounds(default_params):
    return InputValidationBounds.compute(default_params)


@pytest.fixture(scope="session")
def small_params():
    return BFVParameters.small_config()


@pytest.fixture(scope="session")
def small_encryption(small_params):
    factory = create_encryption_factory(small_params)
    return factory.generate_sample_encryption(np.random.default_rng(7))


@pytest.fixture(scope="session")
def small_vectors(small_params, small_encryption):
    return _compute_vectors(small_params, small_encryption)


@pytest.fixture(scope="session")
def small_bounds(small_params):
    return InputValidationBounds.compute(small_params)
