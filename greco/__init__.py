# Pacote Greco: vetores e limites de validação de entrada BFV

from .bounds import InputValidationBounds, compute_tag, plaintext_bounds
from .constants import ZKP_MODULUS, BFVParameters
from .constraints import check_constraints
from .encryption_factory import (
    BFVEncryptionFactory,
    EncryptionData,
    create_encryption_factory,
)
from .exceptions import (
    ConstraintViolation,
    DivisionByZeroError,
    GrecoError,
    InvalidDivisorError,
    InvariantViolation,
    ModularInverseError,
    ParameterError,
    PolynomialError,
)
from .generators import NoirGenerator, TomlGenerator
from .polynomial import CyclotomicModulus, Polynomial, reduce_and_center
from .vectors import InputValidationVectors

__all__ = [
    "BFVEncryptionFactory",
    "BFVParameters",
    "ConstraintViolation",
    "CyclotomicModulus",
    "DivisionByZeroError",
    "EncryptionData",
    "GrecoError",
    "InputValidationBounds",
    "InputValidationVectors",
    "InvalidDivisorError",
    "InvariantViolation",
    "ModularInverseError",
    "NoirGenerator",
    "ParameterError",
    "Polynomial",
    "PolynomialError",
    "TomlGenerator",
    "ZKP_MODULUS",
    "check_constraints",
    "compute_tag",
    "create_encryption_factory",
    "plaintext_bounds",
    "reduce_and_center",
]
