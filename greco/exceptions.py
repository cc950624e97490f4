"""
Hierarquia de exceções do gerador Greco.

Três categorias de falha:
- Erros de parâmetro (configuração inválida, nível inexistente)
- Erros de pré-condição aritmética (divisão por zero, inverso modular inexistente)
- Violações de invariante (defeito na decomposição ou nos limites)
"""


class GrecoError(Exception):
    """Classe base de todos os erros do pacote."""


class ParameterError(GrecoError, ValueError):
    """Parâmetros do anel inválidos ou insuficientes para o nível pedido."""


class PolynomialError(GrecoError, ArithmeticError):
    """Falha de pré-condição em uma operação polinomial."""


class DivisionByZeroError(PolynomialError, ZeroDivisionError):
    """Divisão pelo polinômio nulo."""

    def __init__(self, message: str = "Divisão pelo polinômio nulo"):
        super().__init__(message)


class InvalidDivisorError(PolynomialError, ValueError):
    """Divisor com coeficiente líder igual a zero."""

    def __init__(
        self, message: str = "Coeficiente líder do divisor não pode ser zero"
    ):
        super().__init__(message)


class ModularInverseError(GrecoError, ArithmeticError):
    """Inverso modular inexistente."""

    def __init__(self, value: int, modulus: int):
        self.value = value
        self.modulus = modulus
        super().__init__(
            f"Não existe inverso de {value} módulo {modulus}"
        )


class InvariantViolation(GrecoError, RuntimeError):
    """
    Violação de uma invariante algébrica da decomposição.

    Indica um defeito no cálculo (não uma entrada maliciosa) e deve
    interromper a computação corrente.

    Attributes:
        component: Índice do componente RNS onde a falha ocorreu (None se global)
        expected: Valor esperado (ou resumo dele)
        actual: Valor obtido (ou resumo dele)
    """

    def __init__(self, message: str, component=None, expected=None, actual=None):
        self.component = component
        self.expected = expected
        self.actual = actual

        details = message
        if component is not None:
            details = f"[componente {component}] {details}"
        if expected is not None or actual is not None:
            details = f"{details} (esperado: {expected}, obtido: {actual})"
        super().__init__(details)


class ConstraintViolation(InvariantViolation):
    """
    Coeficiente de um vetor fora do intervalo derivado dos parâmetros.

    Attributes:
        name: Nome do vetor verificado (ex.: "sk", "r1is")
        lower: Limite inferior do intervalo
        upper: Limite superior do intervalo
        representation: "centered" ou "standard"
    """

    def __init__(
        self,
        name: str,
        lower: int,
        upper: int,
        representation: str,
        component=None,
        index=None,
        value=None,
    ):
        self.name = name
        self.lower = lower
        self.upper = upper
        self.representation = representation
        self.index = index
        super().__init__(
            f"Vetor '{name}' fora do limite na forma {representation} "
            f"(coeficiente {index})",
            component=component,
            expected=f"[{lower}, {upper}]",
            actual=value,
        )
