"""
Verificação dos vetores de validação contra os limites derivados.

É o portão de aceitação do gerador: nada é serializado sem que todos os
componentes passem pelas verificações nas formas centrada e padrão.
Qualquer violação indica um defeito na decomposição e levanta
ConstraintViolation.
"""

import logging
from typing import Optional, Sequence

from .exceptions import ConstraintViolation, InvariantViolation
from .polynomial import range_check_centered, range_check_standard_2bounds

logger = logging.getLogger(__name__)


def _first_outside(values: Sequence[int], check) -> Optional[int]:
    for index, value in enumerate(values):
        if not check([value]):
            return index
    return None


def _require_centered(name, values, lower, upper, component=None):
    if range_check_centered(values, lower, upper):
        return
    index = _first_outside(values, lambda v: range_check_centered(v, lower, upper))
    raise ConstraintViolation(
        name, lower, upper, "centered",
        component=component, index=index, value=values[index],
    )


def _require_standard(name, values, lower, upper, p, component=None):
    if range_check_standard_2bounds(values, lower, upper, p):
        return
    index = _first_outside(
        values, lambda v: range_check_standard_2bounds(v, lower, upper, p)
    )
    raise ConstraintViolation(
        name, lower, upper, "standard",
        component=component, index=index, value=values[index],
    )


def check_constraints(bounds, vecs, p: int):
    """
    Verifica os vetores de validação de entrada contra os limites.

    Restrições verificadas:
    - sk e e em [-⌈6σ⌋, ⌈6σ⌋] (formas centrada e padrão)
    - pk0_i e pk1_i em [-(q_i-1)/2, (q_i-1)/2] (formas centrada e padrão)
    - ct0_i e ct1_i em [-(q_i-1)/2, (q_i-1)/2]
    - r2_i em [-(q_i-1)/2, (q_i-1)/2] (formas centrada e padrão)
    - r1_i em [r1_low_i, r1_up_i] (formas centrada e padrão)

    Args:
        bounds: InputValidationBounds derivado dos mesmos parâmetros
        vecs: InputValidationVectors na representação centrada
        p: Módulo do sistema de provas usado na forma padrão

    Raises:
        ConstraintViolation: Se algum coeficiente estiver fora do limite
        InvariantViolation: Se o número de componentes não coincidir
    """
    if len(vecs.r2is) != len(bounds.r2):
        raise InvariantViolation(
            "Número de componentes RNS dos vetores difere dos limites",
            expected=len(bounds.r2),
            actual=len(vecs.r2is),
        )

    vecs_std = vecs.standard_form(p)

    _require_centered("sk", vecs.sk, -bounds.sk, bounds.sk)
    _require_centered("e", vecs.e, -bounds.e, bounds.e)
    _require_standard("sk", vecs_std.sk, -bounds.sk, bounds.sk, p)
    _require_standard("e", vecs_std.e, -bounds.e, bounds.e, p)

    for i, qi_bound in enumerate(bounds.r2):
        for name in ("pk0is", "pk1is"):
            _require_centered(name, getattr(vecs, name)[i], -qi_bound, qi_bound, i)
            _require_standard(name, getattr(vecs_std, name)[i], -qi_bound, qi_bound, p, i)

        _require_centered("ct0is", vecs.ct0is[i], -qi_bound, qi_bound, i)
        _require_centered("ct1is", vecs.ct1is[i], -qi_bound, qi_bound, i)

        _require_centered("r2is", vecs.r2is[i], -qi_bound, qi_bound, i)
        _require_standard("r2is", vecs_std.r2is[i], -qi_bound, qi_bound, p, i)

        low, up = bounds.r1_low[i], bounds.r1_up[i]
        _require_centered("r1is", vecs.r1is[i], low, up, i)
        _require_standard("r1is", vecs_std.r1is[i], low, up, p, i)

        logger.debug("Componente %d dentro dos limites", i)

    logger.info("Restrições verificadas para %d componente(s)", len(bounds.r2))
