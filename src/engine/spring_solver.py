"""
Spring Solver: closed-form spring trajectories.

Pure functions of (config, initial B, target A, elapsed t). Nothing here
allocates per frame or looks at anything beyond the four scalars and the
config coefficients, so the solver can run from any context.

Strategies:

  EXPONENTIAL (canonical)
    bounce > 0:   (A·e^(a·t) + B·e^(-a·t)) · e^(-c·t)
    bounce <= 0:  (A·t + B) · e^(-c·t)

  DAMPED_COSINE
    bounce > 0:   (A - B) · e^(-ζ·t) · cos(ω·t) + B
                  ζ = c / (2·√a),  ω = √a
    bounce <= 0:  same non-oscillatory decay as EXPONENTIAL

  where a = stiffness and c = damping.

These are visual approximations, not integrated physics. The oscillatory
exponential form grows when stiffness > damping; exponents are clamped so
the result stays finite instead of overflowing.
"""

from __future__ import annotations

import math
from typing import Callable, Dict, List, Tuple, Union

from models.enums import LogCategory, Regime, SolverStrategy
from models.errors import UnknownStrategyError
from models.spring_config import SpringConfig
from utils.enum_helper import EnumHelper
from utils.logger import get_category_logger

log = get_category_logger(LogCategory.SOLVER)

# Well below the math.exp overflow point (~709) so scaled results stay finite
MAX_EXPONENT = 500.0

SolverFn = Callable[[SpringConfig, float, float, float], float]


def _exp(x: float) -> float:
    return math.exp(min(x, MAX_EXPONENT))


def regime_for(bounce: float) -> Regime:
    """Oscillatory for positive bounce, otherwise non-oscillatory"""
    return Regime.OSCILLATORY if bounce > 0 else Regime.NON_OSCILLATORY


# ------------------------------------------------------------
# Formulas
# ------------------------------------------------------------

def exponential_oscillation(target: float, initial: float, a: float, c: float, t: float) -> float:
    # Combined exponents keep A·e^(a·t)·e^(-c·t) from overflowing before the decay applies
    return target * _exp((a - c) * t) + initial * _exp(-(a + c) * t)


def critical_decay(target: float, initial: float, c: float, t: float) -> float:
    return (target * t + initial) * _exp(-c * t)


def damped_cosine(target: float, initial: float, a: float, c: float, t: float) -> float:
    natural_frequency = math.sqrt(a)
    damping_ratio = c / (2 * natural_frequency)
    return (target - initial) * _exp(-damping_ratio * t) * math.cos(natural_frequency * t) + initial


# ------------------------------------------------------------
# Strategies
# ------------------------------------------------------------

def _solve_exponential(config: SpringConfig, initial: float, target: float, t: float) -> float:
    if regime_for(config.bounce) is Regime.OSCILLATORY:
        return exponential_oscillation(target, initial, config.stiffness, config.damping, t)
    return critical_decay(target, initial, config.damping, t)


def _solve_damped_cosine(config: SpringConfig, initial: float, target: float, t: float) -> float:
    if regime_for(config.bounce) is Regime.OSCILLATORY:
        return damped_cosine(target, initial, config.stiffness, config.damping, t)
    return critical_decay(target, initial, config.damping, t)


SOLVERS: Dict[SolverStrategy, SolverFn] = {
    SolverStrategy.EXPONENTIAL: _solve_exponential,
    SolverStrategy.DAMPED_COSINE: _solve_damped_cosine,
}


def get_solver(strategy: Union[SolverStrategy, str]) -> SolverFn:
    """
    Look up a solver by enum member or (case-insensitive) name.

    Raises:
        UnknownStrategyError: If no such strategy exists
    """
    if isinstance(strategy, str):
        try:
            strategy = EnumHelper.from_string(SolverStrategy, strategy)
        except ValueError:
            raise UnknownStrategyError(strategy) from None
    try:
        return SOLVERS[strategy]
    except KeyError:
        raise UnknownStrategyError(strategy) from None


def evaluate(config: SpringConfig, initial: float, target: float, elapsed: float) -> float:
    """
    Spring position at elapsed seconds.

    Args:
        config: Validated spring parameters (stiffness > 0 guaranteed)
        initial: Start value B
        target: Target value A
        elapsed: Seconds since the (last) start, >= 0

    Returns:
        Current value, finite for any realistic target
    """
    return SOLVERS[config.solver](config, initial, target, elapsed)


def sample(
    config: SpringConfig,
    initial: float,
    target: float,
    fps: int = 60,
) -> List[Tuple[float, float]]:
    """
    Sample the trajectory over [0, duration] at a fixed frame rate.

    The last sample is always taken exactly at duration.
    """
    fps = max(1, fps)
    frame_time = 1.0 / fps
    frames = max(1, int(math.ceil(config.duration * fps)))
    points = []
    for i in range(frames):
        t = i * frame_time
        if t >= config.duration:
            break
        points.append((t, evaluate(config, initial, target, t)))
    points.append((config.duration, evaluate(config, initial, target, config.duration)))
    log.debug("Sampled trajectory", solver=EnumHelper.to_string(config.solver, lowercase=True), samples=len(points))
    return points
