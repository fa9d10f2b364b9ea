# MIT License
"""Economic utility functions for the carbon project engine.

This module defines the discounted cash flow metrics reported for every
credit-producing project: net present value (NPV), internal rate of
return (IRR), return on investment (ROI) and the break-even year.  The
functions are deliberately lightweight and only depend on plain
sequences of yearly cash flows.

Rates are percentages (8.0 for 8%) throughout, as entered by users.
"""
from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np

IRR_LOWER = -0.99
IRR_UPPER = 1.0
IRR_GUESS = 0.1
IRR_MAX_ITER = 100
IRR_TOLERANCE = 0.001


def discount_factors(n_years: int, rate: float) -> np.ndarray:
    """Discount factor of each year, the first year discounted one full period."""
    return 1.0 / (1.0 + rate / 100.0) ** np.arange(1, n_years + 1)


def npv(cashflows: Sequence[float], rate: float) -> float:
    """Compute the net present value of a series of cashflows.

    Parameters
    ----------
    cashflows:
        Annual cashflows where the first element is the cashflow of
        year 1.
    rate:
        Discount rate in percent (e.g. 8 for 8%).

    Returns
    -------
    float
        Net present value of the cashflows.
    """
    return float(sum(cf / (1.0 + rate / 100.0) ** (i + 1) for i, cf in enumerate(cashflows)))


def discounted_cashflows(cashflows: Sequence[float], rate: float) -> List[float]:
    factors = discount_factors(len(cashflows), rate)
    return [float(cf * f) for cf, f in zip(cashflows, factors)]


def irr(cashflows: Sequence[float], guess: float = IRR_GUESS) -> Optional[float]:
    """Approximate the internal rate of return of a series of cashflows.

    A bisection search over [-99%, 100%] starting at ``guess`` looks for
    the rate whose NPV is within 0.001 of zero.  The search stops after
    100 iterations and then returns its last guess even if it has not
    converged.

    Parameters
    ----------
    cashflows:
        Annual cashflows where the first element is the cashflow of
        year 1.
    guess:
        Initial rate (as a decimal).

    Returns
    -------
    float or None
        Approximate IRR in percent, or ``None`` when there are fewer
        than two cashflows or they never change sign.
    """
    flows = list(cashflows)
    if len(flows) <= 1:
        return None
    if all(cf >= 0 for cf in flows) or all(cf <= 0 for cf in flows):
        return None
    lo, hi = IRR_LOWER, IRR_UPPER
    for _ in range(IRR_MAX_ITER):
        value = sum(cf / (1.0 + guess) ** (i + 1) for i, cf in enumerate(flows))
        if abs(value) < IRR_TOLERANCE:
            return guess * 100.0
        # positive NPV means the root lies at a higher rate
        if value > 0:
            lo = guess
        else:
            hi = guess
        guess = (lo + hi) / 2.0
    return guess * 100.0


def roi(net_profit: float, total_cost: float) -> float:
    """Return on investment in percent; 0 when nothing was spent."""
    return net_profit / total_cost * 100.0 if total_cost > 0 else 0.0


def break_even_year(years: Sequence[int], cumulative: Sequence[float]) -> Optional[int]:
    """First year whose cumulative cashflow is non-negative.

    Returns ``None`` if the project never breaks even over the horizon.
    """
    for year, cum in zip(years, cumulative):
        if cum >= 0.0:
            return int(year)
    return None

