"""
Kinematics helpers for three-body decays.

Units: any consistent mass unit (GeV or MeV), c = 1.
All functions accept scalars or numpy arrays.
"""

from __future__ import annotations
import numpy as np


# -----------------------------
# Källén function
# -----------------------------
def kallen(x, y, z):
    """Källén triangle function λ(x, y, z)."""
    return x * x + y * y + z * z - 2.0 * (x * y + x * z + y * z)


# -----------------------------
# Two-body breakup momentum
# -----------------------------
def breakup_momentum(msq_parent, m_a, m_b):
    """
    Momentum of A (or B) in the rest frame of a parent of squared mass
    `msq_parent` decaying to A + B. Zero below threshold.
    """
    msq_parent = np.asarray(msq_parent, dtype=float)
    lam = np.maximum(kallen(msq_parent, m_a * m_a, m_b * m_b), 0.0)
    with np.errstate(divide="ignore", invalid="ignore"):
        q = np.sqrt(lam) / (2.0 * np.sqrt(msq_parent))
    return np.where(msq_parent > 0.0, q, 0.0)


# -----------------------------
# Dalitz boundary
# -----------------------------
def msq23_limits(msq12, m_mother, m1, m2, m3):
    """
    Allowed (min, max) of m23² at fixed m12², evaluated in the (12) rest frame.

    Returns NaN where m12² lies outside its own kinematic range. At the
    endpoints of that range both limits coincide.
    """
    msq12 = np.asarray(msq12, dtype=float)
    with np.errstate(divide="ignore", invalid="ignore"):
        m12 = np.sqrt(msq12)
        e2 = (msq12 - m1 * m1 + m2 * m2) / (2.0 * m12)
        e3 = (m_mother * m_mother - msq12 - m3 * m3) / (2.0 * m12)
        # rounding at the endpoints can leave E² - m² slightly negative
        p2 = np.sqrt(np.maximum(e2 * e2 - m2 * m2, 0.0))
        p3 = np.sqrt(np.maximum(e3 * e3 - m3 * m3, 0.0))
    lower = (e2 + e3) ** 2 - (p2 + p3) ** 2
    upper = (e2 + e3) ** 2 - (p2 - p3) ** 2

    allowed = (msq12 >= (m1 + m2) ** 2) & (msq12 <= (m_mother - m3) ** 2)
    return np.where(allowed, lower, np.nan), np.where(allowed, upper, np.nan)
