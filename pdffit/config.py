"""
Numerical defaults for pdffit.

Each value can be overridden from the environment, and every constructor
that uses one also accepts an explicit argument.
"""
import os

# Bins per axis of the midpoint grid used for normalisation and projections.
N_BINS = int(os.getenv("PDFFIT_N_BINS", 400))

# Accept-reject attempts before generate() gives up on an event.
MAX_ATTEMPTS = int(os.getenv("PDFFIT_MAX_ATTEMPTS", 10000))

# Factor applied to the grid maximum when the envelope is derived.
ENVELOPE_SAFETY = float(os.getenv("PDFFIT_ENVELOPE_SAFETY", 1.2))
