"""
Error types for pdffit.

Every violation of the pdf algebra (incompatible variables, unknown names,
wrong argument counts, malformed postfix programs) is a PdfError carrying a
message. There is no finer taxonomy.
"""


class PdfError(Exception):
    """Raised when a pdf expression or model is used inconsistently."""


class EnvelopeWarning(UserWarning):
    """A pdf value exceeded the accept-reject envelope during generation."""
