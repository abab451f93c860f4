"""Bank-specific parser refinements.

Each refinement extends LineParser and overrides only what's different
for that statement layout (date anchor, noise phrases, amount shape).
"""

from .amex import AmexParser
from .hang_seng import HangSengParser

__all__ = ["AmexParser", "HangSengParser"]
