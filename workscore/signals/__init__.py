"""Signal normalization: raw source records to per-factor observations."""

from workscore.signals.normalizer import (
    SignalBag,
    SignalNormalizer,
    invert_ordinal,
    rescale_ordinal,
)
from workscore.signals.taxonomy import (
    classify_venue,
    normalize_tag,
    tag_importance,
    venue_prior,
)

__all__ = [
    # Normalizer
    "SignalBag",
    "SignalNormalizer",
    "rescale_ordinal",
    "invert_ordinal",
    # Taxonomy
    "normalize_tag",
    "tag_importance",
    "classify_venue",
    "venue_prior",
]
