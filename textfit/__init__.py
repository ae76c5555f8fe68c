from .fragment import Box, Fragment, Fragments, Word
from .first_fit import wrap_first_fit
from .optimal_fit import line_penalty, optimal_fit_breaks, wrap_optimal_fit
from .penalties import Penalties
from .smawk import OnlineConcaveMinima, concave_minima, online_column_minima
from .text import TextColumn, TextFragmenter, TextFragments, fill, wrap

__all__ = [
    "Box",
    "Fragment",
    "Fragments",
    "Word",
    "Penalties",
    "wrap_optimal_fit",
    "optimal_fit_breaks",
    "line_penalty",
    "wrap_first_fit",
    "concave_minima",
    "OnlineConcaveMinima",
    "online_column_minima",
    "TextFragmenter",
    "TextFragments",
    "TextColumn",
    "wrap",
    "fill",
]
