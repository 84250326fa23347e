"""Template matching module - digit templates and their classification."""

from .digit_matcher import DigitTemplate, DigitTemplateMatcher, TemplateSet
from .template_loader import load_all_template_sets, load_exclusion_mask, load_template_set

__all__ = [
    "DigitTemplate",
    "DigitTemplateMatcher",
    "TemplateSet",
    "load_all_template_sets",
    "load_exclusion_mask",
    "load_template_set",
]
