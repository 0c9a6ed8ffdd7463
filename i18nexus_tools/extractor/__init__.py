from .core import ExtractorConfig, TranslationExtractor, run_translation_extractor
from .keys import ExtractedKey

__all__ = [
    "ExtractorConfig",
    "TranslationExtractor",
    "run_translation_extractor",
    "ExtractedKey",
]
