from .lookup import LanguageEnum, LookupRequest, TranslationEntry, LookupResult, ErrorResponse

__all__ = ['LanguageEnum', 'LookupRequest', 'TranslationEntry', 'LookupResult', 'ErrorResponse']
