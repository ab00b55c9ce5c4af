class DictionaryLookupError(Exception):
    """Base class for failures while serving a dictionary lookup."""


class InputError(DictionaryLookupError):
    """The request did not carry any text to look up."""


class TransientServiceError(DictionaryLookupError):
    """The model call failed in a way that is worth retrying."""


class EmptyResponseError(TransientServiceError):
    pass


class ParseError(DictionaryLookupError):
    """The cleaned model reply is not valid JSON."""


class SchemaError(DictionaryLookupError):
    """The model reply is valid JSON but not a dictionary entry."""
