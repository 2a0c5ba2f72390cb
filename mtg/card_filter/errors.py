"""Exception types raised by the card filter loaders and writers."""


class CardFilterError(Exception):
    """Base class for card filter errors."""


class CardListError(CardFilterError, ValueError):
    """The query list could not be parsed into any valid query."""


class CatalogError(CardFilterError, ValueError):
    """The catalog file is not a JSON array of card objects."""


class OutputError(CardFilterError, OSError):
    """An output artifact could not be written."""
